"""Hands snapshots from a ``State`` to the render side."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from line_state.state import RawState, State

from . import telemetry
from .config import check_interval


@dataclass(slots=True)
class RedrawHooks:
    """Render callbacks; ``render_final`` falls back to ``render``."""

    render: Callable[[RawState], None]
    render_final: Optional[Callable[[RawState], None]] = None


class RedrawPump:
    """Pops a snapshot per redraw cycle and renders the finalized one once."""

    def __init__(
        self,
        state: State,
        hooks: RedrawHooks,
        *,
        interval: Optional[float] = None,
    ) -> None:
        self.state = state
        self.hooks = hooks
        if interval is None:
            interval = state.settings.redraw_interval
        self.interval = check_interval(interval)
        self._logger_name = state.settings.logger_name
        self._finished = False
        self._finish_lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def finished(self) -> bool:
        return self._finished

    def redraw(self) -> RawState:
        snapshot = self.state.pop_for_redraw()
        self.hooks.render(snapshot)
        return snapshot

    def finish(self) -> Optional[RawState]:
        """Render the finalized snapshot; later calls do nothing."""

        with self._finish_lock:
            if self._finished:
                return None
            self._finished = True
        self.stop()
        snapshot = self.state.finalize()
        render = self.hooks.render_final or self.hooks.render
        render(snapshot)
        telemetry.record_event(
            "redraw.finish",
            level="debug",
            data={"notes": len(snapshot.notes)},
            logger_name=self._logger_name,
        )
        return snapshot

    def start(self) -> None:
        if self.running:
            return
        if self._finished:
            raise RuntimeError("RedrawPump already finished")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="line-state-redraw", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.redraw()
            except Exception as exc:
                # Keep the loop alive; the next cycle redraws from fresh state.
                telemetry.record_event(
                    "redraw.error",
                    level="error",
                    data={"error": repr(exc)},
                    logger_name=self._logger_name,
                )


__all__ = ["RedrawHooks", "RedrawPump"]
