"""Concurrency-safe container around one ``RawState``."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from line_state.runtime import telemetry
from line_state.runtime.config import StateSettings, load_settings

from .models import FINALIZED_MODE, HandlerAction, Key, Mode, PendingCode, RawState
from .rwlock import ReadWriteLock
from .text import byte_length
from .validation import ensure_dot


class State:
    """Shared editor state for an input actor and a render actor.

    Every method holds the lock for its whole body: reads take the shared
    side, writes the exclusive side. Methods never call each other while
    holding the lock.
    """

    def __init__(
        self,
        raw: Optional[RawState] = None,
        *,
        settings: Optional[StateSettings] = None,
    ) -> None:
        self._raw = raw.copy() if raw is not None else RawState()
        self._lock = ReadWriteLock()
        self.settings = settings or load_settings()

    def pop_for_redraw(self) -> RawState:
        """Return a copy of the state and clear the live notes."""

        with self._lock.write_locked():
            snapshot = self._raw.copy()
            self._raw.notes = []
        if self.settings.trace_transitions:
            self._trace("state.pop_for_redraw", notes=len(snapshot.notes))
        return snapshot

    def finalize(self) -> RawState:
        """Return the snapshot used for the last render of a session."""

        with self._lock.read_locked():
            code = self._raw.code
            snapshot = RawState(
                mode=FINALIZED_MODE,
                code=code,
                dot=byte_length(code),
                pending=None,
                notes=list(self._raw.notes),
                last_key=Key(),
                next_action=HandlerAction.NO_ACTION,
            )
        if self.settings.trace_transitions:
            self._trace("state.finalize", code_bytes=snapshot.dot)
        return snapshot

    def reset(self) -> None:
        with self._lock.write_locked():
            self._raw = RawState()
        if self.settings.trace_transitions:
            self._trace("state.reset")

    def mode(self) -> Optional[Mode]:
        with self._lock.read_locked():
            return self._raw.mode

    def set_mode(self, mode: Optional[Mode]) -> None:
        with self._lock.write_locked():
            self._raw.mode = mode

    def code(self) -> str:
        with self._lock.read_locked():
            return self._raw.code

    def set_code(self, code: str) -> None:
        """Replace the buffer; the caller keeps ``dot`` consistent."""

        with self._lock.write_locked():
            self._raw.code = code

    def dot(self) -> int:
        with self._lock.read_locked():
            return self._raw.dot

    def set_dot(self, dot: int) -> None:
        with self._lock.write_locked():
            self._raw.dot = dot

    def code_and_dot(self) -> Tuple[str, int]:
        with self._lock.read_locked():
            return self._raw.code, self._raw.dot

    def set_code_and_dot(self, code: str, dot: int) -> None:
        with self._lock.write_locked():
            self._raw.code = code
            self._raw.dot = dot

    def code_before_dot(self) -> str:
        """Buffer text before the cursor.

        Raises ``DotInvariantError`` if the cursor is out of range or inside a
        multi-byte character.
        """

        with self._lock.read_locked():
            return ensure_dot(self._raw.code, self._raw.dot)[0]

    def code_after_dot(self) -> str:
        with self._lock.read_locked():
            return ensure_dot(self._raw.code, self._raw.dot)[1]

    def pending(self) -> Optional[PendingCode]:
        with self._lock.read_locked():
            return self._raw.pending

    def set_pending(self, pending: Optional[PendingCode]) -> None:
        with self._lock.write_locked():
            self._raw.pending = pending

    def notes(self) -> Tuple[str, ...]:
        with self._lock.read_locked():
            return tuple(self._raw.notes)

    def add_note(self, note: str) -> None:
        with self._lock.write_locked():
            self._raw.notes.append(note)

    def last_key(self) -> Key:
        with self._lock.read_locked():
            return self._raw.last_key

    def set_last_key(self, key: Key) -> None:
        with self._lock.write_locked():
            self._raw.last_key = key

    def next_action(self) -> HandlerAction:
        with self._lock.read_locked():
            return self._raw.next_action

    def set_next_action(self, action: HandlerAction) -> None:
        with self._lock.write_locked():
            self._raw.next_action = action

    @contextmanager
    def mutate(self, label: str = "mutate") -> Iterator[RawState]:
        """Hold the exclusive lock and yield the live state.

        For edits spanning several fields, e.g. inserting text and moving the
        cursor past it. The yielded object must not be kept after the block;
        calling any other ``State`` method inside the block deadlocks.
        """

        with telemetry.span(
            f"state::{label}",
            logger_name=self.settings.logger_name,
            component="state",
            metadata={"label": label},
        ) as handle:
            with self._lock.write_locked():
                handle.add_metadata("notes", len(self._raw.notes))
                handle.add_metadata("code_bytes", byte_length(self._raw.code))
                yield self._raw

    @contextmanager
    def read(self) -> Iterator[RawState]:
        """Hold the shared lock and yield the live state for reading."""

        with self._lock.read_locked():
            yield self._raw

    def _trace(self, name: str, **data: object) -> None:
        telemetry.record_event(
            name,
            level="debug",
            data=data,
            logger_name=self.settings.logger_name,
        )


__all__ = ["State"]
