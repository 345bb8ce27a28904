"""Environment-driven settings for the state container and redraw pump."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import DEFAULT_LOGGER_NAME, ENV_PREFIX

DEFAULT_REDRAW_INTERVAL = 0.05


def check_interval(value: float) -> float:
    """Return ``value`` if it is a finite, positive number of seconds."""

    if not (math.isfinite(value) and value > 0):
        raise ValueError(
            f"redraw interval must be finite and positive, got {value!r}"
        )
    return value


@dataclass(frozen=True, slots=True)
class StateSettings:
    """Knobs read once when a container or pump is built."""

    trace_transitions: bool = False
    redraw_interval: float = DEFAULT_REDRAW_INTERVAL
    logger_name: str = DEFAULT_LOGGER_NAME

    def __post_init__(self) -> None:
        check_interval(self.redraw_interval)
        if not self.logger_name:
            raise ValueError("logger_name cannot be empty")


def _parse_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off", ""}:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} expects a boolean, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> StateSettings:
    """Build ``StateSettings`` from ``LINE_STATE_*`` variables."""

    env = os.environ if environ is None else environ
    kwargs: dict[str, object] = {}

    raw = env.get(f"{ENV_PREFIX}TRACE_TRANSITIONS")
    if raw is not None:
        kwargs["trace_transitions"] = _parse_flag("TRACE_TRANSITIONS", raw)

    raw = env.get(f"{ENV_PREFIX}REDRAW_INTERVAL")
    if raw is not None:
        try:
            kwargs["redraw_interval"] = float(raw)
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}REDRAW_INTERVAL expects seconds, got {raw!r}"
            ) from exc

    raw = env.get(f"{ENV_PREFIX}LOGGER")
    if raw is not None:
        kwargs["logger_name"] = raw

    return StateSettings(**kwargs)  # type: ignore[arg-type]


__all__ = [
    "DEFAULT_REDRAW_INTERVAL",
    "StateSettings",
    "check_interval",
    "load_settings",
]
