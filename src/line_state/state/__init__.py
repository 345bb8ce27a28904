"""Shared editor state: value types, the lock, and the container."""

from .models import (
    FINALIZED_MODE,
    FinalizedMode,
    HandlerAction,
    Key,
    Mode,
    PendingCode,
    RawState,
)
from .rwlock import ReadWriteLock
from .shared import State
from .text import byte_length, split_at_dot
from .validation import DotInvariantError, ensure_dot

__all__ = [
    "FINALIZED_MODE",
    "FinalizedMode",
    "HandlerAction",
    "Key",
    "Mode",
    "PendingCode",
    "RawState",
    "ReadWriteLock",
    "State",
    "DotInvariantError",
    "byte_length",
    "ensure_dot",
    "split_at_dot",
]
