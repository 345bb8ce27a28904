"""Value types stored by the shared state container."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Mode(Protocol):
    """Active input mode. Stored and copied, never dispatched on here."""

    name: str


class FinalizedMode:
    """Sentinel mode carried by the terminal snapshot."""

    __slots__ = ()
    name = "finalized"

    def __repr__(self) -> str:
        return "FINALIZED_MODE"


FINALIZED_MODE = FinalizedMode()


class HandlerAction(IntEnum):
    """What a key handler asks the editor loop to do next."""

    NO_ACTION = 0
    COMMIT_LINE = 1
    COMMIT_EOF = 2
    RETURN_ERROR = 3


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = (m.strip().lower() for m in modifiers)
    return tuple(sorted({value for value in values if value}))


@dataclass(frozen=True, slots=True)
class Key:
    """A key event as delivered to handlers; ``Key()`` is the zero value."""

    name: str = ""
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    def __bool__(self) -> bool:
        return bool(self.name)

    @classmethod
    def parse(cls, token: str) -> "Key":
        """Parse ``"ctrl+a"`` style tokens; the last segment is the key name."""

        head, sep, name = token.rpartition("+")
        if sep and not name:
            # "ctrl++" names the plus key itself
            name = "+"
            head = head[:-1] if head.endswith("+") else head
        return cls(name, tuple(head.split("+")) if head else ())

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.name,))
        return self.name


@dataclass(frozen=True, slots=True)
class PendingCode:
    """Proposed replacement of ``code[begin:end]`` (byte offsets) by ``text``."""

    begin: int
    end: int
    text: str = ""

    def __post_init__(self) -> None:
        if self.begin < 0:
            raise ValueError("PendingCode.begin cannot be negative")
        if self.begin > self.end:
            raise ValueError(
                f"PendingCode.begin ({self.begin}) is after end ({self.end})"
            )


@dataclass(slots=True)
class RawState:
    """Unsynchronized editor state; only touched under the container's lock."""

    mode: Optional[Mode] = None
    code: str = ""
    # Cursor, as a UTF-8 byte offset into ``code``.
    dot: int = 0
    pending: Optional[PendingCode] = None
    notes: List[str] = field(default_factory=list)
    last_key: Key = field(default_factory=Key)
    next_action: HandlerAction = HandlerAction.NO_ACTION

    def copy(self) -> "RawState":
        """Shallow copy with a detached notes list."""

        return replace(self, notes=list(self.notes))


__all__ = [
    "FINALIZED_MODE",
    "FinalizedMode",
    "HandlerAction",
    "Key",
    "Mode",
    "PendingCode",
    "RawState",
]
