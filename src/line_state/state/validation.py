"""Cursor invariant checks."""

from __future__ import annotations

from typing import Tuple

from .text import byte_length, split_at_dot


class DotInvariantError(RuntimeError):
    """The cursor does not sit on a valid boundary of the buffer.

    Signals a caller that wrote ``code``/``dot`` inconsistently; it is not
    meant to be recovered from.
    """

    def __init__(self, message: str, *, code: str, dot: int) -> None:
        super().__init__(message)
        self.code = code
        self.dot = dot


def ensure_dot(code: str, dot: int) -> Tuple[str, str]:
    """Return ``code`` split at ``dot`` or raise ``DotInvariantError``."""

    try:
        return split_at_dot(code, dot)
    except IndexError:
        raise DotInvariantError(
            f"Dot {dot} out of range for code of {byte_length(code)} bytes",
            code=code,
            dot=dot,
        ) from None
    except UnicodeDecodeError as exc:
        raise DotInvariantError(
            f"Dot {dot} splits a multi-byte character", code=code, dot=dot
        ) from exc


__all__ = ["DotInvariantError", "ensure_dot"]
