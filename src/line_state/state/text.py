"""Byte-offset arithmetic over buffer text."""

from __future__ import annotations

from typing import Tuple

ENCODING = "utf-8"


def byte_length(code: str) -> int:
    """Length of ``code`` in UTF-8 bytes, the unit cursor offsets use."""

    if code.isascii():
        return len(code)
    return len(code.encode(ENCODING))


def split_at_dot(code: str, dot: int) -> Tuple[str, str]:
    """Split ``code`` at byte offset ``dot``.

    Raises ``UnicodeDecodeError`` when ``dot`` falls inside a multi-byte
    sequence and ``IndexError`` when it is out of range; callers translate
    both into an invariant violation.
    """

    if code.isascii():
        if not 0 <= dot <= len(code):
            raise IndexError(dot)
        return code[:dot], code[dot:]
    data = code.encode(ENCODING)
    if not 0 <= dot <= len(data):
        raise IndexError(dot)
    return data[:dot].decode(ENCODING), data[dot:].decode(ENCODING)


__all__ = ["ENCODING", "byte_length", "split_at_dot"]
