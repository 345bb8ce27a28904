from __future__ import annotations

import pytest

from line_state.state import (
    FINALIZED_MODE,
    DotInvariantError,
    HandlerAction,
    Key,
    Mode,
    PendingCode,
    RawState,
    byte_length,
    ensure_dot,
    split_at_dot,
)


def test_key_normalizes_modifiers() -> None:
    key = Key("a", ("Shift", "ctrl", "CTRL", " "))

    assert key.modifiers == ("ctrl", "shift")
    assert key.token == "ctrl+shift+a"


@pytest.mark.parametrize(
    ("token", "name", "modifiers"),
    [
        ("a", "a", ()),
        ("ctrl+a", "a", ("ctrl",)),
        ("alt+ctrl+Left", "Left", ("alt", "ctrl")),
        ("+", "+", ()),
        ("ctrl++", "+", ("ctrl",)),
    ],
)
def test_key_parse(token: str, name: str, modifiers: tuple[str, ...]) -> None:
    key = Key.parse(token)

    assert key.name == name
    assert key.modifiers == modifiers


def test_zero_key_is_falsy() -> None:
    assert not Key()
    assert Key("Enter")
    assert Key() == Key("", ())


def test_handler_action_zero_value() -> None:
    assert HandlerAction(0) is HandlerAction.NO_ACTION
    assert RawState().next_action is HandlerAction.NO_ACTION


def test_pending_code_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        PendingCode(begin=4, end=2, text="x")
    with pytest.raises(ValueError):
        PendingCode(begin=-1, end=2)


def test_pending_code_is_immutable() -> None:
    pending = PendingCode(0, 2, "ls")

    with pytest.raises(AttributeError):
        pending.text = "cd"  # type: ignore[misc]


def test_raw_state_zero_value() -> None:
    raw = RawState()

    assert raw.mode is None
    assert raw.code == ""
    assert raw.dot == 0
    assert raw.pending is None
    assert raw.notes == []
    assert raw.last_key == Key()


def test_raw_state_copy_detaches_notes() -> None:
    raw = RawState(code="ls", dot=2, notes=["a"])

    copied = raw.copy()
    copied.notes.append("b")

    assert raw.notes == ["a"]
    assert copied == RawState(code="ls", dot=2, notes=["a", "b"])


def test_finalized_mode_satisfies_mode_protocol() -> None:
    assert isinstance(FINALIZED_MODE, Mode)
    assert FINALIZED_MODE.name == "finalized"


def test_byte_length_counts_utf8_bytes() -> None:
    assert byte_length("") == 0
    assert byte_length("ls") == 2
    assert byte_length("日本") == 6


def test_split_at_dot_on_multibyte_boundary() -> None:
    assert split_at_dot("日本語", 3) == ("日", "本語")
    assert split_at_dot("日本語", 9) == ("日本語", "")


def test_ensure_dot_translates_failures() -> None:
    with pytest.raises(DotInvariantError, match="multi-byte"):
        ensure_dot("日本語", 1)
    with pytest.raises(DotInvariantError, match="out of range"):
        ensure_dot("abc", 4)


def test_out_of_range_message_reports_bytes() -> None:
    with pytest.raises(DotInvariantError) as excinfo:
        ensure_dot("日本", 7)

    assert str(excinfo.value) == "Dot 7 out of range for code of 6 bytes"
