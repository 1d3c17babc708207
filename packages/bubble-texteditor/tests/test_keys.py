"""Tests for key parsing and keybinding matching."""

from __future__ import annotations

import pytest

from bubble.texteditor.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from bubble.texteditor.keys import is_printable_input, matches_key, parse_key


class TestParseKey:
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1b[C", "right"),
            ("\x1b[D", "left"),
            ("\x1bOA", "up"),
            ("\x1b[3~", "delete"),
            ("\x7f", "backspace"),
            ("\x08", "backspace"),
            ("\r", "enter"),
            ("\t", "tab"),
            ("\x1b", "escape"),
            ("\x06", "ctrl+f"),
            ("\x02", "ctrl+b"),
            ("\x1bb", "alt+b"),
            ("a", "a"),
            ("è", "è"),
        ],
    )
    def test_known_inputs(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_empty_input(self) -> None:
        assert parse_key("") is None

    def test_paste_has_no_key(self) -> None:
        assert parse_key("select") is None

    def test_unknown_escape_sequence(self) -> None:
        assert parse_key("\x1b[99~") is None


class TestMatchesKey:
    def test_backspace_byte_matches_ctrl_h(self) -> None:
        assert matches_key("\x08", "ctrl+h")
        assert matches_key("\x7f", "ctrl+h")

    def test_carriage_return_matches_ctrl_m(self) -> None:
        assert matches_key("\r", "ctrl+m")
        assert matches_key("\r", "enter")

    def test_arrow(self) -> None:
        assert matches_key("\x1b[C", "right")
        assert not matches_key("\x1b[C", "left")

    def test_named_key_case_insensitive(self) -> None:
        assert matches_key("\x1b[5~", "pageUp")


class TestIsPrintableInput:
    def test_text(self) -> None:
        assert is_printable_input("select *")

    def test_multiline_paste(self) -> None:
        assert is_printable_input("a\nb")

    def test_escape_sequence(self) -> None:
        assert not is_printable_input("\x1b[A")

    def test_control_byte(self) -> None:
        assert not is_printable_input("\x06")


class TestKeybindingsManager:
    def test_defaults(self) -> None:
        kb = KeybindingsManager()
        assert kb.matches("\x06", "characterForward")
        assert kb.matches("\x1b[D", "characterBackward")
        assert kb.matches("\x08", "deleteCharacterBackward")
        assert kb.matches("\r", "insertNewline")

    def test_override_replaces_keys(self) -> None:
        kb = KeybindingsManager({"insertNewline": "ctrl+j"})
        assert kb.get_keys("insertNewline") == ["ctrl+j"]
        assert not kb.matches("\x1b[A", "insertNewline")

    def test_set_config_restores_defaults_for_others(self) -> None:
        kb = KeybindingsManager({"lineUp": "ctrl+p"})
        kb.set_config({})
        assert kb.get_keys("lineUp") == [DEFAULT_KEYBINDINGS["lineUp"]]

    def test_managers_are_independent(self) -> None:
        a = KeybindingsManager({"selectConfirm": "enter"})
        b = KeybindingsManager()
        assert a.get_keys("selectConfirm") == ["enter"]
        assert b.get_keys("selectConfirm") == ["tab"]
