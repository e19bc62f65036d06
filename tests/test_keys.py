"""Tests for translating curses input into key events."""

import curses

import pytest

from daykeep.model.key import Key, KeyKind
from daykeep.terminal.keys import translate_key


class TestTranslateKey:
    @pytest.mark.parametrize(
        "raw,kind",
        [
            ("\x11", KeyKind.QUIT),
            ("\x03", KeyKind.QUIT),
            ("\x13", KeyKind.SAVE),
            ("\n", KeyKind.ENTER),
            ("\t", KeyKind.TAB),
            ("\x1b", KeyKind.ESC),
            ("\x7f", KeyKind.BACKSPACE),
            (curses.KEY_BACKSPACE, KeyKind.BACKSPACE),
            (curses.KEY_DC, KeyKind.DELETE),
            (curses.KEY_UP, KeyKind.UP),
            (curses.KEY_HOME, KeyKind.HOME),
        ],
    )
    def test_special_keys(self, raw, kind):
        assert translate_key(raw) == Key(kind)

    def test_printable(self):
        assert translate_key("é") == Key.of("é")
        assert translate_key(" ") == Key.of(" ")

    def test_ignored(self):
        assert translate_key("\x01") is None
        assert translate_key(curses.KEY_F1) is None
