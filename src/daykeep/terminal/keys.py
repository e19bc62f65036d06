# SPDX-License-Identifier: MIT

import curses
from typing import Optional

from daykeep.model.key import Key, KeyKind

CTRL_C = "\x03"
CTRL_Q = "\x11"
CTRL_S = "\x13"

SPECIAL_KEYS: dict[object, KeyKind] = {
    CTRL_C: KeyKind.QUIT,
    CTRL_Q: KeyKind.QUIT,
    CTRL_S: KeyKind.SAVE,
    "\n": KeyKind.ENTER,
    "\r": KeyKind.ENTER,
    curses.KEY_ENTER: KeyKind.ENTER,
    "\t": KeyKind.TAB,
    "\x1b": KeyKind.ESC,
    "\x7f": KeyKind.BACKSPACE,
    "\b": KeyKind.BACKSPACE,
    curses.KEY_BACKSPACE: KeyKind.BACKSPACE,
    curses.KEY_DC: KeyKind.DELETE,
    curses.KEY_LEFT: KeyKind.LEFT,
    curses.KEY_RIGHT: KeyKind.RIGHT,
    curses.KEY_UP: KeyKind.UP,
    curses.KEY_DOWN: KeyKind.DOWN,
    curses.KEY_HOME: KeyKind.HOME,
    curses.KEY_END: KeyKind.END,
}


def translate_key(raw: object) -> Optional[Key]:
    """Map a curses get_wch() result to a Key, or None for keys we ignore."""
    kind = SPECIAL_KEYS.get(raw)
    if kind is not None:
        return Key(kind)
    if isinstance(raw, str) and len(raw) == 1 and raw.isprintable():
        return Key.of(raw)
    return None
