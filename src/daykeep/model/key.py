# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyKind(Enum):
    CHAR = "char"
    ENTER = "enter"
    TAB = "tab"
    ESC = "esc"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    SAVE = "save"
    QUIT = "quit"


@dataclass(frozen=True)
class Key:
    """A single input event. `char` is set only for CHAR keys."""

    kind: KeyKind
    char: Optional[str] = None

    @classmethod
    def of(cls, char: str) -> "Key":
        return cls(KeyKind.CHAR, char)

    def is_char(self, *chars: str) -> bool:
        return self.kind == KeyKind.CHAR and self.char in chars
