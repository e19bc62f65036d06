# SPDX-License-Identifier: MIT

from enum import Enum


class CursorMove(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    LINE_START = "line_start"
    LINE_END = "line_end"


class EditorBuffer:
    """
    Line-oriented text buffer with a cursor.

    The cursor always points at an existing line and a column in
    [0, len(line)]. An empty buffer holds a single empty line.

    Vertical moves clamp the column to the target line and do not remember
    the column they came from.
    """

    def __init__(self, text: str = "") -> None:
        self._lines: list[str] = [""]
        self._row = 0
        self._col = 0
        if text:
            self.load(text)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def cursor(self) -> tuple[int, int]:
        return (self._row, self._col)

    def text(self) -> str:
        return "\n".join(self._lines)

    def load(self, text: str) -> None:
        """Replace the content; the cursor lands at the end of the text."""
        self._lines = text.split("\n")
        self._row = len(self._lines) - 1
        self._col = len(self._lines[self._row])

    def insert_char(self, char: str) -> None:
        if len(char) != 1:
            self.insert_text(char)
            return
        if char == "\n":
            self.insert_newline()
            return
        line = self._lines[self._row]
        self._lines[self._row] = line[: self._col] + char + line[self._col :]
        self._col += 1

    def insert_text(self, text: str) -> None:
        for char in text:
            self.insert_char(char)

    def insert_newline(self) -> None:
        line = self._lines[self._row]
        self._lines[self._row] = line[: self._col]
        self._lines.insert(self._row + 1, line[self._col :])
        self._row += 1
        self._col = 0

    def backspace(self) -> None:
        if self._col > 0:
            line = self._lines[self._row]
            self._lines[self._row] = line[: self._col - 1] + line[self._col :]
            self._col -= 1
        elif self._row > 0:
            line = self._lines.pop(self._row)
            self._row -= 1
            self._col = len(self._lines[self._row])
            self._lines[self._row] += line

    def delete_forward(self) -> None:
        line = self._lines[self._row]
        if self._col < len(line):
            self._lines[self._row] = line[: self._col] + line[self._col + 1 :]
        elif self._row < len(self._lines) - 1:
            self._lines[self._row] = line + self._lines.pop(self._row + 1)

    def move_cursor(self, direction: CursorMove) -> None:
        if direction == CursorMove.LEFT:
            if self._col > 0:
                self._col -= 1
            elif self._row > 0:
                self._row -= 1
                self._col = len(self._lines[self._row])
        elif direction == CursorMove.RIGHT:
            if self._col < len(self._lines[self._row]):
                self._col += 1
            elif self._row < len(self._lines) - 1:
                self._row += 1
                self._col = 0
        elif direction == CursorMove.UP:
            if self._row > 0:
                self._row -= 1
                self._col = min(self._col, len(self._lines[self._row]))
        elif direction == CursorMove.DOWN:
            if self._row < len(self._lines) - 1:
                self._row += 1
                self._col = min(self._col, len(self._lines[self._row]))
        elif direction == CursorMove.LINE_START:
            self._col = 0
        elif direction == CursorMove.LINE_END:
            self._col = len(self._lines[self._row])
