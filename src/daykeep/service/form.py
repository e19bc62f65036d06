# SPDX-License-Identifier: MIT

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TypeAlias

from daykeep.model.task import Task, TaskId
from daykeep.repository.task import TaskStore
from daykeep.service.editor import CursorMove, EditorBuffer
from daykeep.time import time_to_str

TIME_FIELD_MAX_LENGTH = 5


class FieldFocus(Enum):
    DESCRIPTION = "description"
    START = "start"
    END = "end"

    def next(self) -> "FieldFocus":
        return _FOCUS_CYCLE[self]


_FOCUS_CYCLE = {
    FieldFocus.DESCRIPTION: FieldFocus.START,
    FieldFocus.START: FieldFocus.END,
    FieldFocus.END: FieldFocus.DESCRIPTION,
}


@dataclass(frozen=True)
class NewTask:
    date: datetime.date


@dataclass(frozen=True)
class EditTask:
    task_id: TaskId


FormOrigin: TypeAlias = NewTask | EditTask


@dataclass
class FormDraft:
    origin: FormOrigin
    description: EditorBuffer = field(default_factory=EditorBuffer)
    start: EditorBuffer = field(default_factory=EditorBuffer)
    end: EditorBuffer = field(default_factory=EditorBuffer)
    focus: FieldFocus = FieldFocus.DESCRIPTION
    error: Optional[str] = None

    @classmethod
    def for_new_task(cls, date: datetime.date) -> "FormDraft":
        return cls(origin=NewTask(date))

    @classmethod
    def from_task(cls, task: Task) -> "FormDraft":
        if task["id"] is None:
            raise ValueError("cannot edit a task without an id")
        return cls(
            origin=EditTask(task["id"]),
            description=EditorBuffer(task["description"]),
            start=EditorBuffer(time_to_str(task["start"])),
            end=EditorBuffer(time_to_str(task["end"])),
        )

    @property
    def is_new(self) -> bool:
        return isinstance(self.origin, NewTask)

    def buffer_for(self, focus: FieldFocus) -> EditorBuffer:
        if focus == FieldFocus.DESCRIPTION:
            return self.description
        if focus == FieldFocus.START:
            return self.start
        return self.end

    def focused_buffer(self) -> EditorBuffer:
        return self.buffer_for(self.focus)

    def cycle_focus(self) -> None:
        self.focus = self.focus.next()

    def insert_char(self, char: str) -> None:
        """Type into the focused field; time fields take digits and ':' only."""
        if char == "\n":
            return
        buffer = self.focused_buffer()
        if self.focus != FieldFocus.DESCRIPTION:
            if not (char.isdigit() or char == ":"):
                return
            if len(buffer.text()) >= TIME_FIELD_MAX_LENGTH:
                return
        buffer.insert_char(char)

    def backspace(self) -> None:
        self.focused_buffer().backspace()

    def delete_forward(self) -> None:
        self.focused_buffer().delete_forward()

    def move_cursor(self, direction: CursorMove) -> None:
        if direction in (CursorMove.UP, CursorMove.DOWN):
            return
        self.focused_buffer().move_cursor(direction)

    def commit(self, store: TaskStore) -> TaskId:
        """
        Validate the draft against the store rules and apply it.

        Raises the store's ValidationError or NotFound untouched so the
        caller can keep the draft open for correction.
        """
        description = self.description.text()
        start = self.start.text()
        end = self.end.text()
        if isinstance(self.origin, NewTask):
            return store.add(description, self.origin.date, start, end)
        store.update(self.origin.task_id, description=description, start=start, end=end)
        return self.origin.task_id
