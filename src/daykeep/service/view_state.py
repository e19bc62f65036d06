# SPDX-License-Identifier: MIT

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypeAlias

import pendulum

from daykeep.model.task import DaySummary, Task
from daykeep.service.form import FieldFocus, FormDraft


class ViewMode(Enum):
    TASK_LIST = "task_list"
    ADD_EDIT = "add_edit"
    NOTES = "notes"
    OVERDUE_REVIEW = "overdue_review"


@dataclass
class TaskListState:
    date: pendulum.Date
    selected: Optional[int] = None


@dataclass
class AddEditState:
    draft: FormDraft
    return_date: pendulum.Date
    return_selected: Optional[int] = None


@dataclass
class NotesState:
    pass


@dataclass
class OverdueReviewState:
    return_date: pendulum.Date
    target_date: pendulum.Date
    selected: Optional[int] = None


ViewState: TypeAlias = TaskListState | AddEditState | NotesState | OverdueReviewState


def mode_of(state: ViewState) -> ViewMode:
    if isinstance(state, TaskListState):
        return ViewMode.TASK_LIST
    if isinstance(state, AddEditState):
        return ViewMode.ADD_EDIT
    if isinstance(state, NotesState):
        return ViewMode.NOTES
    return ViewMode.OVERDUE_REVIEW


class MessageLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    level: MessageLevel
    text: str


@dataclass(frozen=True)
class DraftSnapshot:
    is_new: bool
    description: str
    start: str
    end: str
    focus: FieldFocus
    cursor_col: int
    error: Optional[str]


@dataclass(frozen=True)
class Snapshot:
    """Read-only picture of the session handed to the renderer."""

    mode: ViewMode
    today: pendulum.Date
    date: pendulum.Date
    day_tasks: tuple[Task, ...]
    summary: DaySummary
    overdue: tuple[Task, ...]
    selected: Optional[int]
    notes_lines: tuple[str, ...]
    notes_cursor: tuple[int, int]
    draft: Optional[DraftSnapshot]
    target_date: Optional[pendulum.Date]
    is_dirty: bool
    message: Optional[StatusMessage]
