# SPDX-License-Identifier: MIT

import datetime
from typing import Optional

from daykeep.errors import InvalidRescheduleDate
from daykeep.model.task import TaskId
from daykeep.repository.task import TaskStore
from daykeep.time import date_to_str


def reschedule_task(
    store: TaskStore,
    task_id: TaskId,
    target: datetime.date,
    today: datetime.date,
    allow_past: bool = False,
) -> None:
    """
    Re-date a task, leaving its times and completion flag alone.

    Dates strictly before today are rejected unless allow_past is set.
    """
    if target < today and not allow_past:
        raise InvalidRescheduleDate(date_to_str(target), date_to_str(today))
    store.reschedule(task_id, target)


def clamp_selection(selected: Optional[int], count: int) -> Optional[int]:
    if count == 0:
        return None
    if selected is None:
        return 0
    return max(0, min(selected, count - 1))


def step_selection(selected: Optional[int], count: int, step: int) -> Optional[int]:
    """Move the selection by step, wrapping around both ends."""
    if count == 0:
        return None
    if selected is None:
        return 0
    return (selected + step) % count
