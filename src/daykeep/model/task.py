# SPDX-License-Identifier: MIT

from typing import Optional, TypeAlias, TypedDict

import pendulum

TaskId: TypeAlias = int


class Task(TypedDict):
    id: Optional[TaskId]
    description: str
    date: pendulum.Date
    start: pendulum.Time
    end: pendulum.Time
    completed: bool


class DaySummary(TypedDict):
    total: int
    pending: int
    done: int
