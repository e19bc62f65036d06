# SPDX-License-Identifier: MIT

import datetime

from daykeep.model.task import DaySummary, Task
from daykeep.time import is_before


def tasks_for_day(tasks: list[Task], day: datetime.date) -> list[Task]:
    """
    Tasks owned by the given date, ordered by start time.

    sorted() is stable, so tasks sharing a start time keep insertion order.
    """
    return sorted(
        (task for task in tasks if task["date"] == day),
        key=lambda task: task["start"],
    )


def overdue_tasks(tasks: list[Task], now: datetime.datetime) -> list[Task]:
    """
    Incomplete tasks whose (date, end) lies strictly before now, oldest first.
    """
    return sorted(
        (
            task
            for task in tasks
            if not task["completed"] and is_before(task["date"], task["end"], now)
        ),
        key=lambda task: (task["date"], task["start"]),
    )


def summarize_day(tasks: list[Task], day: datetime.date) -> DaySummary:
    day_tasks = tasks_for_day(tasks, day)
    done = len([task for task in day_tasks if task["completed"]])
    return {
        "total": len(day_tasks),
        "pending": len(day_tasks) - done,
        "done": done,
    }
