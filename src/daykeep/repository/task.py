# SPDX-License-Identifier: MIT

import datetime
import logging
from copy import deepcopy
from typing import Optional

import pendulum

from daykeep.errors import EmptyDescription, InvalidTimeRange, NotFound
from daykeep.model.task import DaySummary, Task, TaskId
from daykeep.service.day_index import overdue_tasks, summarize_day, tasks_for_day
from daykeep.template.task import get_task_template
from daykeep.time import date_from_value, time_from_str, time_to_str

logger = logging.getLogger(__name__)


class TaskStore:
    def __init__(
        self,
        tasks: Optional[list[Task]] = None,
        notes: str = "",
        next_id: int = 1,
    ) -> None:
        self._tasks: list[Task] = list(tasks) if tasks is not None else []
        seen_ids: set[TaskId] = set()
        for task in self._tasks:
            _check_task(task)
            if task["id"] in seen_ids:
                raise ValueError(f"duplicate task id {task['id']}")
            if task["id"] is not None:
                seen_ids.add(task["id"])
        self._notes = notes
        highest_id = max((task["id"] or 0 for task in self._tasks), default=0)
        self._next_id = max(next_id, highest_id + 1)
        self.is_dirty = False

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def __find(self, id: TaskId) -> Task:
        for task in self._tasks:
            if task["id"] == id:
                return task
        raise NotFound(id)

    def __mark_dirty(self) -> None:
        self.is_dirty = True

    def mark_clean(self) -> None:
        self.is_dirty = False

    def add(
        self, description: str, date: datetime.date, start: str, end: str
    ) -> TaskId:
        description = description.strip()
        if not description:
            raise EmptyDescription()
        start_time, end_time = _validate_times(start, end)

        task_id = self._next_id
        task = get_task_template()
        task["id"] = task_id
        task["description"] = description
        task["date"] = date_from_value(date)
        task["start"] = start_time
        task["end"] = end_time

        self._next_id += 1
        self._tasks.append(task)
        self.__mark_dirty()
        logger.info("added task %s on %s", task["id"], task["date"])
        return task_id

    def update(
        self,
        id: TaskId,
        description: Optional[str] = None,
        date: Optional[datetime.date] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
    ) -> None:
        task = self.__find(id)

        if description is not None:
            description = description.strip()
            if not description:
                raise EmptyDescription()
        start_time, end_time = _validate_times(
            start if start is not None else time_to_str(task["start"]),
            end if end is not None else time_to_str(task["end"]),
        )

        if description is not None:
            task["description"] = description
        if date is not None:
            task["date"] = date_from_value(date)
        task["start"] = start_time
        task["end"] = end_time
        self.__mark_dirty()
        logger.info("updated task %s", id)

    def delete(self, id: TaskId) -> None:
        task = self.__find(id)
        self._tasks.remove(task)
        self.__mark_dirty()
        logger.info("deleted task %s", id)

    def toggle_complete(self, id: TaskId) -> bool:
        task = self.__find(id)
        task["completed"] = not task["completed"]
        self.__mark_dirty()
        return task["completed"]

    def reschedule(self, id: TaskId, date: datetime.date) -> None:
        """Move a task to another date; completion and times are untouched."""
        task = self.__find(id)
        task["date"] = date_from_value(date)
        self.__mark_dirty()
        logger.info("rescheduled task %s to %s", id, task["date"])

    def get(self, id: TaskId) -> Task:
        return deepcopy(self.__find(id))

    def all_tasks(self) -> list[Task]:
        return deepcopy(self._tasks)

    def tasks_for(self, date: datetime.date) -> list[Task]:
        return deepcopy(tasks_for_day(self._tasks, date))

    def overdue(self, now: datetime.datetime) -> list[Task]:
        return deepcopy(overdue_tasks(self._tasks, now))

    def summary_for(self, date: datetime.date) -> DaySummary:
        return summarize_day(self._tasks, date)

    def set_notes(self, text: str) -> None:
        if text == self._notes:
            return
        self._notes = text
        self.__mark_dirty()

    def notes(self) -> str:
        return self._notes


def _validate_times(start: str, end: str) -> tuple[pendulum.Time, pendulum.Time]:
    start_time = time_from_str(start)
    end_time = time_from_str(end)
    if end_time < start_time:
        raise InvalidTimeRange(time_to_str(start_time), time_to_str(end_time))
    return start_time, end_time


def _check_task(task: Task) -> None:
    """Apply the add/update rules to a task that did not come through add()."""
    if not task["description"].strip():
        raise EmptyDescription()
    if task["end"] < task["start"]:
        raise InvalidTimeRange(time_to_str(task["start"]), time_to_str(task["end"]))
