# SPDX-License-Identifier: MIT


class DaykeepError(Exception):
    """Base class for every error raised by daykeep."""

    pass


class ValidationError(DaykeepError):
    """Raised when user supplied task data is rejected."""

    pass


class InvalidTimeFormat(ValidationError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Time must be in HH:MM 24-hour format, got '{value}'")
        self.value = value


class InvalidTimeRange(ValidationError):
    def __init__(self, start: str, end: str) -> None:
        super().__init__(f"End time {end} is before start time {start}")
        self.start = start
        self.end = end


class EmptyDescription(ValidationError):
    def __init__(self) -> None:
        super().__init__("Description cannot be empty")


class InvalidRescheduleDate(ValidationError):
    def __init__(self, target: str, today: str) -> None:
        super().__init__(f"Cannot reschedule to {target}, which is before {today}")
        self.target = target
        self.today = today


class NotFound(DaykeepError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class PersistenceFailure(DaykeepError):
    """Raised when the data file cannot be read or written."""

    pass
