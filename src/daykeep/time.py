# SPDX-License-Identifier: MIT

import datetime
import re
from typing import cast

import pendulum

from daykeep.errors import InvalidTimeFormat

TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def time_from_str(value: str) -> pendulum.Time:
    """Parse a 24-hour (H)H:MM string, raising InvalidTimeFormat otherwise."""
    match = TIME_PATTERN.match(value.strip())
    if match is None:
        raise InvalidTimeFormat(value)
    return pendulum.time(int(match.group(1)), int(match.group(2)))


def time_to_str(value: datetime.time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def date_to_str(value: datetime.date) -> str:
    return value.isoformat()


def date_from_str(value: str) -> pendulum.Date:
    parsed = pendulum.parse(value, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if not isinstance(parsed, pendulum.Date):
        raise ValueError(f"Expected a date, got '{value}'")
    return cast(pendulum.Date, parsed)


def date_from_value(value: object) -> pendulum.Date:
    """Accept either an ISO string or a date object (YAML may produce both)."""
    if isinstance(value, datetime.date):
        return pendulum.date(value.year, value.month, value.day)
    return date_from_str(str(value))


def time_from_value(value: object) -> pendulum.Time:
    if isinstance(value, datetime.time):
        return pendulum.time(value.hour, value.minute)
    return time_from_str(str(value))


def date_to_display_str(value: pendulum.Date) -> str:
    return value.format("dddd, MMMM DD, YYYY")


def is_before(
    day: datetime.date, moment: datetime.time, now: datetime.datetime
) -> bool:
    """True when the wall-clock instant (day, moment) is strictly before now."""
    return (day, moment) < (now.date(), now.time())
