# booking_portal/services/time_utils.py
import re
from datetime import time
from typing import Tuple, Union

from booking_portal import errors

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?\s*([ap]\.?m\.?)?$", re.IGNORECASE)


def parse_time_of_day(value: Union[str, time]) -> time:
    """
    Parse a wall-clock time.

    Accepts 24-hour ("14:30", "14:30:00") and 12-hour ("2:30 PM", "2:30pm")
    forms. Raises errors.ValidationError for anything else.
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    raw = (value or "").strip()
    match = _TIME_RE.match(raw)
    if not match:
        raise errors.ValidationError(f"Invalid time format: {value!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    period = (match.group(3) or "").replace(".", "").lower()

    if period:
        if not 1 <= hour <= 12:
            raise errors.ValidationError(f"Invalid time format: {value!r}")
        if period == "pm" and hour != 12:
            hour += 12
        elif period == "am" and hour == 12:
            hour = 0

    if hour > 23 or minute > 59:
        raise errors.ValidationError(f"Invalid time format: {value!r}")

    return time(hour, minute)


def to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def from_minutes(total: int) -> time:
    if not 0 <= total < MINUTES_PER_DAY:
        raise ValueError("time must fall within a single day")
    return time(total // 60, total % 60)


def end_time_for(start: time, duration_minutes: int) -> time:
    """
    End of [start, start + duration).

    A meeting ending exactly at midnight gets 00:00 as its end; anything
    running past midnight raises ValueError.
    """
    total = to_minutes(start) + duration_minutes
    if total == MINUTES_PER_DAY:
        return time(0, 0)
    return from_minutes(total)


def interval_minutes(start: time, end: time) -> Tuple[int, int]:
    # An end of 00:00 is the end of the day
    return to_minutes(start), to_minutes(end) or MINUTES_PER_DAY


def format_time_12h(t: time) -> str:
    """14:05 -> '2:05 PM'"""
    period = "PM" if t.hour >= 12 else "AM"
    display_hour = t.hour % 12 or 12
    return f"{display_hour}:{t.minute:02d} {period}"


def duration_label(start: time, end: time) -> str:
    start_minutes, end_minutes = interval_minutes(start, end)
    minutes = end_minutes - start_minutes
    if minutes == 60:
        return "1 hour"
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"
