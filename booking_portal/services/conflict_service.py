# booking_portal/services/conflict_service.py
from datetime import date, time
from typing import List, Sequence, Tuple

from sqlalchemy.orm import Session

from booking_portal.services.meeting_store import booked_intervals
from booking_portal.services.time_utils import interval_minutes, to_minutes

Interval = Tuple[time, time]


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    # Half-open intervals: touching boundaries do not overlap
    return start_a < end_b and end_a > start_b


def find_conflicts(
    intervals: Sequence[Interval],
    start_time: time,
    duration_minutes: int,
) -> List[Interval]:
    """Return every interval intersecting [start_time, start_time + duration)."""
    start = to_minutes(start_time)
    end = start + duration_minutes
    return [
        (other_start, other_end)
        for other_start, other_end in intervals
        if overlaps(start, end, *interval_minutes(other_start, other_end))
    ]


def is_available(
    db: Session,
    day: date,
    start_time: time,
    duration_minutes: int,
) -> bool:
    """
    False iff [start_time, start_time + duration) intersects a confirmed
    meeting on `day`.

    Must be called again at confirmation time; an answer obtained when the
    slot list was shown says nothing about the store a few minutes later.
    """
    return not find_conflicts(booked_intervals(db, day), start_time, duration_minutes)
