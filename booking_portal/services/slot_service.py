# booking_portal/services/slot_service.py
from dataclasses import dataclass
from datetime import date, time
from typing import Iterable, List, Sequence, Tuple

from booking_portal.schemas.availability import AvailabilityPolicy
from booking_portal.services.conflict_service import find_conflicts
from booking_portal.services.time_utils import from_minutes, to_minutes, MINUTES_PER_DAY

Interval = Tuple[time, time]


@dataclass(frozen=True)
class TimeSlot:
    date: date
    start_time: time
    duration_minutes: int
    available: bool = True

    @property
    def key(self) -> Tuple[date, time]:
        return (self.date, self.start_time)


def _candidate_starts(start_hour: int, end_hour: int, step: int) -> Iterable[int]:
    # Minutes restart at :00 every hour, so a 45-minute step yields :00 and :45.
    # Meetings live on a single date: a slot may end at midnight but not after.
    for hour in range(start_hour, end_hour):
        for minute in range(0, 60, step):
            start = hour * 60 + minute
            if start + step > MINUTES_PER_DAY:
                return
            yield start


def generate_slots(
    policy: AvailabilityPolicy,
    day: date,
    booked_intervals: Sequence[Interval],
) -> List[TimeSlot]:
    """
    Expand the policy into the bookable slots of `day`.

    - Disabled or blocked weekday -> [] (not an error).
    - Candidates start every `slot_duration_minutes` inside each hour of
      [start_hour, end_hour) and are dropped when they overlap any of
      `booked_intervals` (the confirmed meetings of that date).
    - A slot starting before end_hour is kept even if it ends after it.

    Result is ordered by start time. No I/O happens here.
    """
    setting = policy.setting_for(day)
    if not setting.is_available:
        return []

    step = policy.slot_duration_minutes
    slots: List[TimeSlot] = []

    for start in _candidate_starts(setting.start_hour, setting.end_hour, step):
        start_time = from_minutes(start)
        if find_conflicts(booked_intervals, start_time, step):
            continue
        slots.append(TimeSlot(date=day, start_time=start_time, duration_minutes=step))

    return slots


def is_offered_start(policy: AvailabilityPolicy, day: date, start_time: time) -> bool:
    """True when `start_time` lies on the policy grid for `day`, booked or not."""
    setting = policy.setting_for(day)
    if not setting.is_available:
        return False
    target = to_minutes(start_time)
    return any(
        start == target
        for start in _candidate_starts(
            setting.start_hour, setting.end_hour, policy.slot_duration_minutes
        )
    )
