# booking_portal/services/booking_service.py
"""
Meeting request lifecycle: PENDING -> CONFIRMED | REJECTED.

Confirmation is the only place a ConfirmedMeeting is created, and it always
re-checks availability against the store while holding the lock for the
request's date, so two admins confirming the same slot cannot both win.
"""
import logging
import re
import threading
from contextlib import contextmanager
from datetime import date, time
from typing import Dict, Iterator, Optional, Set, Union

from sqlalchemy.orm import Session

from booking_portal import errors
from booking_portal.config import get_settings
from booking_portal.models.confirmed_meeting import ConfirmedMeeting
from booking_portal.models.meeting_request import MeetingRequest, MeetingRequestStatus
from booking_portal.schemas.availability import AvailabilityPolicy
from booking_portal.services import meeting_store
from booking_portal.services.conflict_service import find_conflicts, is_available
from booking_portal.services.policy_store import load_policy
from booking_portal.services.refresh_service import RefreshCoordinator, get_refresh_coordinator
from booking_portal.services.slot_service import generate_slots, is_offered_start
from booking_portal.services.time_utils import end_time_for, parse_time_of_day

logger = logging.getLogger(__name__)

REQUESTER_ID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

ALLOWED_TRANSITIONS: Dict[MeetingRequestStatus, Set[MeetingRequestStatus]] = {
    MeetingRequestStatus.PENDING: {
        MeetingRequestStatus.CONFIRMED,
        MeetingRequestStatus.REJECTED,
    },
    MeetingRequestStatus.CONFIRMED: set(),
    MeetingRequestStatus.REJECTED: set(),
}

SLOT_TAKEN_NOTE = "Slot was taken by another confirmation; please pick another time"


class _DateLock:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class DateLocks:
    """One lock per calendar date, dropped once nobody holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[date, _DateLock] = {}

    @contextmanager
    def for_date(self, day: date) -> Iterator[None]:
        with self._guard:
            entry = self._locks.get(day)
            if entry is None:
                entry = self._locks[day] = _DateLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[day]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


_date_locks = DateLocks()


def _check_transition(request: MeetingRequest, target: MeetingRequestStatus) -> None:
    current = MeetingRequestStatus(request.status)
    if target not in ALLOWED_TRANSITIONS[current]:
        logger.warning(
            "Rejected transition %s -> %s for meeting request %s",
            current.value,
            target.value,
            request.id,
        )
        raise errors.InvalidStateError(
            f"MeetingRequest {request.id} is already {current.value}"
        )


def validate_requester_id(requester_id: str) -> str:
    value = (requester_id or "").strip()
    if not REQUESTER_ID_RE.match(value):
        raise errors.ValidationError("requester_id must be a UUID")
    return value.lower()


def submit_meeting_request(
    db: Session,
    *,
    requester_id: str,
    requested_date: date,
    start_time: Union[str, time],
    title: str,
    description: Optional[str] = None,
    duration_minutes: Optional[int] = None,
    requester_name: Optional[str] = None,
    policy: Optional[AvailabilityPolicy] = None,
) -> MeetingRequest:
    """
    Create a PENDING request for a slot the current policy offers.

    Fails with errors.ValidationError when the requester id is not a UUID,
    the time is malformed, the title is empty, the slot is not on the policy
    grid, or it is already taken.
    """
    requester_id = validate_requester_id(requester_id)
    start = parse_time_of_day(start_time)

    title = (title or "").strip()
    if not title:
        raise errors.ValidationError("title is required")

    if policy is None:
        policy = load_policy(db)

    duration = duration_minutes if duration_minutes is not None else policy.slot_duration_minutes
    if duration <= 0:
        raise errors.ValidationError("duration_minutes must be positive")
    try:
        end_time_for(start, duration)
    except ValueError as e:
        raise errors.ValidationError("meeting must end on the day it starts") from e

    booked = meeting_store.booked_intervals(db, requested_date)
    offered = {slot.start_time for slot in generate_slots(policy, requested_date, booked)}

    if start not in offered:
        if is_offered_start(policy, requested_date, start):
            raise errors.ValidationError("That time slot is already booked")
        raise errors.ValidationError(
            f"{requested_date.isoformat()} {start.strftime('%H:%M')} is not an available slot"
        )
    if find_conflicts(booked, start, duration):
        raise errors.ValidationError("That time slot is already booked")

    request = MeetingRequest(
        requester_id=requester_id,
        requester_name=(requester_name or "").strip() or None,
        requested_date=requested_date,
        start_time=start,
        duration_minutes=duration,
        title=title,
        description=(description or "").strip() or None,
        status=MeetingRequestStatus.PENDING.value,
    )
    with meeting_store.committing(db, "submit meeting request"):
        meeting_store.persist_meeting_request(db, request)
    db.refresh(request)

    logger.info(
        "Meeting request %s submitted for %s %s by %s",
        request.id,
        requested_date.isoformat(),
        start.strftime("%H:%M"),
        requester_id,
    )
    return request


def confirm_meeting_request(
    db: Session,
    request_id: int,
    *,
    admin_notes: Optional[str] = None,
    refresh: Optional[RefreshCoordinator] = None,
) -> ConfirmedMeeting:
    """
    Approve a PENDING request.

    - Slot still free  -> request CONFIRMED, ConfirmedMeeting created.
    - Slot taken since -> request REJECTED, errors.ConflictError raised.
    - Not PENDING      -> errors.InvalidStateError.
    """
    refresh = refresh or get_refresh_coordinator()
    request = meeting_store.get_meeting_request(db, request_id)

    meeting: Optional[ConfirmedMeeting] = None
    with _date_locks.for_date(request.requested_date):
        # Another thread may have resolved this row while we waited
        with meeting_store.store_errors(db, "reload meeting request"):
            db.refresh(request)
        _check_transition(request, MeetingRequestStatus.CONFIRMED)

        if not is_available(db, request.requested_date, request.start_time, request.duration_minutes):
            with meeting_store.committing(db, "reject conflicting meeting request"):
                meeting_store.update_request_status(
                    db, request, MeetingRequestStatus.REJECTED, admin_notes=SLOT_TAKEN_NOTE
                )
        else:
            meeting = ConfirmedMeeting(
                meeting_request_id=request.id,
                requester_id=request.requester_id,
                requester_name=request.requester_name,
                meeting_date=request.requested_date,
                start_time=request.start_time,
                end_time=end_time_for(request.start_time, request.duration_minutes),
                title=request.title,
                description=request.description,
            )
            with meeting_store.committing(db, "confirm meeting request"):
                meeting_store.update_request_status(
                    db, request, MeetingRequestStatus.CONFIRMED, admin_notes=admin_notes
                )
                meeting_store.persist_confirmed_meeting(db, meeting)
            db.refresh(meeting)

    if meeting is None:
        logger.warning(
            "Meeting request %s lost its slot %s %s to another confirmation",
            request.id,
            request.requested_date.isoformat(),
            request.start_time.strftime("%H:%M"),
        )
        refresh.publish()
        raise errors.ConflictError(SLOT_TAKEN_NOTE)

    logger.info("Meeting request %s confirmed as meeting %s", request.id, meeting.id)
    refresh.publish(delay_seconds=get_settings().CONFIRM_REFRESH_GRACE_SECONDS)
    return meeting


def reject_meeting_request(
    db: Session,
    request_id: int,
    reason: Optional[str] = None,
    *,
    refresh: Optional[RefreshCoordinator] = None,
) -> MeetingRequest:
    refresh = refresh or get_refresh_coordinator()
    request = meeting_store.get_meeting_request(db, request_id)

    with _date_locks.for_date(request.requested_date):
        with meeting_store.store_errors(db, "reload meeting request"):
            db.refresh(request)
        _check_transition(request, MeetingRequestStatus.REJECTED)
        with meeting_store.committing(db, "reject meeting request"):
            meeting_store.update_request_status(
                db, request, MeetingRequestStatus.REJECTED, admin_notes=reason
            )

    logger.info("Meeting request %s rejected", request.id)
    refresh.publish()
    return request


def delete_confirmed_meeting(
    db: Session,
    meeting_id: int,
    *,
    refresh: Optional[RefreshCoordinator] = None,
) -> None:
    refresh = refresh or get_refresh_coordinator()
    with meeting_store.committing(db, "delete confirmed meeting"):
        deleted = meeting_store.delete_confirmed_meeting(db, meeting_id)
        if not deleted:
            raise errors.NotFoundError(f"ConfirmedMeeting {meeting_id} not found")

    logger.info("Confirmed meeting %s deleted", meeting_id)
    refresh.publish()


def delete_all_confirmed_meetings(
    db: Session,
    *,
    refresh: Optional[RefreshCoordinator] = None,
) -> int:
    refresh = refresh or get_refresh_coordinator()
    with meeting_store.committing(db, "delete all confirmed meetings"):
        count = meeting_store.delete_all_confirmed_meetings(db)

    logger.info("Deleted all %d confirmed meetings", count)
    refresh.publish()
    return count
