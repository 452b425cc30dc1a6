# booking_portal/services/meeting_store.py
"""
Persistence for meeting requests and confirmed meetings.

Writers only add/flush; the caller owns the transaction and ends it with
`committing(db)` so an operation either lands completely or not at all.
Any SQLAlchemyError leaves here as errors.PersistenceError.
"""
import logging
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Iterator, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from booking_portal import errors
from booking_portal.models.confirmed_meeting import ConfirmedMeeting
from booking_portal.models.meeting_request import MeetingRequest, MeetingRequestStatus

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(db: Session, action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store failure while trying to %s", action)
        raise errors.PersistenceError(f"Could not {action}") from e


@contextmanager
def committing(db: Session, action: str) -> Iterator[None]:
    """Run the block and commit; roll back everything on any failure."""
    try:
        with store_errors(db, action):
            yield
            db.commit()
    except errors.PersistenceError:
        raise
    except Exception:
        db.rollback()
        raise


# --- reads -----------------------------------------------------------------


def fetch_confirmed_meetings(
    db: Session,
    *,
    on: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    requester_id: Optional[str] = None,
) -> List[ConfirmedMeeting]:
    """Confirmed meetings ordered by date then start time; bounds are inclusive."""
    with store_errors(db, "fetch confirmed meetings"):
        query = db.query(ConfirmedMeeting)
        if on is not None:
            query = query.filter(ConfirmedMeeting.meeting_date == on)
        if start is not None:
            query = query.filter(ConfirmedMeeting.meeting_date >= start)
        if end is not None:
            query = query.filter(ConfirmedMeeting.meeting_date <= end)
        if requester_id is not None:
            query = query.filter(ConfirmedMeeting.requester_id == requester_id)
        return query.order_by(
            ConfirmedMeeting.meeting_date.asc(),
            ConfirmedMeeting.start_time.asc(),
        ).all()


def booked_intervals(db: Session, day: date) -> List[Tuple[time, time]]:
    return [(m.start_time, m.end_time) for m in fetch_confirmed_meetings(db, on=day)]


def get_meeting_request(db: Session, request_id: int) -> MeetingRequest:
    with store_errors(db, "load meeting request"):
        mr = db.query(MeetingRequest).filter_by(id=request_id).first()
    if not mr:
        raise errors.NotFoundError(f"MeetingRequest {request_id} not found")
    return mr


def list_pending_requests(db: Session) -> List[MeetingRequest]:
    with store_errors(db, "list pending meeting requests"):
        return (
            db.query(MeetingRequest)
            .filter(MeetingRequest.status == MeetingRequestStatus.PENDING.value)
            .order_by(MeetingRequest.created_at.desc(), MeetingRequest.id.desc())
            .all()
        )


def list_requests_for_requester(db: Session, requester_id: str) -> List[MeetingRequest]:
    with store_errors(db, "list meeting requests"):
        return (
            db.query(MeetingRequest)
            .filter(MeetingRequest.requester_id == requester_id)
            .order_by(MeetingRequest.created_at.desc(), MeetingRequest.id.desc())
            .all()
        )


# --- writes (no commit) ----------------------------------------------------


def persist_meeting_request(db: Session, request: MeetingRequest) -> int:
    with store_errors(db, "persist meeting request"):
        db.add(request)
        db.flush()
    return request.id


def update_request_status(
    db: Session,
    request: MeetingRequest,
    status: MeetingRequestStatus,
    admin_notes: Optional[str] = None,
) -> None:
    with store_errors(db, "update meeting request status"):
        request.status = status.value
        request.resolved_at = datetime.utcnow()
        if admin_notes:
            request.admin_notes = admin_notes
        db.add(request)
        db.flush()


def persist_confirmed_meeting(db: Session, meeting: ConfirmedMeeting) -> int:
    with store_errors(db, "persist confirmed meeting"):
        db.add(meeting)
        db.flush()
    return meeting.id


def delete_confirmed_meeting(db: Session, meeting_id: int) -> bool:
    with store_errors(db, "delete confirmed meeting"):
        deleted = db.query(ConfirmedMeeting).filter_by(id=meeting_id).delete()
    return deleted > 0


def delete_all_confirmed_meetings(db: Session) -> int:
    with store_errors(db, "delete all confirmed meetings"):
        return db.query(ConfirmedMeeting).delete()
