# booking_portal/routers/meeting_requests.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from booking_portal.db.session import get_db
from booking_portal.schemas.meetings import (
    ConfirmedMeetingOut,
    MeetingRequestCreate,
    MeetingRequestDecision,
    MeetingRequestOut,
)
from booking_portal.services import booking_service, meeting_store
from booking_portal.services.refresh_service import RefreshCoordinator, get_refresh_coordinator

router = APIRouter()


@router.post("", response_model=MeetingRequestOut, status_code=201)
def submit_meeting_request(
    payload: MeetingRequestCreate,
    db: Session = Depends(get_db),
) -> MeetingRequestOut:
    """
    Requester picks a slot and asks for a meeting.

    The slot must be one the current policy offers and still free; the
    request starts out PENDING until an admin confirms or rejects it.
    """
    request = booking_service.submit_meeting_request(
        db,
        requester_id=payload.requester_id,
        requested_date=payload.requested_date,
        start_time=payload.start_time,
        title=payload.title,
        description=payload.description,
        duration_minutes=payload.duration_minutes,
        requester_name=payload.requester_name,
    )
    return MeetingRequestOut.model_validate(request)


@router.get("/pending", response_model=List[MeetingRequestOut])
def list_pending(db: Session = Depends(get_db)) -> List[MeetingRequestOut]:
    return [MeetingRequestOut.model_validate(r) for r in meeting_store.list_pending_requests(db)]


@router.get("/requesters/{requester_id}", response_model=List[MeetingRequestOut])
def list_for_requester(
    requester_id: str,
    db: Session = Depends(get_db),
) -> List[MeetingRequestOut]:
    requester_id = booking_service.validate_requester_id(requester_id)
    return [
        MeetingRequestOut.model_validate(r)
        for r in meeting_store.list_requests_for_requester(db, requester_id)
    ]


@router.get("/{request_id}", response_model=MeetingRequestOut)
def get_meeting_request(request_id: int, db: Session = Depends(get_db)) -> MeetingRequestOut:
    return MeetingRequestOut.model_validate(meeting_store.get_meeting_request(db, request_id))


@router.post("/{request_id}/confirm")
def confirm_meeting_request(
    request_id: int,
    payload: Optional[MeetingRequestDecision] = None,
    db: Session = Depends(get_db),
    refresh: RefreshCoordinator = Depends(get_refresh_coordinator),
) -> Dict[str, Any]:
    """
    Admin approval.

    Availability is checked again here; if another confirmation took the
    slot in the meantime the request is rejected and 409 is returned.
    """
    meeting = booking_service.confirm_meeting_request(
        db,
        request_id,
        admin_notes=payload.admin_notes if payload else None,
        refresh=refresh,
    )
    request = meeting_store.get_meeting_request(db, request_id)
    return {
        "meeting_request": MeetingRequestOut.model_validate(request).model_dump(mode="json"),
        "meeting": ConfirmedMeetingOut.model_validate(meeting).model_dump(mode="json"),
    }


@router.post("/{request_id}/reject", response_model=MeetingRequestOut)
def reject_meeting_request(
    request_id: int,
    payload: Optional[MeetingRequestDecision] = None,
    db: Session = Depends(get_db),
    refresh: RefreshCoordinator = Depends(get_refresh_coordinator),
) -> MeetingRequestOut:
    request = booking_service.reject_meeting_request(
        db,
        request_id,
        reason=payload.admin_notes if payload else None,
        refresh=refresh,
    )
    return MeetingRequestOut.model_validate(request)
