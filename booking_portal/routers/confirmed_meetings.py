# booking_portal/routers/confirmed_meetings.py
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from booking_portal.db.session import get_db
from booking_portal.schemas.meetings import ConfirmedMeetingOut
from booking_portal.services import booking_service, meeting_store
from booking_portal.services.refresh_service import RefreshCoordinator, get_refresh_coordinator

router = APIRouter()


@router.get("", response_model=List[ConfirmedMeetingOut])
def list_confirmed_meetings(
    start: Optional[date] = None,
    end: Optional[date] = None,
    requester_id: Optional[str] = None,
    db: Session = Depends(get_db),
) -> List[ConfirmedMeetingOut]:
    if requester_id is not None:
        requester_id = booking_service.validate_requester_id(requester_id)
    meetings = meeting_store.fetch_confirmed_meetings(
        db, start=start, end=end, requester_id=requester_id
    )
    return [ConfirmedMeetingOut.model_validate(m) for m in meetings]


@router.delete("/{meeting_id}")
def delete_confirmed_meeting(
    meeting_id: int,
    db: Session = Depends(get_db),
    refresh: RefreshCoordinator = Depends(get_refresh_coordinator),
) -> Dict[str, int]:
    booking_service.delete_confirmed_meeting(db, meeting_id, refresh=refresh)
    return {"deleted": meeting_id}


@router.delete("")
def delete_all_confirmed_meetings(
    db: Session = Depends(get_db),
    refresh: RefreshCoordinator = Depends(get_refresh_coordinator),
) -> Dict[str, int]:
    """Remove every confirmed meeting (admin only, frees all slots)."""
    count = booking_service.delete_all_confirmed_meetings(db, refresh=refresh)
    return {"deleted_count": count}
