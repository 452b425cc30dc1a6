# booking_portal/routers/availability.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from booking_portal.db.session import get_db
from booking_portal.schemas.availability import AvailabilityPolicy
from booking_portal.schemas.meetings import AvailabilityCheckOut, SlotListingOut, TimeSlotOut
from booking_portal.services.conflict_service import is_available
from booking_portal.services.policy_store import load_policy, save_policy
from booking_portal.services.refresh_service import RefreshCoordinator, get_refresh_coordinator
from booking_portal.services.slot_views import available_slots
from booking_portal.services.time_utils import parse_time_of_day

router = APIRouter()


@router.get("/policy", response_model=AvailabilityPolicy)
def get_policy(db: Session = Depends(get_db)) -> AvailabilityPolicy:
    return load_policy(db)


@router.put("/policy", response_model=AvailabilityPolicy)
def put_policy(
    policy: AvailabilityPolicy,
    db: Session = Depends(get_db),
    refresh: RefreshCoordinator = Depends(get_refresh_coordinator),
) -> AvailabilityPolicy:
    """
    Replace the availability policy (admin only).

    Every available day must have start_hour < end_hour.
    """
    saved = save_policy(db, policy)
    refresh.publish()
    return saved


@router.get("/slots", response_model=SlotListingOut)
def list_slots(
    day: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
) -> SlotListingOut:
    """
    Bookable slots for one date, earliest first.

    An unavailable weekday gives an empty list, not an error.
    """
    listing = available_slots(db, day)
    return SlotListingOut(
        date=listing.day,
        slot_duration_minutes=listing.slot_duration_minutes,
        slots=[TimeSlotOut.model_validate(s) for s in listing.slots],
    )


@router.get("/check", response_model=AvailabilityCheckOut)
def check_availability(
    day: date = Query(..., alias="date"),
    start_time: str = Query(...),
    duration_minutes: Optional[int] = Query(default=None, gt=0),
    db: Session = Depends(get_db),
) -> AvailabilityCheckOut:
    start = parse_time_of_day(start_time)
    if duration_minutes is None:
        duration_minutes = load_policy(db).slot_duration_minutes

    return AvailabilityCheckOut(
        date=day,
        start_time=start,
        duration_minutes=duration_minutes,
        available=is_available(db, day, start, duration_minutes),
    )
