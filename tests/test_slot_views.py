# tests/test_slot_views.py
from datetime import date, time

from sqlalchemy.orm import Session

from booking_portal.db.session import engine, SessionLocal
from booking_portal.models import Base, ConfigEntry, ConfirmedMeeting, MeetingRequest
from booking_portal.services import booking_service
from booking_portal.services.refresh_service import RefreshCoordinator
from booking_portal.services.slot_views import SlotListView

MONDAY = date(2025, 1, 6)
TUESDAY = date(2025, 1, 7)
REQUESTER = "3f2b8c1e-9a4d-4c6e-8b7a-1d2e3f4a5b6c"


def setup_module(module):
    Base.metadata.create_all(bind=engine)


def _clean_db():
    db: Session = SessionLocal()
    try:
        db.query(ConfirmedMeeting).delete()
        db.query(MeetingRequest).delete()
        db.query(ConfigEntry).delete()
        db.commit()
    finally:
        db.close()


def test_view_is_reused_until_a_booking_mutation_publishes():
    _clean_db()
    refresh = RefreshCoordinator()
    view = SlotListView(SessionLocal, refresh=refresh)
    try:
        listing = view.slots_for(MONDAY)
        assert len(listing.slots) == 16
        assert listing.first_available.start_time == time(9, 0)
        assert view.slots_for(MONDAY) is listing
        assert view.recompute_count == 1

        db = SessionLocal()
        try:
            mr = booking_service.submit_meeting_request(
                db,
                requester_id=REQUESTER,
                requested_date=MONDAY,
                start_time="09:00",
                title="Intro",
            )
            booking_service.confirm_meeting_request(db, mr.id, refresh=refresh)
        finally:
            db.close()

        fresh = view.slots_for(MONDAY)
        assert view.recompute_count == 2
        assert fresh.first_available.start_time == time(9, 30)
        assert len(fresh.slots) == 15
    finally:
        view.close()

    assert refresh.subscriber_count == 0


def test_listing_for_another_date_is_stale():
    _clean_db()
    view = SlotListView(SessionLocal, refresh=RefreshCoordinator())
    try:
        monday = view.slots_for(MONDAY)
        tuesday = view.slots_for(TUESDAY)

        assert not monday.is_current_for(TUESDAY)
        assert tuesday.is_current_for(TUESDAY)
        assert view.recompute_count == 2
    finally:
        view.close()
