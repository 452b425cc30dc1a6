# booking_portal/services/slot_views.py
import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Tuple

from sqlalchemy.orm import Session

from booking_portal.schemas.availability import AvailabilityPolicy
from booking_portal.services import meeting_store
from booking_portal.services.policy_store import load_policy
from booking_portal.services.refresh_service import RefreshCoordinator, get_refresh_coordinator
from booking_portal.services.slot_service import TimeSlot, generate_slots

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotListing:
    day: date
    slot_duration_minutes: int
    slots: Tuple[TimeSlot, ...]

    def is_current_for(self, day: date) -> bool:
        """Callers drop a listing whose date no longer matches what the user is looking at."""
        return self.day == day

    @property
    def first_available(self) -> Optional[TimeSlot]:
        return self.slots[0] if self.slots else None


def available_slots(
    db: Session,
    day: date,
    policy: Optional[AvailabilityPolicy] = None,
) -> SlotListing:
    if policy is None:
        policy = load_policy(db)
    slots = generate_slots(policy, day, meeting_store.booked_intervals(db, day))
    return SlotListing(
        day=day,
        slot_duration_minutes=policy.slot_duration_minutes,
        slots=tuple(slots),
    )


class SlotListView:
    """
    Slot list for the date a user is browsing, recomputed lazily after
    any booking mutation publishes a refresh.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        refresh: Optional[RefreshCoordinator] = None,
    ) -> None:
        self._session_factory = session_factory
        self._lock = threading.Lock()
        self._listing: Optional[SlotListing] = None
        self._stale = True
        self._generation = 0
        self.recompute_count = 0
        self._unsubscribe = (refresh or get_refresh_coordinator()).subscribe(self.invalidate)

    def invalidate(self) -> None:
        with self._lock:
            self._stale = True
            self._generation += 1

    def slots_for(self, day: date) -> SlotListing:
        with self._lock:
            if not self._stale and self._listing is not None and self._listing.is_current_for(day):
                return self._listing
            generation = self._generation

        db = self._session_factory()
        try:
            listing = available_slots(db, day)
        finally:
            db.close()

        with self._lock:
            self._listing = listing
            # A refresh that arrived mid-computation keeps the view stale
            self._stale = generation != self._generation
            self.recompute_count += 1
        logger.debug("Recomputed %d slots for %s", len(listing.slots), day.isoformat())
        return listing

    def close(self) -> None:
        self._unsubscribe()
