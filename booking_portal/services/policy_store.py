# booking_portal/services/policy_store.py
import logging

from sqlalchemy.orm import Session

from booking_portal import errors
from booking_portal.config import get_settings
from booking_portal.models.config_entry import ConfigEntry
from booking_portal.schemas.availability import AvailabilityPolicy, default_policy
from booking_portal.services.meeting_store import committing, store_errors

logger = logging.getLogger(__name__)


def load_policy(db: Session) -> AvailabilityPolicy:
    """
    Read the availability policy from the config store.

    Falls back to the default policy (weekdays 09-17) when nothing has been
    saved yet.
    """
    settings = get_settings()
    with store_errors(db, "load availability policy"):
        entry = db.get(ConfigEntry, settings.AVAILABILITY_POLICY_KEY)

    if entry is None or not entry.value:
        return default_policy(settings.DEFAULT_SLOT_DURATION_MINUTES)

    return AvailabilityPolicy.model_validate(entry.value)


def save_policy(db: Session, policy: AvailabilityPolicy) -> AvailabilityPolicy:
    problems = policy.bounds_errors()
    if problems:
        raise errors.ValidationError("; ".join(problems))

    key = get_settings().AVAILABILITY_POLICY_KEY
    with committing(db, "save availability policy"):
        entry = db.get(ConfigEntry, key)
        if entry is None:
            entry = ConfigEntry(key=key)
        entry.value = policy.model_dump(mode="json")
        db.add(entry)

    logger.info("Availability policy saved (slot_duration=%d)", policy.slot_duration_minutes)
    return policy
