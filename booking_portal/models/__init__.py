from booking_portal.models.base import Base  # noqa: F401

from booking_portal.models.meeting_request import MeetingRequest  # noqa: F401
from booking_portal.models.confirmed_meeting import ConfirmedMeeting  # noqa: F401
from booking_portal.models.config_entry import ConfigEntry  # noqa: F401
