# booking_portal/models/meeting_request.py
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Date, DateTime, Integer, String, Text, Time

from booking_portal.models.base import Base


class MeetingRequestStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"


class MeetingRequest(Base):
    __tablename__ = "meeting_requests"

    id = Column(Integer, primary_key=True, index=True)

    # UUID of the portal user asking for the meeting
    requester_id = Column(String(36), nullable=False, index=True)
    requester_name = Column(String(255), nullable=True)

    requested_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, nullable=False)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Store status as a simple string; MeetingRequestStatus is still used in Python
    status = Column(
        String(32),
        nullable=False,
        default=MeetingRequestStatus.PENDING.value,
        index=True,
    )
    admin_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    # Set once, when the request leaves PENDING
    resolved_at = Column(DateTime, nullable=True)
