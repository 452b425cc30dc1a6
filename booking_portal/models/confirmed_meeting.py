# booking_portal/models/confirmed_meeting.py
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import relationship

from booking_portal.models.base import Base


class ConfirmedMeeting(Base):
    __tablename__ = "confirmed_meetings"

    id = Column(Integer, primary_key=True, index=True)

    meeting_request_id = Column(
        Integer,
        ForeignKey("meeting_requests.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    requester_id = Column(String(36), nullable=False, index=True)
    requester_name = Column(String(255), nullable=True)

    meeting_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    meeting_request = relationship("MeetingRequest", backref="confirmed_meetings")

    @property
    def display_name(self) -> str:
        return self.requester_name or self.requester_id
