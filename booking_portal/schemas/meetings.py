# booking_portal/schemas/meetings.py
from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class MeetingRequestCreate(BaseModel):
    requester_id: str
    requested_date: date
    # "14:30" or "2:30 PM"; parsed by the booking service
    start_time: str
    title: str
    description: Optional[str] = None
    duration_minutes: Optional[int] = None
    requester_name: Optional[str] = None

    @field_validator("duration_minutes")
    def validate_duration(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("duration_minutes must be positive")
        return v


class MeetingRequestDecision(BaseModel):
    admin_notes: Optional[str] = None


class MeetingRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    requester_id: str
    requester_name: Optional[str] = None
    requested_date: date
    start_time: time
    duration_minutes: int
    title: str
    description: Optional[str] = None
    status: str
    admin_notes: Optional[str] = None
    created_at: datetime
    resolved_at: Optional[datetime] = None


class ConfirmedMeetingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    meeting_request_id: Optional[int] = None
    requester_id: str
    display_name: str
    meeting_date: date
    start_time: time
    end_time: time
    title: str
    description: Optional[str] = None
    created_at: datetime


class TimeSlotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    start_time: time
    duration_minutes: int
    available: bool


class SlotListingOut(BaseModel):
    date: date
    slot_duration_minutes: int
    slots: List[TimeSlotOut]


class AvailabilityCheckOut(BaseModel):
    date: date
    start_time: time
    duration_minutes: int
    available: bool
