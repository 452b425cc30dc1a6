# booking_portal/schemas/calendar.py
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from booking_portal.schemas.meetings import ConfirmedMeetingOut
from booking_portal.services.calendar_service import CalendarFilter


class CalendarStateIn(BaseModel):
    filter: CalendarFilter = CalendarFilter.THIS_MONTH
    # Any date inside the month to show; defaults to the current month
    visible_month: Optional[date] = None
    expanded_day: Optional[date] = None
    expanded_meeting_id: Optional[int] = None


class CalendarStateOut(BaseModel):
    filter: CalendarFilter
    visible_month: date
    expanded_day: Optional[date] = None
    expanded_meeting_id: Optional[int] = None


class CalendarTransition(BaseModel):
    state: CalendarStateIn = Field(default_factory=CalendarStateIn)
    action: Literal["change_filter", "navigate_month", "toggle_day", "toggle_meeting"]
    filter: Optional[CalendarFilter] = None
    step: int = 0
    day: Optional[date] = None
    meeting_id: Optional[int] = None


class CalendarMeetingOut(ConfirmedMeetingOut):
    time_range: str
    duration: str
    expanded: bool


class CalendarCellOut(BaseModel):
    date: date
    is_today: bool
    in_visible_month: bool
    expanded: bool
    meetings: List[CalendarMeetingOut]


class CalendarGridOut(BaseModel):
    state: CalendarStateOut
    title: str
    filter_label: str
    columns: int
    weekday_headers: List[str]
    count: int
    total_count: int
    today_count: int
    visible_month_count: int
    cells: List[CalendarCellOut]
