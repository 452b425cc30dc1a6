# booking_portal/services/calendar_service.py
"""
Calendar rendering of confirmed meetings.

Everything here is pure: a CalendarViewState goes in, a CalendarGrid or a
new CalendarViewState comes out. The UI keeps the state value and hands it
back on the next interaction.
"""
import calendar
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple
from zoneinfo import ZoneInfo

from booking_portal.config import get_settings
from booking_portal.services.time_utils import duration_label, format_time_12h


class CalendarFilter(str, Enum):
    TODAY = "today"
    THIS_WEEK = "this-week"
    THIS_MONTH = "this-month"
    ALL = "all"


MONTH_FILTERS = {CalendarFilter.THIS_MONTH, CalendarFilter.ALL}

FILTER_LABELS = {
    CalendarFilter.TODAY: "Today",
    CalendarFilter.THIS_WEEK: "This Week",
    CalendarFilter.THIS_MONTH: "This Month",
    CalendarFilter.ALL: "All Time",
}

WEEK_HEADERS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class MeetingLike(Protocol):
    id: int
    meeting_date: date


@dataclass(frozen=True)
class CalendarViewState:
    filter: CalendarFilter
    visible_month: date
    expanded_day: Optional[date] = None
    expanded_meeting_id: Optional[int] = None


@dataclass(frozen=True)
class CalendarCell:
    date: date
    meetings: Tuple[MeetingLike, ...]
    is_today: bool
    in_visible_month: bool
    expanded: bool

    @property
    def has_meetings(self) -> bool:
        return bool(self.meetings)


@dataclass(frozen=True)
class CalendarGrid:
    filter: CalendarFilter
    title: str
    columns: int
    weekday_headers: Tuple[str, ...]
    cells: Tuple[CalendarCell, ...]
    count: int
    expanded_meeting_id: Optional[int]
    total_count: int
    today_count: int
    visible_month_count: int


def today_in_zone(tz_name: Optional[str] = None) -> date:
    return datetime.now(ZoneInfo(tz_name or get_settings().TIMEZONE)).date()


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def add_months(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def week_bounds(day: date) -> Tuple[date, date]:
    """Monday..Sunday of the week containing `day`."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> Tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def _days_between(start: date, end: date) -> List[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def month_grid_days(month: date) -> List[date]:
    """Days of `month` padded back to a Sunday and forward to a Saturday."""
    first, last = month_bounds(month)
    # date.weekday(): MON=0 .. SUN=6; grid columns start on Sunday
    lead = (first.weekday() + 1) % 7
    trail = 6 - (last.weekday() + 1) % 7
    return _days_between(first - timedelta(days=lead), last + timedelta(days=trail))


# --- state transitions -----------------------------------------------------


def initial_state(today: date, calendar_filter: CalendarFilter = CalendarFilter.THIS_MONTH) -> CalendarViewState:
    return CalendarViewState(filter=calendar_filter, visible_month=first_of_month(today))


def change_filter(state: CalendarViewState, new_filter: CalendarFilter, today: date) -> CalendarViewState:
    visible_month = first_of_month(today) if new_filter in MONTH_FILTERS else state.visible_month
    return CalendarViewState(filter=new_filter, visible_month=visible_month)


def navigate_month(state: CalendarViewState, step: int) -> CalendarViewState:
    return CalendarViewState(
        filter=state.filter,
        visible_month=add_months(state.visible_month, step),
    )


def toggle_day(
    state: CalendarViewState,
    day: date,
    meetings: Iterable[MeetingLike],
) -> CalendarViewState:
    """Expand `day` (only if it has meetings) or collapse it if already expanded."""
    if state.expanded_day == day:
        return replace(state, expanded_day=None)
    if not any(m.meeting_date == day for m in meetings):
        return state
    return replace(state, expanded_day=day)


def toggle_meeting(state: CalendarViewState, meeting_id: int) -> CalendarViewState:
    # Only one meeting in the whole grid may be expanded
    if state.expanded_meeting_id == meeting_id:
        return replace(state, expanded_meeting_id=None)
    return replace(state, expanded_meeting_id=meeting_id)


# --- filtering and rendering -----------------------------------------------


def filter_meetings(
    meetings: Iterable[MeetingLike],
    calendar_filter: CalendarFilter,
    today: date,
) -> List[MeetingLike]:
    if calendar_filter == CalendarFilter.TODAY:
        return [m for m in meetings if m.meeting_date == today]
    if calendar_filter == CalendarFilter.THIS_WEEK:
        start, end = week_bounds(today)
    elif calendar_filter == CalendarFilter.THIS_MONTH:
        start, end = month_bounds(today)
    else:
        return list(meetings)
    return [m for m in meetings if start <= m.meeting_date <= end]


def grid_days(state: CalendarViewState, today: date) -> List[date]:
    if state.filter == CalendarFilter.TODAY:
        return [today]
    if state.filter == CalendarFilter.THIS_WEEK:
        # Always the current week, whatever month is being shown
        return _days_between(*week_bounds(today))
    return month_grid_days(state.visible_month)


def calendar_title(state: CalendarViewState, today: date) -> str:
    if state.filter == CalendarFilter.TODAY:
        return f"{today:%A, %B} {today.day}, {today.year}"
    if state.filter == CalendarFilter.THIS_WEEK:
        start, end = week_bounds(today)
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
    return f"{state.visible_month:%B %Y}"


def render_calendar(
    state: CalendarViewState,
    meetings: Sequence[MeetingLike],
    today: date,
) -> CalendarGrid:
    month_view = state.filter in MONTH_FILTERS
    visible = (state.visible_month.year, state.visible_month.month)

    by_date = {}
    for meeting in meetings:
        by_date.setdefault(meeting.meeting_date, []).append(meeting)

    cells = []
    for day in grid_days(state, today):
        day_meetings = tuple(by_date.get(day, ()))
        cells.append(
            CalendarCell(
                date=day,
                meetings=day_meetings,
                is_today=day == today,
                in_visible_month=not month_view or (day.year, day.month) == visible,
                expanded=bool(day_meetings) and state.expanded_day == day,
            )
        )

    if state.filter == CalendarFilter.TODAY:
        columns, headers = 1, ()
    elif state.filter == CalendarFilter.THIS_WEEK:
        columns, headers = 7, WEEK_HEADERS
    else:
        columns, headers = 7, MONTH_HEADERS

    return CalendarGrid(
        filter=state.filter,
        title=calendar_title(state, today),
        columns=columns,
        weekday_headers=headers,
        cells=tuple(cells),
        count=len(filter_meetings(meetings, state.filter, today)),
        expanded_meeting_id=state.expanded_meeting_id,
        total_count=len(meetings),
        today_count=sum(1 for m in meetings if m.meeting_date == today),
        visible_month_count=sum(
            1 for m in meetings if (m.meeting_date.year, m.meeting_date.month) == visible
        ),
    )


def render(
    calendar_filter: CalendarFilter,
    anchor_date: date,
    meetings: Sequence[MeetingLike],
    today: Optional[date] = None,
) -> CalendarGrid:
    """Render a fresh (nothing expanded) view anchored on `anchor_date`'s month."""
    if today is None:
        today = today_in_zone()
    state = CalendarViewState(filter=calendar_filter, visible_month=first_of_month(anchor_date))
    return render_calendar(state, meetings, today)


def describe_meeting(meeting) -> dict:
    """Display fields for a confirmed meeting."""
    return {
        "time_range": f"{format_time_12h(meeting.start_time)} - {format_time_12h(meeting.end_time)}",
        "duration": duration_label(meeting.start_time, meeting.end_time),
    }
