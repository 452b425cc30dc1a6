# tests/test_calendar_service.py
from dataclasses import dataclass
from datetime import date, time

from booking_portal.services import calendar_service as cal
from booking_portal.services.calendar_service import CalendarFilter, CalendarViewState

# Wednesday
TODAY = date(2025, 1, 15)


@dataclass
class FakeMeeting:
    id: int
    meeting_date: date
    start_time: time = time(10, 0)
    end_time: time = time(10, 30)
    requester_id: str = "3f2b8c1e-9a4d-4c6e-8b7a-1d2e3f4a5b6c"
    requester_name: str = None


def _meetings():
    return [
        FakeMeeting(1, date(2025, 1, 15)),
        FakeMeeting(2, date(2025, 1, 15), time(14, 0), time(15, 0)),
        FakeMeeting(3, date(2025, 1, 13)),
        FakeMeeting(4, date(2025, 1, 31)),
        FakeMeeting(5, date(2025, 2, 1)),
        FakeMeeting(6, date(2024, 12, 30)),
        FakeMeeting(7, date(2025, 3, 10)),
    ]


def test_week_view_always_has_seven_monday_first_cells():
    state = cal.initial_state(TODAY, CalendarFilter.THIS_WEEK)

    for meetings in ([], _meetings()):
        grid = cal.render_calendar(state, meetings, TODAY)
        assert len(grid.cells) == 7
        assert grid.cells[0].date == date(2025, 1, 13)
        assert grid.cells[-1].date == date(2025, 1, 19)
        assert grid.weekday_headers[0] == "Mon"
        assert all(c.in_visible_month for c in grid.cells)


def test_week_view_ignores_visible_month():
    state = CalendarViewState(filter=CalendarFilter.THIS_WEEK, visible_month=date(2025, 6, 1))

    grid = cal.render_calendar(state, [], TODAY)
    assert grid.cells[0].date == date(2025, 1, 13)
    assert grid.title == "Jan 13 - Jan 19, 2025"


def test_today_view_is_a_single_cell():
    grid = cal.render_calendar(cal.initial_state(TODAY, CalendarFilter.TODAY), _meetings(), TODAY)

    assert len(grid.cells) == 1
    assert grid.columns == 1
    assert grid.cells[0].is_today
    assert [m.id for m in grid.cells[0].meetings] == [1, 2]
    assert grid.title == "Wednesday, January 15, 2025"


def test_month_grid_is_padded_to_whole_sunday_weeks():
    for month in (date(2025, 1, 1), date(2025, 2, 1), date(2025, 6, 1), date(2026, 2, 1)):
        days = cal.month_grid_days(month)
        assert len(days) % 7 == 0
        # Sunday first, Saturday last
        assert days[0].weekday() == 6
        assert days[-1].weekday() == 5
        assert days[0] <= month <= days[-1]


def test_month_view_buckets_meetings_and_flags_other_month_cells():
    state = cal.initial_state(TODAY)
    grid = cal.render_calendar(state, _meetings(), TODAY)

    by_date = {c.date: c for c in grid.cells}
    assert grid.cells[0].date == date(2024, 12, 29)
    assert grid.cells[-1].date == date(2025, 2, 1)
    assert len(grid.cells) == 35

    assert [m.id for m in by_date[date(2025, 1, 15)].meetings] == [1, 2]
    # Leading/trailing days are de-emphasised but keep their meetings
    assert not by_date[date(2024, 12, 30)].in_visible_month
    assert [m.id for m in by_date[date(2024, 12, 30)].meetings] == [6]
    assert [m.id for m in by_date[date(2025, 2, 1)].meetings] == [5]
    assert grid.weekday_headers[0] == "Sun"
    assert grid.title == "January 2025"


def test_filters_use_inclusive_bounds():
    meetings = _meetings()

    assert [m.id for m in cal.filter_meetings(meetings, CalendarFilter.TODAY, TODAY)] == [1, 2]
    assert [m.id for m in cal.filter_meetings(meetings, CalendarFilter.THIS_WEEK, TODAY)] == [1, 2, 3]
    assert [m.id for m in cal.filter_meetings(meetings, CalendarFilter.THIS_MONTH, TODAY)] == [1, 2, 3, 4]
    assert len(cal.filter_meetings(meetings, CalendarFilter.ALL, TODAY)) == len(meetings)


def test_all_filter_counts_everything_while_showing_one_month():
    state = cal.initial_state(TODAY, CalendarFilter.ALL)
    grid = cal.render_calendar(state, _meetings(), TODAY)

    assert grid.count == 7
    assert len(grid.cells) == 35

    month_grid = cal.render_calendar(cal.initial_state(TODAY), _meetings(), TODAY)
    assert month_grid.count == 4


def test_day_expands_only_when_it_has_meetings():
    meetings = _meetings()
    state = cal.initial_state(TODAY)

    empty_day = cal.toggle_day(state, date(2025, 1, 16), meetings)
    assert empty_day.expanded_day is None

    expanded = cal.toggle_day(state, date(2025, 1, 15), meetings)
    assert expanded.expanded_day == date(2025, 1, 15)
    # Expanding a day does not expand its meetings
    assert expanded.expanded_meeting_id is None

    grid = cal.render_calendar(expanded, meetings, TODAY)
    assert [c.date for c in grid.cells if c.expanded] == [date(2025, 1, 15)]

    collapsed = cal.toggle_day(expanded, date(2025, 1, 15), meetings)
    assert collapsed.expanded_day is None


def test_only_one_meeting_is_expanded_at_a_time():
    state = cal.initial_state(TODAY)

    state = cal.toggle_meeting(state, 1)
    assert state.expanded_meeting_id == 1
    state = cal.toggle_meeting(state, 3)
    assert state.expanded_meeting_id == 3
    state = cal.toggle_meeting(state, 3)
    assert state.expanded_meeting_id is None


def test_meeting_expansion_is_independent_of_day_expansion():
    meetings = _meetings()
    state = cal.toggle_meeting(cal.initial_state(TODAY), 4)
    state = cal.toggle_day(state, date(2025, 1, 15), meetings)

    assert state.expanded_meeting_id == 4
    assert state.expanded_day == date(2025, 1, 15)


def test_switching_filter_resets_expansion_and_month():
    meetings = _meetings()
    state = cal.initial_state(TODAY, CalendarFilter.THIS_WEEK)
    state = cal.toggle_day(state, date(2025, 1, 15), meetings)
    state = cal.toggle_meeting(state, 2)
    state = cal.navigate_month(state, 3)

    assert state.expanded_day is None
    assert state.expanded_meeting_id is None

    state = cal.toggle_day(state, date(2025, 1, 15), meetings)
    state = cal.toggle_meeting(state, 2)
    state = cal.change_filter(state, CalendarFilter.THIS_MONTH, TODAY)

    assert state.expanded_day is None
    assert state.expanded_meeting_id is None
    assert state.visible_month == date(2025, 1, 1)


def test_navigate_month_wraps_years():
    state = cal.initial_state(date(2025, 12, 3))

    assert cal.navigate_month(state, 1).visible_month == date(2026, 1, 1)
    assert cal.navigate_month(state, -12).visible_month == date(2024, 12, 1)


def test_render_anchors_on_month_of_anchor_date():
    grid = cal.render(CalendarFilter.THIS_MONTH, date(2025, 3, 20), _meetings(), today=TODAY)

    assert grid.title == "March 2025"
    march_cells = [c for c in grid.cells if c.in_visible_month]
    assert len(march_cells) == 31
    assert [m.id for c in grid.cells for m in c.meetings] == [7]


def test_describe_meeting_formats_time_range_and_duration():
    details = cal.describe_meeting(FakeMeeting(1, TODAY, time(14, 0), time(15, 30)))
    assert details == {"time_range": "2:00 PM - 3:30 PM", "duration": "1h 30m"}

    late = cal.describe_meeting(FakeMeeting(2, TODAY, time(22, 0), time(0, 0)))
    assert late == {"time_range": "10:00 PM - 12:00 AM", "duration": "2h"}


def test_summary_counts_follow_the_visible_month_after_navigation():
    meetings = [
        FakeMeeting(1, date(2025, 1, 10)),
        FakeMeeting(2, date(2025, 2, 3)),
        FakeMeeting(3, date(2025, 2, 20)),
        FakeMeeting(4, TODAY),
    ]
    state = cal.navigate_month(cal.initial_state(TODAY), 1)

    grid = cal.render_calendar(state, meetings, TODAY)

    assert grid.title == "February 2025"
    assert grid.visible_month_count == 2
    assert grid.total_count == 4
    assert grid.today_count == 1
    # The filter badge still counts the current month
    assert grid.count == 2

    back = cal.render_calendar(cal.navigate_month(state, -1), meetings, TODAY)
    assert back.visible_month_count == 2
