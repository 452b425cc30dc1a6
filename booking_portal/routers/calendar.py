# booking_portal/routers/calendar.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from booking_portal.db.session import get_db
from booking_portal.schemas.calendar import (
    CalendarCellOut,
    CalendarGridOut,
    CalendarMeetingOut,
    CalendarStateIn,
    CalendarStateOut,
    CalendarTransition,
)
from booking_portal.schemas.meetings import ConfirmedMeetingOut
from booking_portal.services import calendar_service as cal
from booking_portal.services import meeting_store

router = APIRouter()


def _state_from_payload(payload: CalendarStateIn) -> cal.CalendarViewState:
    visible = payload.visible_month or cal.today_in_zone()
    return cal.CalendarViewState(
        filter=payload.filter,
        visible_month=cal.first_of_month(visible),
        expanded_day=payload.expanded_day,
        expanded_meeting_id=payload.expanded_meeting_id,
    )


def _state_out(state: cal.CalendarViewState) -> CalendarStateOut:
    return CalendarStateOut(
        filter=state.filter,
        visible_month=state.visible_month,
        expanded_day=state.expanded_day,
        expanded_meeting_id=state.expanded_meeting_id,
    )


@router.post("/render", response_model=CalendarGridOut)
def render_calendar(
    payload: CalendarStateIn,
    db: Session = Depends(get_db),
) -> CalendarGridOut:
    """
    Render the confirmed-meetings calendar for the given view state.

    The client keeps the returned state and sends it back with each
    interaction (see /calendar/transition).
    """
    state = _state_from_payload(payload)
    today = cal.today_in_zone()
    grid = cal.render_calendar(state, meeting_store.fetch_confirmed_meetings(db), today)

    cells = []
    for cell in grid.cells:
        meetings = []
        for m in cell.meetings:
            details = cal.describe_meeting(m)
            meetings.append(
                CalendarMeetingOut(
                    **ConfirmedMeetingOut.model_validate(m).model_dump(),
                    time_range=details["time_range"],
                    duration=details["duration"],
                    expanded=m.id == grid.expanded_meeting_id,
                )
            )
        cells.append(
            CalendarCellOut(
                date=cell.date,
                is_today=cell.is_today,
                in_visible_month=cell.in_visible_month,
                expanded=cell.expanded,
                meetings=meetings,
            )
        )

    return CalendarGridOut(
        state=_state_out(state),
        title=grid.title,
        filter_label=cal.FILTER_LABELS[grid.filter],
        columns=grid.columns,
        weekday_headers=list(grid.weekday_headers),
        count=grid.count,
        total_count=grid.total_count,
        today_count=grid.today_count,
        visible_month_count=grid.visible_month_count,
        cells=cells,
    )


@router.post("/transition", response_model=CalendarStateOut)
def transition_calendar(
    payload: CalendarTransition,
    db: Session = Depends(get_db),
) -> CalendarStateOut:
    state = _state_from_payload(payload.state)

    if payload.action == "change_filter":
        if payload.filter is None:
            raise HTTPException(status_code=400, detail="filter is required")
        state = cal.change_filter(state, payload.filter, cal.today_in_zone())
    elif payload.action == "navigate_month":
        state = cal.navigate_month(state, payload.step)
    elif payload.action == "toggle_day":
        if payload.day is None:
            raise HTTPException(status_code=400, detail="day is required")
        state = cal.toggle_day(
            state,
            payload.day,
            meeting_store.fetch_confirmed_meetings(db, on=payload.day),
        )
    else:
        if payload.meeting_id is None:
            raise HTTPException(status_code=400, detail="meeting_id is required")
        state = cal.toggle_meeting(state, payload.meeting_id)

    return _state_out(state)
