# tests/test_time_utils.py
from datetime import time

import pytest

from booking_portal import errors
from booking_portal.services.time_utils import (
    duration_label,
    end_time_for,
    format_time_12h,
    parse_time_of_day,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("09:00", time(9, 0)),
        ("14:30:00", time(14, 30)),
        ("2:30 PM", time(14, 30)),
        ("2:30pm", time(14, 30)),
        ("12:00 AM", time(0, 0)),
        ("12:15 pm", time(12, 15)),
        ("10:00 a.m.", time(10, 0)),
    ],
)
def test_parse_time_of_day_accepts_24h_and_12h(raw, expected):
    assert parse_time_of_day(raw) == expected


@pytest.mark.parametrize("raw", ["", "noon", "25:00", "10:75", "13:00 PM", "10"])
def test_parse_time_of_day_rejects_garbage(raw):
    with pytest.raises(errors.ValidationError):
        parse_time_of_day(raw)


def test_end_time_for_stays_inside_the_day():
    assert end_time_for(time(22, 0), 120) == time(0, 0)
    assert end_time_for(time(16, 30), 30) == time(17, 0)
    with pytest.raises(ValueError):
        end_time_for(time(23, 45), 30)


def test_display_helpers():
    assert format_time_12h(time(0, 5)) == "12:05 AM"
    assert format_time_12h(time(14, 0)) == "2:00 PM"
    assert duration_label(time(9, 0), time(9, 30)) == "30 min"
    assert duration_label(time(9, 0), time(10, 0)) == "1 hour"
    assert duration_label(time(9, 0), time(10, 30)) == "1h 30m"
    assert duration_label(time(9, 0), time(11, 0)) == "2h"
