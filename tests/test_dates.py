"""
Unit tests for date and deadline arithmetic.
"""
from datetime import date, datetime, timedelta

import pytest

from jobtrack.core.exceptions import InvalidDateError
from jobtrack.services.dates import (
    build_calendar_grid,
    calculate_d_day,
    days_in_month,
    first_day_of_week,
    format_d_day,
    format_d_day_with_expiry,
    get_week_end,
    get_week_start,
    month_bounds,
    shift_month,
    weekdays_through,
)


def test_d_day_sign_follows_date_order():
    assert calculate_d_day("2026-03-10", "2026-03-02") == 8
    assert calculate_d_day("2026-03-02", "2026-03-10") == -8
    assert calculate_d_day("2026-03-02", "2026-03-02") == 0


def test_d_day_ignores_time_of_day():
    reference = datetime(2026, 3, 2, 23, 59)
    assert calculate_d_day("2026-03-03", reference) == 1


def test_d_day_without_deadline():
    assert calculate_d_day(None, "2026-03-02") is None
    assert calculate_d_day("", "2026-03-02") is None


def test_d_day_defaults_to_today():
    tomorrow = date.today() + timedelta(days=1)
    assert calculate_d_day(tomorrow.isoformat()) == 1


def test_d_day_rejects_malformed_deadline():
    with pytest.raises(InvalidDateError):
        calculate_d_day("not-a-date", "2026-03-02")


def test_invalid_date_error_is_value_error():
    with pytest.raises(ValueError):
        calculate_d_day("2026-13-45", "2026-03-02")


def test_format_d_day():
    assert format_d_day(None) == "-"
    assert format_d_day(date.today()) == "D-Day"
    assert format_d_day("2026-03-05", "2026-03-02") == "D-3"
    assert format_d_day("2026-02-27", "2026-03-02") == "D+3"


def test_format_d_day_with_expiry_marks_past_deadlines():
    assert format_d_day_with_expiry(None, "2026-03-02") == "-"
    assert format_d_day_with_expiry("2026-03-02", "2026-03-02") == "D-Day"
    assert format_d_day_with_expiry("2026-03-05", "2026-03-02") == "D-3"
    assert format_d_day_with_expiry("2026-03-01", "2026-03-02") == "마감"


def test_week_start_is_shared_across_the_week():
    # 2026-03-02 is a Monday
    days = [date(2026, 3, 2) + timedelta(days=offset) for offset in range(7)]
    starts = {get_week_start(day) for day in days}
    assert starts == {datetime(2026, 3, 2, 0, 0)}


def test_sunday_belongs_to_previous_week():
    assert get_week_start("2026-03-08") == datetime(2026, 3, 2)
    assert get_week_start("2026-03-09") == datetime(2026, 3, 9)


def test_week_end_is_following_sunday():
    for offset in range(14):
        day = date(2026, 3, 1) + timedelta(days=offset)
        end = get_week_end(get_week_start(day))
        assert end.weekday() == 6
        assert (end.hour, end.minute, end.second, end.microsecond) == (23, 59, 59, 999000)
        assert end.date() - get_week_start(day).date() == timedelta(days=6)


def test_weekdays_through_stops_at_today():
    assert weekdays_through("2026-03-04") == ["2026-03-02", "2026-03-03", "2026-03-04"]


def test_weekdays_through_skips_weekend():
    assert weekdays_through("2026-03-08") == [
        "2026-03-02", "2026-03-03", "2026-03-04", "2026-03-05", "2026-03-06",
    ]


@pytest.mark.parametrize("year,month", [(2026, 2), (2026, 3), (2024, 2), (2025, 6), (2026, 11)])
def test_calendar_grid_shape(year, month):
    cells = build_calendar_grid(year, month, today="2026-03-02")
    leading = first_day_of_week(year, month)
    total_days = days_in_month(year, month)

    assert len(cells) % 7 == 0
    assert len(cells) >= leading + total_days
    assert sum(1 for cell in cells if cell.is_current_month) == total_days
    assert all(cell.day == 0 and cell.date_str == "" for cell in cells[:leading])


def test_calendar_grid_marks_today_only_in_its_month():
    march = build_calendar_grid(2026, 3, today="2026-03-17")
    assert [cell.date_str for cell in march if cell.is_today] == ["2026-03-17"]

    april = build_calendar_grid(2026, 4, today="2026-03-17")
    assert not any(cell.is_today for cell in april)


def test_calendar_grid_blank_cells_are_independent():
    cells = build_calendar_grid(2026, 3, today="2026-03-02")
    blanks = [cell for cell in cells if not cell.is_current_month]
    blanks[0].day = 99
    assert all(cell.day == 0 for cell in blanks[1:])


def test_calendar_grid_rejects_invalid_month():
    with pytest.raises(InvalidDateError):
        build_calendar_grid(2026, 13)


def test_month_helpers():
    assert month_bounds(2026, 2) == ("2026-02-01", "2026-02-28")
    assert shift_month(2026, 1, -1) == (2025, 12)
    assert shift_month(2026, 12, 1) == (2027, 1)
