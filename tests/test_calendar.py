from __future__ import annotations

from datetime import date, datetime

import pytest

from planner.domain.calendar import (
    days_between,
    days_in_month,
    generate_month_grid,
    is_same_calendar_day,
    months_between,
    parse_iso_date,
    week_dates,
    weekday_index,
    weeks_between,
)


def test_days_between_is_signed() -> None:
    assert days_between(date(2024, 1, 1), date(2024, 1, 31)) == 30
    assert days_between(date(2024, 1, 31), date(2024, 1, 1)) == -30


def test_days_between_truncates_time_of_day() -> None:
    start = datetime(2024, 3, 9, 23, 59)
    end = datetime(2024, 3, 11, 0, 1)
    assert days_between(start, end) == 2


def test_weeks_between_floors() -> None:
    anchor = date(2024, 1, 1)
    assert weeks_between(anchor, date(2024, 1, 7)) == 0
    assert weeks_between(anchor, date(2024, 1, 8)) == 1
    assert weeks_between(date(2024, 1, 2), anchor) == -1


def test_months_between_ignores_day_of_month() -> None:
    assert months_between(date(2023, 11, 30), date(2024, 2, 1)) == 3
    assert months_between(date(2024, 5, 1), date(2024, 5, 31)) == 0


def test_same_calendar_day() -> None:
    assert is_same_calendar_day(datetime(2024, 1, 1, 8), date(2024, 1, 1))
    assert not is_same_calendar_day(date(2024, 1, 1), date(2023, 1, 1))


def test_weekday_index_starts_on_sunday() -> None:
    assert weekday_index(date(2024, 1, 7)) == 0
    assert weekday_index(date(2024, 1, 1)) == 1
    assert weekday_index(date(2024, 1, 6)) == 6


def test_days_in_month_handles_leap_years() -> None:
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2023, 12) == 31


def test_parse_iso_date() -> None:
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    assert parse_iso_date(datetime(2024, 2, 29, 12)) == date(2024, 2, 29)
    for bad in ("2023-02-29", "tomorrow", "", None, "2024-01-0199", "20240101", "2024-01-01T10:00", "2024-1-1"):
        with pytest.raises(ValueError):
            parse_iso_date(bad)


def test_week_dates_start_on_sunday() -> None:
    week = week_dates(date(2024, 1, 3))
    assert week[0] == date(2023, 12, 31)
    assert week[-1] == date(2024, 1, 6)
    assert len(week) == 7


def test_month_grid_pads_both_ends() -> None:
    grid = generate_month_grid(date(2024, 2, 15))
    assert len(grid) == 35
    assert grid[0] == date(2024, 1, 28)
    assert grid[-1] == date(2024, 3, 2)


def test_month_grid_without_padding() -> None:
    grid = generate_month_grid(date(2015, 2, 10))
    assert grid[0] == date(2015, 2, 1)
    assert grid[-1] == date(2015, 2, 28)


@pytest.mark.parametrize("year", [2023, 2024])
def test_month_grid_shape_for_every_month(year: int) -> None:
    for month in range(1, 13):
        grid = generate_month_grid(date(year, month, 1))
        assert len(grid) % 7 == 0
        in_month = [day for day in grid if day.month == month]
        assert len(in_month) == days_in_month(year, month)
        assert weekday_index(grid[0]) == 0


def test_parse_iso_date_allows_surrounding_whitespace() -> None:
    assert parse_iso_date(" 2024-01-05 ") == date(2024, 1, 5)
