from __future__ import annotations

from datetime import date, datetime, timedelta

DAYS_PER_WEEK = 7


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_iso_date(value: str | date | datetime) -> date:
    if isinstance(value, (date, datetime)):
        return as_date(value)
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO date string, got {type(value).__name__}")
    text = value.strip()
    if len(text) != 10 or text[4] != "-" or text[7] != "-":
        raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
    return date.fromisoformat(text)


def days_between(start: date | datetime, end: date | datetime) -> int:
    return (as_date(end) - as_date(start)).days


def weeks_between(start: date | datetime, end: date | datetime) -> int:
    return days_between(start, end) // DAYS_PER_WEEK


def months_between(start: date | datetime, end: date | datetime) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def is_same_calendar_day(a: date | datetime, b: date | datetime) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def weekday_index(value: date | datetime) -> int:
    # Sunday=0
    return (value.weekday() + 1) % DAYS_PER_WEEK


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    return (next_month - timedelta(days=1)).day


def week_dates(value: date | datetime) -> list[date]:
    day = as_date(value)
    start = day - timedelta(days=weekday_index(day))
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def generate_month_grid(value: date | datetime) -> list[date]:
    first = as_date(value).replace(day=1)
    total_days = days_in_month(first.year, first.month)

    leading = weekday_index(first)
    trailing = (-(leading + total_days)) % DAYS_PER_WEEK

    grid_start = first - timedelta(days=leading)
    length = leading + total_days + trailing
    return [grid_start + timedelta(days=offset) for offset in range(length)]
