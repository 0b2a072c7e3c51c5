from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator

WEEKEND_DAYS = (5, 6)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value, "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month length."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = (date(year + month // 12, month % 12 + 1, 1) - timedelta(days=1)).day
    return date(year, month, min(day.day, last_day))


def format_minutes(minutes: int, *, signed: bool = False) -> str:
    """Render minutes as HH:MM, optionally prefixed with + or -."""
    sign = ""
    if signed:
        sign = "-" if minutes < 0 else "+"
    total = abs(minutes) if signed else minutes
    return f"{sign}{total // 60:02d}:{total % 60:02d}"
