from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    v = value.strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date in [start, end] inclusive."""
    current = start
    one_day = timedelta(days=1)
    while current <= end:
        yield current
        current += one_day


def weekday_sunday_first(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Elapsed whole minutes from start to end (negative if end < start)."""
    return int((end - start).total_seconds() // 60)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
