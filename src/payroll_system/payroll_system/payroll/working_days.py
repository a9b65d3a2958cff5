from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Iterator

from ..common.datetime_utils import iter_dates, weekday_sunday_first
from ..core.exceptions import InvalidPeriod
from ..settings.model import normalize_holidays


def iter_working_days(
    period_start: date,
    period_end: date,
    working_days_per_week: Iterable[int],
    holidays: Iterable[Any] = frozenset(),
) -> Iterator[date]:
    """Dates in [period_start, period_end] that fall on a working weekday and are not holidays.

    Weekday indices are 0=Sunday .. 6=Saturday. Holidays may be dates or
    ISO ``YYYY-MM-DD`` strings.
    """
    if period_end < period_start:
        raise InvalidPeriod(f"Period end {period_end} precedes start {period_start}")

    weekdays = frozenset(int(d) for d in working_days_per_week)
    days_off = normalize_holidays(holidays)
    for day in iter_dates(period_start, period_end):
        if weekday_sunday_first(day) in weekdays and day not in days_off:
            yield day


def count_working_days(
    period_start: date,
    period_end: date,
    working_days_per_week: Iterable[int],
    holidays: Iterable[Any] = frozenset(),
) -> int:
    return sum(1 for _ in iter_working_days(period_start, period_end, working_days_per_week, holidays))
