"""Pay-period resolution.

A period ``YYYY-MM`` runs from the day after the previous month's payment
date through this month's payment date, so consecutive periods tile the
calendar with no gaps and no overlap. The payment day is capped at 28 so
it exists in every month.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_int_in_range
from ..core.constants import DEFAULT_PERIOD_HISTORY, MAX_SALARY_PAYMENT_DATE
from ..core.exceptions import InvalidPeriod

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class PayPeriod:
    period: str
    period_start: date
    period_end: date

    @property
    def payment_date(self) -> date:
        return self.period_end

    @property
    def label(self) -> str:
        return f"{MONTH_NAMES[self.period_end.month - 1]} {self.period_end.year}"


def parse_period(period: str) -> tuple[int, int]:
    """Split ``YYYY-MM`` into (year, month)."""
    m = _PERIOD_RE.match((period or "").strip())
    if not m:
        raise InvalidPeriod("Period must be formatted as YYYY-MM", period=period, field="period")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12 or year < 1:
        raise InvalidPeriod("Period month must be between 01 and 12", period=period, field="period")
    return year, month


def format_period(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def _next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def resolve_period(period: str, salary_payment_date: int) -> PayPeriod:
    """Resolve a period key to its inclusive [start, end] date range."""
    year, month = parse_period(period)
    pay_day = require_int_in_range(salary_payment_date, "salary_payment_date", 1, MAX_SALARY_PAYMENT_DATE)

    prev_year, prev_month = _previous_month(year, month)
    try:
        period_start = date(prev_year, prev_month, pay_day) + timedelta(days=1)
    except (ValueError, OverflowError):
        raise InvalidPeriod("Period is out of the supported date range", period=period, field="period")
    period_end = date(year, month, pay_day)
    return PayPeriod(period=format_period(year, month), period_start=period_start, period_end=period_end)


def period_for_date(day: date, salary_payment_date: int) -> PayPeriod:
    """The pay period containing ``day``."""
    year, month = day.year, day.month
    if day.day > salary_payment_date:
        year, month = _next_month(year, month)
    return resolve_period(format_period(year, month), salary_payment_date)


def recent_periods(
    salary_payment_date: int,
    *,
    today: Optional[date] = None,
    count: int = DEFAULT_PERIOD_HISTORY,
) -> List[PayPeriod]:
    """Current period followed by earlier ones, newest first."""
    today = today or now_local().date()
    current = period_for_date(today, salary_payment_date)
    year, month = parse_period(current.period)

    periods: List[PayPeriod] = []
    for _ in range(max(int(count), 0)):
        periods.append(resolve_period(format_period(year, month), salary_payment_date))
        year, month = _previous_month(year, month)
    return periods
