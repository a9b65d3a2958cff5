from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, FrozenSet, Iterable, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_int, require_int_in_range, require_non_negative_int
from ..core.constants import MAX_SALARY_PAYMENT_DATE
from ..core.exceptions import MissingSettings, ValidationError


@dataclass(frozen=True)
class DeductionSettings:
    """Deduction rules and work calendar, passed explicitly into every engine call.

    Amounts are whole currency units: per day for absence/leave, per time
    block for late arrival/early leave.
    """

    absent_deduction: int
    leave_deduction: int
    late_deduction: int
    early_leave_deduction: int
    late_time_block: int
    early_leave_time_block: int
    working_days_per_week: FrozenSet[int]
    salary_payment_date: int
    holidays: FrozenSet[date] = field(default_factory=frozenset)

REQUIRED_AMOUNT_FIELDS = (
    "absent_deduction",
    "leave_deduction",
    "late_deduction",
    "early_leave_deduction",
)
REQUIRED_BLOCK_FIELDS = ("late_time_block", "early_leave_time_block")


def normalize_holidays(holidays: Optional[Iterable[Any]]) -> FrozenSet[date]:
    """Holiday entries as dates; ISO ``YYYY-MM-DD`` strings are accepted."""
    if holidays is None:
        return frozenset()
    if isinstance(holidays, (str, bytes)):
        raise ValidationError("holidays must be a collection of ISO dates", field="holidays")

    days = set()
    for value in holidays:
        if isinstance(value, datetime):
            days.add(value.date())
        elif isinstance(value, date):
            days.add(value)
        elif isinstance(value, str):
            try:
                days.add(parse_iso_date(value.strip()))
            except ValueError:
                raise ValidationError(f"Holiday {value!r} is not an ISO date (YYYY-MM-DD)", field="holidays")
        else:
            raise ValidationError(f"Holiday {value!r} is not a date", field="holidays")
    return frozenset(days)


def validate_deduction_settings(settings: Optional[DeductionSettings]) -> DeductionSettings:
    """Refuse to compute with absent or incomplete settings.

    Missing values raise MissingSettings; present but out-of-range values
    raise ValidationError. Nothing is ever defaulted. Returns the settings
    with holidays normalized to dates.
    """
    if settings is None:
        raise MissingSettings("Deduction settings are not configured")

    for name in REQUIRED_AMOUNT_FIELDS + REQUIRED_BLOCK_FIELDS + ("salary_payment_date", "working_days_per_week"):
        if getattr(settings, name, None) is None:
            raise MissingSettings("Deduction setting is missing", field=name)

    for name in REQUIRED_AMOUNT_FIELDS:
        require_non_negative_int(getattr(settings, name), name)
    for name in REQUIRED_BLOCK_FIELDS:
        if require_int(getattr(settings, name), name) < 1:
            raise ValidationError(f"{name} must be >= 1 minute", field=name)

    require_int_in_range(settings.salary_payment_date, "salary_payment_date", 1, MAX_SALARY_PAYMENT_DATE)
    for weekday in settings.working_days_per_week:
        require_int_in_range(weekday, "working_days_per_week", 0, 6)

    holidays = normalize_holidays(settings.holidays)
    if holidays != settings.holidays:
        settings = replace(settings, holidays=holidays)
    return settings
