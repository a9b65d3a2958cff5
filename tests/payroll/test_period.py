from datetime import date

import pytest

from src.payroll_system.payroll_system.core.exceptions import InvalidPeriod, ValidationError
from src.payroll_system.payroll_system.payroll.period import (
    period_for_date,
    recent_periods,
    resolve_period,
)


def test_period_runs_from_day_after_previous_payday():
    p = resolve_period("2024-03", 5)

    assert p.period_start == date(2024, 2, 6)
    assert p.period_end == date(2024, 3, 5)
    assert p.payment_date == date(2024, 3, 5)
    assert p.label == "March 2024"


def test_january_period_starts_in_previous_year():
    p = resolve_period("2024-01", 28)

    assert p.period_start == date(2023, 12, 29)
    assert p.period_end == date(2024, 1, 28)


def test_consecutive_periods_tile_without_gap():
    march = resolve_period("2024-03", 10)
    april = resolve_period("2024-04", 10)

    assert (april.period_start - march.period_end).days == 1


@pytest.mark.parametrize("bad", ["2024-13", "2024-00", "2024/03", "24-03", "", "march"])
def test_malformed_period_is_rejected(bad):
    with pytest.raises(InvalidPeriod):
        resolve_period(bad, 5)


def test_payment_day_outside_supported_range_is_rejected():
    with pytest.raises(ValidationError):
        resolve_period("2024-03", 31)


def test_period_for_date_after_payday_belongs_to_next_month():
    assert period_for_date(date(2024, 3, 5), 5).period == "2024-03"
    assert period_for_date(date(2024, 3, 6), 5).period == "2024-04"
    assert period_for_date(date(2024, 12, 20), 5).period == "2025-01"


def test_recent_periods_newest_first():
    periods = recent_periods(5, today=date(2024, 1, 3), count=3)

    assert [p.period for p in periods] == ["2024-01", "2023-12", "2023-11"]
