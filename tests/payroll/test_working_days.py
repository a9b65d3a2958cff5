from datetime import date, timedelta

import pytest

from src.payroll_system.payroll_system.core.exceptions import InvalidPeriod, ValidationError
from src.payroll_system.payroll_system.payroll.working_days import count_working_days, iter_working_days

MON_FRI = {1, 2, 3, 4, 5}


def test_full_week_monday_to_friday():
    # 2024-03-04 is a Monday, 2024-03-10 a Sunday.
    assert count_working_days(date(2024, 3, 4), date(2024, 3, 10), MON_FRI) == 5


def test_weekend_only_schedule_uses_sunday_zero():
    days = list(iter_working_days(date(2024, 3, 4), date(2024, 3, 10), {0, 6}))

    assert days == [date(2024, 3, 9), date(2024, 3, 10)]


def test_single_day_period_counts_that_day():
    assert count_working_days(date(2024, 3, 6), date(2024, 3, 6), MON_FRI) == 1
    assert count_working_days(date(2024, 3, 9), date(2024, 3, 9), MON_FRI) == 0


def test_empty_schedule_has_no_working_days():
    assert count_working_days(date(2024, 3, 1), date(2024, 3, 31), set()) == 0


def test_holidays_are_excluded():
    holidays = frozenset({date(2024, 3, 6), date(2024, 3, 9)})

    assert count_working_days(date(2024, 3, 4), date(2024, 3, 10), MON_FRI, holidays) == 4


def test_end_before_start_is_invalid():
    with pytest.raises(InvalidPeriod):
        count_working_days(date(2024, 3, 10), date(2024, 3, 4), MON_FRI)


def test_range_across_year_boundary():
    # 2024-12-30 is a Monday; 2025-01-01 is a holiday.
    assert count_working_days(date(2024, 12, 28), date(2025, 1, 5), MON_FRI) == 5
    assert count_working_days(date(2024, 12, 28), date(2025, 1, 5), MON_FRI, frozenset({date(2025, 1, 1)})) == 4


@pytest.mark.parametrize("offset", range(7))
def test_any_seven_day_window_has_five_weekdays(offset):
    start = date(2024, 3, 4) + timedelta(days=offset)

    assert count_working_days(start, start + timedelta(days=6), MON_FRI) == 5


def test_seven_day_window_across_month_end():
    assert count_working_days(date(2024, 2, 27), date(2024, 3, 4), MON_FRI) == 5


def test_iso_string_holidays_are_excluded():
    holidays = frozenset({"2024-03-06", date(2024, 3, 7)})

    assert count_working_days(date(2024, 3, 4), date(2024, 3, 10), MON_FRI, holidays) == 3


def test_malformed_holiday_is_rejected():
    with pytest.raises(ValidationError) as exc:
        count_working_days(date(2024, 3, 4), date(2024, 3, 10), MON_FRI, {"06/03/2024"})

    assert exc.value.field == "holidays"
