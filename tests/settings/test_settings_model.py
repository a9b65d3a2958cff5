from datetime import date, datetime

import pytest

from src.payroll_system.payroll_system.core.exceptions import ValidationError
from src.payroll_system.payroll_system.settings.model import DeductionSettings, validate_deduction_settings


def _settings(**overrides):
    values = dict(
        absent_deduction=70000,
        leave_deduction=35000,
        late_deduction=5000,
        early_leave_deduction=5000,
        late_time_block=30,
        early_leave_time_block=30,
        working_days_per_week=frozenset({1, 2, 3, 4, 5}),
        salary_payment_date=5,
    )
    values.update(overrides)
    return DeductionSettings(**values)


def test_string_holidays_are_normalized_to_dates():
    settings = validate_deduction_settings(
        _settings(holidays=frozenset({"2024-03-06", datetime(2024, 3, 8, 0, 0), date(2024, 3, 7)}))
    )

    assert settings.holidays == frozenset({date(2024, 3, 6), date(2024, 3, 7), date(2024, 3, 8)})


def test_date_holidays_returned_unchanged():
    settings = _settings(holidays=frozenset({date(2024, 3, 6)}))

    assert validate_deduction_settings(settings) is settings


@pytest.mark.parametrize("bad", [frozenset({20240306}), frozenset({"next friday"}), "2024-03-06"])
def test_invalid_holiday_entries_are_rejected(bad):
    with pytest.raises(ValidationError) as exc:
        validate_deduction_settings(_settings(holidays=bad))

    assert exc.value.field == "holidays"
