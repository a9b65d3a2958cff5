from dataclasses import replace
from datetime import date, datetime, time

import pytest

from src.payroll_system.payroll_system.attendance.model import AttendanceRecord
from src.payroll_system.payroll_system.core.enums import AttendanceType, CheckInStatus, LeaveStatus, SalaryStatus
from src.payroll_system.payroll_system.core.exceptions import (
    CalculationLocked,
    InvalidPeriod,
    MissingSettings,
    ValidationError,
)
from src.payroll_system.payroll_system.employees.model import Employee
from src.payroll_system.payroll_system.leaves.model import LeaveRequest
from src.payroll_system.payroll_system.payroll import engine
from src.payroll_system.payroll_system.payroll.working_days import iter_working_days
from src.payroll_system.payroll_system.settings.model import DeductionSettings
from src.payroll_system.payroll_system.shifts.model import Shift

NOW = datetime(2024, 4, 26, 9, 0)

# Period 2024-04 with payday 25 spans 2024-03-26 .. 2024-04-25: 23 weekdays, one holiday.
SETTINGS = DeductionSettings(
    absent_deduction=70000,
    leave_deduction=35000,
    late_deduction=5000,
    early_leave_deduction=5000,
    late_time_block=30,
    early_leave_time_block=30,
    working_days_per_week=frozenset({1, 2, 3, 4, 5}),
    salary_payment_date=25,
    holidays=frozenset({date(2024, 4, 1)}),
)
SHIFT = Shift(shift_id="S1", shift_name="Office", start_time=time(8, 0), end_time=time(17, 0))
EMPLOYEE = Employee(employee_id="E1", full_name="Nguyen Van A", basic_salary=5_000_000, shift_id="S1")
APPROVED = LeaveRequest(leave_request_id="L1", employee_id="E1", status=LeaveStatus.APPROVED)


def _scenario_records():
    days = list(iter_working_days(date(2024, 3, 26), date(2024, 4, 25), SETTINGS.working_days_per_week, SETTINGS.holidays))
    assert len(days) == 22

    records = []
    for i, day in enumerate(days[:19]):
        check_in = datetime.combine(day, time(8, 45) if i == 0 else time(8, 0))
        records.append(
            AttendanceRecord(
                attendance_id=f"A{i}",
                employee_id="E1",
                date=day,
                attendance_type=AttendanceType.PRESENT,
                check_in_time=check_in,
                check_out_time=datetime.combine(day, time(17, 0)),
                check_in_status=CheckInStatus.LATE if i == 0 else CheckInStatus.ON_TIME,
            )
        )
    records.append(
        AttendanceRecord(
            attendance_id="A-leave",
            employee_id="E1",
            date=days[19],
            attendance_type=AttendanceType.LEAVE,
            leave_request_id="L1",
        )
    )
    return records


def _calculate(**kw):
    args = dict(leave_requests=[APPROVED], shift=SHIFT, now=NOW)
    args.update(kw)
    return engine.calculate(EMPLOYEE, "2024-04", _scenario_records(), SETTINGS, **args)


def test_scenario_net_salary():
    calc = _calculate()

    assert calc.working_days == 22
    assert calc.present_days == 19
    assert calc.leave_days == 1
    assert calc.absent_days == 2
    assert calc.total_late_minutes == 45
    assert calc.late_blocks == 2
    assert calc.total_deduction == 185000
    assert calc.net_salary == 4_815_000
    assert calc.status == SalaryStatus.DRAFT
    assert calc.period_start == date(2024, 3, 26)
    assert calc.period_end == date(2024, 4, 25)
    assert calc.calculated_at == NOW


def test_recalculation_is_idempotent():
    assert _calculate() == _calculate()


def test_orphaned_leave_counts_as_absent():
    calc = _calculate(leave_requests=[])

    assert calc.leave_days == 0
    assert calc.absent_days == 3
    assert calc.total_deduction == 3 * 70000 + 2 * 5000
    assert calc.warnings


def test_draft_recalculation_keeps_identity():
    previous = replace(_calculate(), calculation_id="C1", net_salary=1)

    calc = _calculate(previous=previous)

    assert calc.calculation_id == "C1"
    assert calc.net_salary == 4_815_000


@pytest.mark.parametrize("status", [SalaryStatus.FINALIZED, SalaryStatus.PAID])
def test_locked_calculation_is_not_recomputed(status):
    previous = replace(_calculate(), calculation_id="C1", status=status)

    with pytest.raises(CalculationLocked) as exc:
        _calculate(previous=previous)

    assert exc.value.employee_id == "E1"
    assert exc.value.period == "2024-04"


def test_previous_for_other_period_is_rejected():
    previous = replace(_calculate(), period="2024-03")

    with pytest.raises(ValidationError):
        _calculate(previous=previous)


def test_net_salary_floors_at_zero():
    poor = replace(EMPLOYEE, basic_salary=100_000)

    calc = engine.calculate(poor, "2024-04", [], SETTINGS, now=NOW)

    assert calc.total_deduction == 22 * 70000
    assert calc.net_salary == 0


def test_missing_settings_are_never_defaulted():
    with pytest.raises(MissingSettings):
        engine.calculate(EMPLOYEE, "2024-04", [], None, now=NOW)

    with pytest.raises(MissingSettings) as exc:
        engine.calculate(EMPLOYEE, "2024-04", [], replace(SETTINGS, late_time_block=None), now=NOW)
    assert exc.value.field == "late_time_block"


def test_zero_block_size_is_rejected():
    with pytest.raises(ValidationError):
        engine.calculate(EMPLOYEE, "2024-04", [], replace(SETTINGS, late_time_block=0), now=NOW)


def test_invalid_period_string():
    with pytest.raises(InvalidPeriod):
        engine.calculate(EMPLOYEE, "2024-4", [], SETTINGS, now=NOW)


def test_negative_basic_salary_is_rejected():
    with pytest.raises(ValidationError):
        engine.calculate(replace(EMPLOYEE, basic_salary=-1), "2024-04", [], SETTINGS, now=NOW)
