"""Salary calculation orchestrator.

Pure and synchronous: every input (employee, attendance, leave requests,
shift, settings, the previously stored calculation) is fetched by the
caller. The result is a new value or an exception, never a partial record.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import now_local
from ..core.enums import SalaryStatus
from ..core.exceptions import CalculationLocked, ValidationError
from ..employees.model import Employee
from ..leaves.model import LeaveRequest
from ..settings.model import DeductionSettings, validate_deduction_settings
from ..shifts.model import Shift
from .aggregator import aggregate
from .calculator.base import DeductionCalculator
from .calculator.standard_calculator import StandardDeductionCalculator
from .model import SalaryCalculation
from .period import resolve_period
from .status import is_locked
from .working_days import count_working_days


def calculate(
    employee: Employee,
    period: str,
    attendance_records: Iterable[AttendanceRecord],
    settings: Optional[DeductionSettings],
    *,
    leave_requests: Iterable[LeaveRequest] = (),
    shift: Optional[Shift] = None,
    previous: Optional[SalaryCalculation] = None,
    now: Optional[datetime] = None,
    calculator: Optional[DeductionCalculator] = None,
) -> SalaryCalculation:
    settings = validate_deduction_settings(settings)
    if employee.basic_salary is None or employee.basic_salary < 0:
        raise ValidationError(
            "Basic salary must be a non-negative amount",
            employee_id=employee.employee_id,
            period=period,
            field="basic_salary",
        )

    pay_period = resolve_period(period, settings.salary_payment_date)

    if previous is not None and (
        str(previous.employee_id) != str(employee.employee_id) or previous.period != pay_period.period
    ):
        raise ValidationError(
            "Previous calculation belongs to another employee or period",
            employee_id=employee.employee_id,
            period=pay_period.period,
        )
    if previous is not None and is_locked(previous):
        raise CalculationLocked(
            f"Salary calculation is {previous.status.value} and cannot be recalculated",
            employee_id=employee.employee_id,
            period=pay_period.period,
        )

    working_days = count_working_days(
        pay_period.period_start,
        pay_period.period_end,
        settings.working_days_per_week,
        settings.holidays,
    )
    totals = aggregate(
        attendance_records,
        pay_period.period_start,
        pay_period.period_end,
        employee_id=employee.employee_id,
        working_days=working_days,
        leave_requests=leave_requests,
        shift=shift,
    )
    deductions = (calculator or StandardDeductionCalculator()).calculate(totals, settings)

    return SalaryCalculation(
        calculation_id=previous.calculation_id if previous is not None else None,
        employee_id=employee.employee_id,
        employee_name=employee.full_name,
        period=pay_period.period,
        period_start=pay_period.period_start,
        period_end=pay_period.period_end,
        basic_salary=employee.basic_salary,
        working_days=totals.working_days,
        present_days=totals.present_days,
        leave_days=totals.leave_days,
        absent_days=totals.absent_days,
        total_late_minutes=totals.total_late_minutes,
        total_early_leave_minutes=totals.total_early_leave_minutes,
        late_count=totals.late_count,
        early_leave_count=totals.early_leave_count,
        late_blocks=deductions.late_blocks,
        early_leave_blocks=deductions.early_leave_blocks,
        absent_deduction=deductions.absent_deduction,
        leave_deduction=deductions.leave_deduction,
        late_deduction=deductions.late_deduction,
        early_leave_deduction=deductions.early_leave_deduction,
        total_deduction=deductions.total_deduction,
        net_salary=max(0, employee.basic_salary - deductions.total_deduction),
        status=SalaryStatus.DRAFT,
        calculated_at=now or now_local(),
        warnings=totals.warnings,
    )
