from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_PERIOD_HISTORY, MAX_LIST_LIMIT
from ..core.enums import SalaryStatus
from ..core.exceptions import CalculationLocked, DomainError, InvalidTransition, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRequestRepository
from ..settings.model import DeductionSettings, validate_deduction_settings
from ..settings.repository import SalarySettingsRepository
from ..shifts.repository import ShiftRepository
from . import engine
from .calculator.base import DeductionCalculator
from .model import CalculationFailure, CalculationSummary, SalaryCalculation
from .period import PayPeriod, recent_periods, resolve_period
from .report import build_salary_workbook
from .repository import SalaryRepository
from .status import transition

logger = logging.getLogger(__name__)


class SalaryService:
    """Fetches engine inputs from the stores, runs the engine, persists results.

    Persistence happens only after the engine returned, so a failed
    calculation never leaves a partial row behind.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRequestRepository,
        settings: SalarySettingsRepository,
        salaries: SalaryRepository,
        *,
        calculator: Optional[DeductionCalculator] = None,
        clock: Callable = now_local,
    ):
        self._employees = employees
        self._shifts = shifts
        self._attendance = attendance
        self._leaves = leaves
        self._settings = settings
        self._salaries = salaries
        self._calculator = calculator
        self._clock = clock

    def _load_settings(self) -> DeductionSettings:
        return validate_deduction_settings(self._settings.get())

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(str(employee_id))
        if not employee:
            raise NotFoundError("Employee not found", employee_id=str(employee_id))
        return employee

    def _compute(
        self,
        employee: Employee,
        period: str,
        settings: DeductionSettings,
        *,
        previous: Optional[SalaryCalculation],
    ) -> SalaryCalculation:
        pay_period = resolve_period(period, settings.salary_payment_date)
        records = self._attendance.list_for_employee(
            employee.employee_id, pay_period.period_start, pay_period.period_end
        )

        leave_ids = {r.leave_request_id for r in records if r.leave_request_id}
        leaves = list(self._leaves.get_by_ids(leave_ids)) if leave_ids else []
        shift = self._shifts.get_by_id(employee.shift_id) if employee.shift_id else None

        return engine.calculate(
            employee,
            pay_period.period,
            records,
            settings,
            leave_requests=leaves,
            shift=shift,
            previous=previous,
            now=self._clock(),
            calculator=self._calculator,
        )

    def list_periods(self, *, count: int = DEFAULT_PERIOD_HISTORY, today: Optional[date] = None) -> List[PayPeriod]:
        settings = self._load_settings()
        return recent_periods(settings.salary_payment_date, today=today or self._clock().date(), count=count)

    def preview(self, *, employee_id: str, period: str) -> SalaryCalculation:
        """Compute without persisting; works for locked periods too."""
        employee = self._require_employee(employee_id)
        return self._compute(employee, period, self._load_settings(), previous=None)

    def calculate(self, *, employee_id: str, period: str) -> SalaryCalculation:
        employee = self._require_employee(employee_id)
        return self._calculate_one(employee, period, self._load_settings())

    def _calculate_one(self, employee: Employee, period: str, settings: DeductionSettings) -> SalaryCalculation:
        pay_period = resolve_period(period, settings.salary_payment_date)
        previous = self._salaries.get_for_employee_period(employee.employee_id, pay_period.period)
        calc = self._compute(employee, pay_period.period, settings, previous=previous)
        stored = self._salaries.save(calc)
        logger.info(
            "Calculated salary employee=%s period=%s net=%s deductions=%s",
            employee.employee_id,
            pay_period.period,
            stored.net_salary,
            stored.total_deduction,
        )
        for warning in stored.warnings:
            logger.warning("Salary employee=%s period=%s: %s", employee.employee_id, pay_period.period, warning)
        return stored

    def calculate_all(self, *, period: str) -> CalculationSummary:
        settings = self._load_settings()
        period = resolve_period(period, settings.salary_payment_date).period

        successful = 0
        skipped = 0
        failed: List[CalculationFailure] = []
        total_salary = 0
        total_deductions = 0

        for employee in self._employees.list_active():
            try:
                calc = self._calculate_one(employee, period, settings)
            except CalculationLocked:
                skipped += 1
                logger.info("Skipped locked salary employee=%s period=%s", employee.employee_id, period)
                continue
            except DomainError as e:
                failed.append(CalculationFailure(employee_id=employee.employee_id, message=str(e)))
                logger.warning("Salary calculation failed employee=%s period=%s: %s", employee.employee_id, period, e)
                continue

            successful += 1
            total_salary += calc.net_salary
            total_deductions += calc.total_deduction

        logger.info(
            "Calculated period=%s ok=%d skipped=%d failed=%d",
            period,
            successful,
            skipped,
            len(failed),
        )
        return CalculationSummary(
            period=period,
            successful_calculations=successful,
            skipped_locked=skipped,
            failed=tuple(failed),
            total_salary_amount=total_salary,
            total_deductions=total_deductions,
        )

    def get(self, calculation_id: str) -> SalaryCalculation:
        calc = self._salaries.get_by_id(str(calculation_id))
        if not calc:
            raise NotFoundError(f"Salary calculation {calculation_id} not found")
        return calc

    def update_status(self, *, calculation_id: str, status: str) -> SalaryCalculation:
        calc = self.get(calculation_id)
        try:
            new_status = SalaryStatus(str(status or "").strip().lower())
        except ValueError:
            raise ValidationError(
                "status must be one of: draft, finalized, paid",
                employee_id=calc.employee_id,
                period=calc.period,
                field="status",
            )

        updated = transition(calc, new_status, now=self._clock())
        if not self._salaries.update_status(updated, expected_status=calc.status):
            current = self.get(calculation_id)
            raise InvalidTransition(
                f"Salary status is now {current.status.value}; cannot change to {new_status.value}",
                employee_id=calc.employee_id,
                period=calc.period,
                field="status",
            )
        logger.info(
            "Salary status employee=%s period=%s %s -> %s",
            calc.employee_id,
            calc.period,
            calc.status.value,
            new_status.value,
        )
        return updated

    def list(
        self,
        *,
        period: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[SalaryCalculation]:
        status_filter = None
        if status:
            try:
                status_filter = SalaryStatus(status.strip().lower())
            except ValueError:
                raise ValidationError("status must be one of: draft, finalized, paid", field="status")
        if period:
            # Format check only; the payment day does not matter here.
            period = resolve_period(period, 1).period

        limit = min(max(int(limit), 1), MAX_LIST_LIMIT)
        page = max(int(page), 1)
        return self._salaries.list(
            period=period,
            employee_id=str(employee_id) if employee_id else None,
            status=status_filter,
            limit=limit,
            offset=(page - 1) * limit,
        )

    def list_for_employee(self, *, employee_id: str, **filters) -> Sequence[SalaryCalculation]:
        self._require_employee(employee_id)
        return self.list(employee_id=employee_id, **filters)

    def breakdown(self, calculation_id: str) -> dict:
        calc = self.get(calculation_id)
        return {
            "deductions": {
                "absentDays": calc.absent_days,
                "leaveDays": calc.leave_days,
                "lateBlocks": calc.late_blocks,
                "earlyLeaveBlocks": calc.early_leave_blocks,
                "lateMinutes": calc.total_late_minutes,
                "earlyLeaveMinutes": calc.total_early_leave_minutes,
                "absent": calc.absent_deduction,
                "leave": calc.leave_deduction,
                "late": calc.late_deduction,
                "earlyLeave": calc.early_leave_deduction,
                "total": calc.total_deduction,
            },
            "attendance": {
                "totalWorkingDays": calc.working_days,
                "presentDays": calc.present_days,
                "leaveDays": calc.leave_days,
                "absentDays": calc.absent_days,
                "lateCount": calc.late_count,
                "earlyLeaveCount": calc.early_leave_count,
            },
            "basicSalary": calc.basic_salary,
            "netSalary": calc.net_salary,
            "deductionPercentage": (
                round(calc.total_deduction * 100 / calc.basic_salary, 2) if calc.basic_salary else 0.0
            ),
            "warnings": list(calc.warnings),
        }

    def export_period(self, *, period: str, status: Optional[str] = None) -> bytes:
        calculations: List[SalaryCalculation] = []
        page = 1
        while True:
            batch = self.list(period=period, status=status, page=page, limit=MAX_LIST_LIMIT)
            calculations.extend(batch)
            if len(batch) < MAX_LIST_LIMIT:
                break
            page += 1
        if not calculations:
            raise NotFoundError("No salary data to export", period=period)
        return build_salary_workbook(calculations)
