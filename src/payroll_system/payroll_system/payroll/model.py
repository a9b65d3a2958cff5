from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import SalaryStatus


@dataclass(frozen=True)
class AttendanceAggregate:
    """Attendance totals of one employee over one pay period."""

    working_days: int
    present_days: int
    leave_days: int
    absent_days: int
    total_late_minutes: int
    total_early_leave_minutes: int
    late_count: int = 0
    early_leave_count: int = 0
    records_processed: int = 0
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DeductionBreakdown:
    late_blocks: int
    early_leave_blocks: int
    absent_deduction: int
    leave_deduction: int
    late_deduction: int
    early_leave_deduction: int
    total_deduction: int


@dataclass(frozen=True)
class SalaryCalculation:
    """Thực thể miền (domain): Bảng lương của một nhân viên trong một kỳ.

    One per employee per period. ``calculation_id`` is assigned by the store.
    """

    employee_id: str
    period: str
    period_start: date
    period_end: date
    basic_salary: int
    working_days: int
    present_days: int
    leave_days: int
    absent_days: int
    total_late_minutes: int
    total_early_leave_minutes: int
    late_blocks: int
    early_leave_blocks: int
    absent_deduction: int
    leave_deduction: int
    late_deduction: int
    early_leave_deduction: int
    total_deduction: int
    net_salary: int
    status: SalaryStatus
    calculated_at: datetime
    late_count: int = 0
    early_leave_count: int = 0
    finalized_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    warnings: Tuple[str, ...] = ()
    calculation_id: Optional[str] = None
    employee_name: Optional[str] = None


@dataclass(frozen=True)
class CalculationFailure:
    employee_id: str
    message: str


@dataclass(frozen=True)
class CalculationSummary:
    """Outcome of calculating every active employee for one period."""

    period: str
    successful_calculations: int
    skipped_locked: int
    failed: Tuple[CalculationFailure, ...]
    total_salary_amount: int
    total_deductions: int
