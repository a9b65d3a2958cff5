from __future__ import annotations

from .base import DeductionCalculator
from ...core.exceptions import ValidationError
from ...settings.model import DeductionSettings, validate_deduction_settings
from ..model import AttendanceAggregate, DeductionBreakdown


def ceil_blocks(minutes: int, block_size: int, *, field: str = "block_size") -> int:
    """Whole blocks needed to cover ``minutes``; 0 minutes is 0 blocks."""
    if block_size is None or block_size < 1:
        raise ValidationError(f"{field} must be >= 1 minute", field=field)
    if minutes <= 0:
        return 0
    return -(-minutes // block_size)


class StandardDeductionCalculator(DeductionCalculator):
    """Standard rule: per-day absence/leave, per-block late/early leave (blocks round up)."""

    def calculate(self, aggregate: AttendanceAggregate, settings: DeductionSettings) -> DeductionBreakdown:
        late_blocks = ceil_blocks(aggregate.total_late_minutes, settings.late_time_block, field="late_time_block")
        early_blocks = ceil_blocks(
            aggregate.total_early_leave_minutes,
            settings.early_leave_time_block,
            field="early_leave_time_block",
        )

        absent = aggregate.absent_days * settings.absent_deduction
        leave = aggregate.leave_days * settings.leave_deduction
        late = late_blocks * settings.late_deduction
        early = early_blocks * settings.early_leave_deduction

        return DeductionBreakdown(
            late_blocks=late_blocks,
            early_leave_blocks=early_blocks,
            absent_deduction=absent,
            leave_deduction=leave,
            late_deduction=late,
            early_leave_deduction=early,
            total_deduction=absent + leave + late + early,
        )


def calculate_deductions(aggregate: AttendanceAggregate, settings: DeductionSettings) -> DeductionBreakdown:
    return StandardDeductionCalculator().calculate(aggregate, validate_deduction_settings(settings))
