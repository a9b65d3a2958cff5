from __future__ import annotations

from abc import ABC, abstractmethod

from ...settings.model import DeductionSettings
from ..model import AttendanceAggregate, DeductionBreakdown


class DeductionCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll deductions)."""

    @abstractmethod
    def calculate(self, aggregate: AttendanceAggregate, settings: DeductionSettings) -> DeductionBreakdown:
        raise NotImplementedError
