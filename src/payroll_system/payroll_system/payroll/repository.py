from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryStatus
from .model import SalaryCalculation


class SalaryRepository(Protocol):
    def get_by_id(self, calculation_id: str) -> Optional[SalaryCalculation]:
        raise NotImplementedError

    def get_for_employee_period(self, employee_id: str, period: str) -> Optional[SalaryCalculation]:
        raise NotImplementedError

    def save(self, calculation: SalaryCalculation) -> SalaryCalculation:
        """Insert or fully replace the draft for (employee_id, period).

        Must raise CalculationLocked if the stored row is no longer a draft.
        Returns the stored calculation carrying its ``calculation_id``.
        """

        raise NotImplementedError

    def update_status(self, calculation: SalaryCalculation, *, expected_status: SalaryStatus) -> bool:
        """Persist status/finalized_at/paid_at only if the row still has ``expected_status``."""

        raise NotImplementedError

    def list(
        self,
        *,
        period: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[SalaryStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[SalaryCalculation]:
        raise NotImplementedError
