from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import SalaryStatus
from ..core.exceptions import InvalidTransition
from .model import SalaryCalculation

# Strictly linear: draft -> finalized -> paid, no rollback.
NEXT_STATUS = {
    SalaryStatus.DRAFT: SalaryStatus.FINALIZED,
    SalaryStatus.FINALIZED: SalaryStatus.PAID,
}


def is_locked(calculation: SalaryCalculation) -> bool:
    return calculation.status != SalaryStatus.DRAFT


def transition(
    calculation: SalaryCalculation,
    new_status: SalaryStatus,
    *,
    now: Optional[datetime] = None,
) -> SalaryCalculation:
    try:
        new_status = SalaryStatus(new_status)
    except ValueError:
        raise InvalidTransition(
            f"Unknown salary status {new_status!r}",
            employee_id=calculation.employee_id,
            period=calculation.period,
            field="status",
        )
    if NEXT_STATUS.get(calculation.status) != new_status:
        raise InvalidTransition(
            f"Cannot change status from {calculation.status.value} to {new_status.value}",
            employee_id=calculation.employee_id,
            period=calculation.period,
            field="status",
        )

    now = now or now_local()
    if new_status == SalaryStatus.FINALIZED:
        return replace(calculation, status=new_status, finalized_at=now)
    return replace(calculation, status=new_status, paid_at=now)
