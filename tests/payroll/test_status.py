from datetime import date, datetime

import pytest

from src.payroll_system.payroll_system.core.enums import SalaryStatus
from src.payroll_system.payroll_system.core.exceptions import InvalidTransition
from src.payroll_system.payroll_system.payroll.model import SalaryCalculation
from src.payroll_system.payroll_system.payroll.status import is_locked, transition


def _calc(status=SalaryStatus.DRAFT):
    return SalaryCalculation(
        employee_id="E1",
        period="2024-03",
        period_start=date(2024, 2, 6),
        period_end=date(2024, 3, 5),
        basic_salary=5_000_000,
        working_days=21,
        present_days=21,
        leave_days=0,
        absent_days=0,
        total_late_minutes=0,
        total_early_leave_minutes=0,
        late_blocks=0,
        early_leave_blocks=0,
        absent_deduction=0,
        leave_deduction=0,
        late_deduction=0,
        early_leave_deduction=0,
        total_deduction=0,
        net_salary=5_000_000,
        status=status,
        calculated_at=datetime(2024, 3, 6, 9, 0),
    )


def test_draft_to_finalized_to_paid():
    t1 = datetime(2024, 3, 6, 10, 0)
    t2 = datetime(2024, 3, 7, 10, 0)

    finalized = transition(_calc(), SalaryStatus.FINALIZED, now=t1)
    paid = transition(finalized, "paid", now=t2)

    assert finalized.status == SalaryStatus.FINALIZED
    assert finalized.finalized_at == t1
    assert paid.status == SalaryStatus.PAID
    assert paid.finalized_at == t1
    assert paid.paid_at == t2
    assert paid.net_salary == 5_000_000


@pytest.mark.parametrize(
    "current, target",
    [
        (SalaryStatus.DRAFT, SalaryStatus.PAID),
        (SalaryStatus.DRAFT, SalaryStatus.DRAFT),
        (SalaryStatus.FINALIZED, SalaryStatus.DRAFT),
        (SalaryStatus.PAID, SalaryStatus.FINALIZED),
        (SalaryStatus.PAID, SalaryStatus.DRAFT),
        (SalaryStatus.PAID, SalaryStatus.PAID),
    ],
)
def test_non_linear_transitions_are_rejected(current, target):
    with pytest.raises(InvalidTransition):
        transition(_calc(current), target)


def test_unknown_status_is_rejected():
    with pytest.raises(InvalidTransition):
        transition(_calc(), "approved")


def test_only_drafts_are_unlocked():
    assert not is_locked(_calc())
    assert is_locked(_calc(SalaryStatus.FINALIZED))
    assert is_locked(_calc(SalaryStatus.PAID))
