from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import SalaryStatus
from ..core.exceptions import CalculationLocked
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetchall, fetchone, load_json_list, transaction
from .model import SalaryCalculation
from .repository import SalaryRepository

# Columns written by a (re)calculation, in insert order.
_CALC_COLUMNS = (
    "employee_id",
    "period",
    "period_start",
    "period_end",
    "basic_salary",
    "working_days",
    "present_days",
    "leave_days",
    "absent_days",
    "total_late_minutes",
    "total_early_leave_minutes",
    "late_count",
    "early_leave_count",
    "late_blocks",
    "early_leave_blocks",
    "absent_deduction",
    "leave_deduction",
    "late_deduction",
    "early_leave_deduction",
    "total_deduction",
    "net_salary",
    "status",
    "calculated_at",
    "finalized_at",
    "paid_at",
    "warnings",
)

_SELECT = (
    "SELECT s.calculation_id, "
    + ", ".join(f"s.{c}" for c in _CALC_COLUMNS)
    + ", e.full_name AS employee_name "
    "FROM salary_calculations s LEFT JOIN employees e ON e.employee_id = s.employee_id"
)


def _row_to_calculation(r: Dict[str, Any]) -> SalaryCalculation:
    ints = {c: int(r[c]) for c in _CALC_COLUMNS[4:21]}
    return SalaryCalculation(
        calculation_id=str(r["calculation_id"]),
        employee_id=str(r["employee_id"]),
        employee_name=r.get("employee_name"),
        period=r["period"],
        period_start=r["period_start"],
        period_end=r["period_end"],
        status=SalaryStatus(r["status"]),
        calculated_at=r["calculated_at"],
        finalized_at=r.get("finalized_at"),
        paid_at=r.get("paid_at"),
        warnings=tuple(str(w) for w in load_json_list(r.get("warnings"))),
        **ints,
    )


def _values(calc: SalaryCalculation) -> List[Any]:
    values: List[Any] = []
    for col in _CALC_COLUMNS:
        v = getattr(calc, col)
        if col == "status":
            v = calc.status.value
        elif col == "warnings":
            v = json.dumps(list(calc.warnings))
        values.append(v)
    return values


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, calculation_id: str) -> Optional[SalaryCalculation]:
        with transaction(self._db) as cur:
            cur.execute(f"{_SELECT} WHERE s.calculation_id=%s", (calculation_id,))
            r = fetchone(cur)
            return _row_to_calculation(r) if r else None

    def get_for_employee_period(self, employee_id: str, period: str) -> Optional[SalaryCalculation]:
        with transaction(self._db) as cur:
            cur.execute(f"{_SELECT} WHERE s.employee_id=%s AND s.period=%s", (employee_id, period))
            r = fetchone(cur)
            return _row_to_calculation(r) if r else None

    def save(self, calculation: SalaryCalculation) -> SalaryCalculation:
        with transaction(self._db) as cur:
            # Lock the row so a concurrent finalize cannot slip between check and write.
            cur.execute(
                """
                SELECT calculation_id, status
                FROM salary_calculations
                WHERE employee_id=%s AND period=%s
                FOR UPDATE
                """,
                (calculation.employee_id, calculation.period),
            )
            existing = fetchone(cur)

            if existing and existing["status"] != SalaryStatus.DRAFT.value:
                raise CalculationLocked(
                    f"Salary calculation is {existing['status']} and cannot be recalculated",
                    employee_id=calculation.employee_id,
                    period=calculation.period,
                )

            if existing:
                assignments = ", ".join(f"{c}=%s" for c in _CALC_COLUMNS)
                cur.execute(
                    f"UPDATE salary_calculations SET {assignments} WHERE calculation_id=%s",
                    (*_values(calculation), existing["calculation_id"]),
                )
                calculation_id = existing["calculation_id"]
            else:
                cur.execute(
                    f"""
                    INSERT INTO salary_calculations ({", ".join(_CALC_COLUMNS)})
                    VALUES ({", ".join(["%s"] * len(_CALC_COLUMNS))})
                    """,
                    tuple(_values(calculation)),
                )
                calculation_id = cur.lastrowid

            cur.execute(f"{_SELECT} WHERE s.calculation_id=%s", (calculation_id,))
            return _row_to_calculation(fetchone(cur))

    def update_status(self, calculation: SalaryCalculation, *, expected_status: SalaryStatus) -> bool:
        with transaction(self._db) as cur:
            cur.execute(
                """
                UPDATE salary_calculations
                SET status=%s, finalized_at=%s, paid_at=%s
                WHERE calculation_id=%s AND status=%s
                """,
                (
                    calculation.status.value,
                    calculation.finalized_at,
                    calculation.paid_at,
                    calculation.calculation_id,
                    SalaryStatus(expected_status).value,
                ),
            )
            return cur.rowcount == 1

    def list(
        self,
        *,
        period: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[SalaryStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[SalaryCalculation]:
        clauses: List[str] = []
        params: List[Any] = []
        if period:
            clauses.append("s.period=%s")
            params.append(period)
        if employee_id:
            clauses.append("s.employee_id=%s")
            params.append(employee_id)
        if status:
            clauses.append("s.status=%s")
            params.append(SalaryStatus(status).value)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with transaction(self._db) as cur:
            cur.execute(
                f"{_SELECT}{where} ORDER BY s.period DESC, e.full_name LIMIT %s OFFSET %s",
                (*params, int(limit), int(offset)),
            )
            return [_row_to_calculation(r) for r in fetchall(cur)]
