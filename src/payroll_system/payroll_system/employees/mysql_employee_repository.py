from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetchall, fetchone, transaction
from .model import Employee
from .repository import EmployeeRepository


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        full_name=r["full_name"],
        basic_salary=int(r["basic_salary"]),
        shift_id=str(r["shift_id"]) if r.get("shift_id") is not None else None,
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with transaction(self._db) as cur:
            cur.execute(
                """
                SELECT employee_id, full_name, basic_salary, shift_id, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with transaction(self._db) as cur:
            cur.execute(
                """
                SELECT employee_id, full_name, basic_salary, shift_id, is_active
                FROM employees
                WHERE is_active=1
                ORDER BY full_name
                """
            )
            return [_row_to_employee(r) for r in fetchall(cur)]
