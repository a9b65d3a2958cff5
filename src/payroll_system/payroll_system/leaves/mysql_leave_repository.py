from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetchall, placeholders, transaction
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_COLUMNS = "leave_request_id, employee_id, start_date, end_date, reason, status"


def _row_to_leave(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        leave_request_id=str(r["leave_request_id"]),
        employee_id=str(r["employee_id"]),
        status=LeaveStatus(r["status"]),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
        reason=r.get("reason") or "",
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def list_for_employee(self, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with transaction(self._db) as cur:
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                """,
                (employee_id, end_date, start_date),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]

    def get_by_ids(self, leave_request_ids: Iterable[str]) -> Sequence[LeaveRequest]:
        ids = sorted({str(i) for i in leave_request_ids})
        if not ids:
            return []
        with transaction(self._db) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_request_id IN ({placeholders(ids)})",
                tuple(ids),
            )
            return [_row_to_leave(r) for r in fetchall(cur)]
