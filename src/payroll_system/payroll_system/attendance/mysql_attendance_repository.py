from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceType, CheckInStatus, CheckOutStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetchall, transaction
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def list_for_employee(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with transaction(self._db) as cur:
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, attendance_type,
                       check_in_time, check_out_time, check_in_status, check_out_status,
                       leave_request_id
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date, attendance_id
                """,
                (employee_id, start_date, end_date),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    attendance_id=str(r["attendance_id"]),
                    employee_id=str(r["employee_id"]),
                    date=r["work_date"],
                    attendance_type=AttendanceType(r["attendance_type"]),
                    check_in_time=r.get("check_in_time"),
                    check_out_time=r.get("check_out_time"),
                    check_in_status=CheckInStatus(r["check_in_status"]),
                    check_out_status=CheckOutStatus(r["check_out_status"]),
                    leave_request_id=str(r["leave_request_id"]) if r.get("leave_request_id") else None,
                )
                for r in rows
            ]
