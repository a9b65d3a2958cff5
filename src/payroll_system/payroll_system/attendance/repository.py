from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_employee(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records of one employee with start_date <= date <= end_date, oldest first."""

        raise NotImplementedError
