from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def list_for_employee(self, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        """Leave requests of one employee overlapping [start_date, end_date], any status."""

        raise NotImplementedError

    def get_by_ids(self, leave_request_ids: Iterable[str]) -> Sequence[LeaveRequest]:
        raise NotImplementedError
