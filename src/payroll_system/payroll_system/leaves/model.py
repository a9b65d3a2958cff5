from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    leave_request_id: str
    employee_id: str
    status: LeaveStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: str = ""

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED
