from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceType, CheckInStatus, CheckOutStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công (one per employee per date).

    Produced by the check-in/out capture (QR, RFID); read-only for payroll.
    """

    attendance_id: str
    employee_id: str
    date: date
    attendance_type: AttendanceType
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    check_in_status: CheckInStatus = CheckInStatus.ON_TIME
    check_out_status: CheckOutStatus = CheckOutStatus.NOT_CHECKED_OUT
    leave_request_id: Optional[str] = None
