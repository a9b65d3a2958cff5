from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Loại ngày công của một bản ghi chấm công."""

    PRESENT = "present"
    LEAVE = "leave"
    ABSENT = "absent"


class CheckInStatus(str, Enum):
    ON_TIME = "on-time"
    LATE = "late"
    ABSENT = "absent"


class CheckOutStatus(str, Enum):
    ON_TIME = "on-time"
    EARLY = "early"
    NOT_CHECKED_OUT = "not-checked-out"


class LeaveStatus(str, Enum):
    """Trạng thái luồng duyệt đơn nghỉ phép."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SalaryStatus(str, Enum):
    """Trạng thái bảng lương: draft -> finalized -> paid (một chiều)."""

    DRAFT = "draft"
    FINALIZED = "finalized"
    PAID = "paid"
