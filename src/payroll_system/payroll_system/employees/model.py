from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên.

    Only the fields the payroll engine reads; the full profile (NIK, division,
    RFID tag, ...) lives in the employee management system.
    """

    employee_id: str
    full_name: str
    basic_salary: int
    shift_id: Optional[str] = None
    is_active: bool = True
