from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): Ca làm việc (Shift).

    The threshold fields mirror the shifts table; check-in/out statuses are
    classified against them upstream, payroll only reads the stored status.
    """

    shift_id: str
    shift_name: str
    start_time: time
    end_time: time
    late_threshold_minutes: int = 0
    early_leave_threshold_minutes: int = 0
