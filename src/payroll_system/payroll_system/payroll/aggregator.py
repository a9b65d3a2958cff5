from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import whole_minutes_between
from ..core.enums import AttendanceType, CheckInStatus, CheckOutStatus
from ..core.exceptions import InvalidPeriod
from ..leaves.model import LeaveRequest
from ..shifts.model import Shift
from .model import AttendanceAggregate


def shift_bounds(shift: Shift, work_date: date) -> tuple[datetime, datetime]:
    """Scheduled check-in and check-out of ``shift`` on ``work_date``.

    A shift ending at or before its start time ends on the next day.
    """
    start = datetime.combine(work_date, shift.start_time)
    end = datetime.combine(work_date, shift.end_time)
    if end <= start:
        end += timedelta(days=1)
    return start, end


def late_minutes(record: AttendanceRecord, shift: Shift) -> int:
    if record.check_in_time is None:
        return 0
    scheduled_in, _ = shift_bounds(shift, record.date)
    return max(0, whole_minutes_between(scheduled_in, record.check_in_time))


def early_leave_minutes(record: AttendanceRecord, shift: Shift) -> int:
    if record.check_out_time is None:
        return 0
    _, scheduled_out = shift_bounds(shift, record.date)
    return max(0, whole_minutes_between(record.check_out_time, scheduled_out))


def aggregate(
    records: Iterable[AttendanceRecord],
    period_start: date,
    period_end: date,
    *,
    employee_id: str,
    working_days: int,
    leave_requests: Iterable[LeaveRequest] = (),
    shift: Optional[Shift] = None,
) -> AttendanceAggregate:
    """Fold one employee's attendance records over a pay period.

    Leave only counts when backed by an approved leave request; anything
    else falls through to absence. Absence saturates at zero.
    """
    if period_end < period_start:
        raise InvalidPeriod(
            f"Period end {period_end} precedes start {period_start}",
            employee_id=employee_id,
        )

    leave_by_id: Dict[str, LeaveRequest] = {str(lr.leave_request_id): lr for lr in leave_requests}
    warnings: List[str] = []

    seen_dates: set[date] = set()
    present_days = 0
    leave_days = 0
    total_late = 0
    total_early = 0
    late_count = 0
    early_count = 0
    processed = 0
    unmeasured = 0

    for record in records:
        if str(record.employee_id) != str(employee_id):
            continue
        if not period_start <= record.date <= period_end:
            continue
        if record.date in seen_dates:
            warnings.append(f"Duplicate attendance record on {record.date.isoformat()} ignored")
            continue
        seen_dates.add(record.date)
        processed += 1

        if record.attendance_type == AttendanceType.PRESENT:
            present_days += 1
        elif record.attendance_type == AttendanceType.LEAVE:
            leave = leave_by_id.get(str(record.leave_request_id)) if record.leave_request_id else None
            if leave is not None and leave.is_approved and str(leave.employee_id) == str(employee_id):
                leave_days += 1
            else:
                warnings.append(f"Leave on {record.date.isoformat()} has no approved leave request; counted as absent")

        if record.check_in_status == CheckInStatus.LATE:
            late_count += 1
            if shift is None:
                unmeasured += 1
            else:
                total_late += late_minutes(record, shift)

        if record.check_out_status == CheckOutStatus.EARLY:
            early_count += 1
            if shift is None:
                unmeasured += 1
            else:
                total_early += early_leave_minutes(record, shift)

    if unmeasured:
        warnings.append(f"No work shift assigned; {unmeasured} late/early record(s) not measured")

    raw_absent = working_days - present_days - leave_days
    if raw_absent < 0:
        warnings.append(
            f"Present ({present_days}) + leave ({leave_days}) days exceed {working_days} working days"
        )

    return AttendanceAggregate(
        working_days=working_days,
        present_days=present_days,
        leave_days=leave_days,
        absent_days=max(0, raw_absent),
        total_late_minutes=total_late,
        total_early_leave_minutes=total_early,
        late_count=late_count,
        early_leave_count=early_count,
        records_processed=processed,
        warnings=tuple(warnings),
    )
