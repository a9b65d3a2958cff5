"""Normalization boundary for JSON payloads.

The dashboard API sends camelCase keys, ids as strings or numbers, and
sometimes an embedded object (``{"_id": ...}``) where an id is expected.
Everything is converted into the strict domain types here, before it
reaches the payroll engine.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..attendance.model import AttendanceRecord
from ..core.constants import MAX_SALARY_PAYMENT_DATE
from ..core.enums import AttendanceType, CheckInStatus, CheckOutStatus, LeaveStatus
from ..core.exceptions import MissingSettings, ValidationError
from ..employees.model import Employee
from ..leaves.model import LeaveRequest
from ..payroll.model import SalaryCalculation
from ..settings.model import DeductionSettings, validate_deduction_settings
from ..shifts.model import Shift
from .datetime_utils import parse_hhmm, parse_iso_date
from .validators import require_int_in_range, require_non_empty, require_non_negative_int

E = TypeVar("E", bound=Enum)

SETTINGS_FIELDS = {
    "absentDeduction": "absent_deduction",
    "leaveDeduction": "leave_deduction",
    "lateDeduction": "late_deduction",
    "earlyLeaveDeduction": "early_leave_deduction",
    "lateTimeBlock": "late_time_block",
    "earlyLeaveTimeBlock": "early_leave_time_block",
    "salaryPaymentDate": "salary_payment_date",
    "workingDaysPerWeek": "working_days_per_week",
}


def _get(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def normalize_id(value: Any, field_name: str = "id") -> str:
    """Accept ``"abc"``, ``12`` or ``{"_id": "abc", ...}``; return ``"abc"``."""
    if isinstance(value, Mapping):
        value = _get(value, "_id", "id")
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required", field=field_name)
    return require_non_empty(str(value), field_name)


def _optional_id(value: Any, field_name: str) -> Optional[str]:
    if value is None or value == "":
        return None
    return normalize_id(value, field_name)


def _enum(enum_cls: Type[E], value: Any, field_name: str, default: Optional[E] = None) -> E:
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{field_name} is required", field=field_name)
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}", field=field_name)


def _date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    try:
        # Accept full ISO timestamps too ("2024-03-01T00:00:00.000Z").
        return parse_iso_date(value.strip()[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO date (YYYY-MM-DD)", field=field_name)


def _naive_local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.replace(tzinfo=None)


def _timestamp(
    value: Any,
    work_date: date,
    field_name: str,
    *,
    not_before: Optional[datetime] = None,
) -> Optional[datetime]:
    """Check-in/out time given as ISO timestamp, or as HH:MM on ``work_date``.

    An HH:MM value earlier than ``not_before`` (the check-in of an overnight
    shift) belongs to the next day.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _naive_local(value)
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a timestamp", field=field_name)
    v = value.strip()
    try:
        if "T" in v or "-" in v:
            return _naive_local(datetime.fromisoformat(v.replace("Z", "+00:00")))
        stamp = datetime.combine(work_date, parse_hhmm(v))
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO timestamp or HH:MM", field=field_name)
    if not_before is not None and stamp < not_before:
        stamp += timedelta(days=1)
    return stamp


def attendance_record_from_payload(payload: Mapping[str, Any]) -> AttendanceRecord:
    work_date = _date(_get(payload, "date", "workDate"), "date")
    check_in = _timestamp(_get(payload, "checkInTime"), work_date, "checkInTime")
    return AttendanceRecord(
        attendance_id=normalize_id(_get(payload, "id", "_id"), "id"),
        employee_id=normalize_id(_get(payload, "employeeId"), "employeeId"),
        date=work_date,
        attendance_type=_enum(AttendanceType, _get(payload, "attendanceType"), "attendanceType", AttendanceType.PRESENT),
        check_in_time=check_in,
        check_out_time=_timestamp(_get(payload, "checkOutTime"), work_date, "checkOutTime", not_before=check_in),
        check_in_status=_enum(CheckInStatus, _get(payload, "checkInStatus"), "checkInStatus", CheckInStatus.ON_TIME),
        check_out_status=_enum(
            CheckOutStatus,
            _get(payload, "checkOutStatus"),
            "checkOutStatus",
            CheckOutStatus.NOT_CHECKED_OUT,
        ),
        leave_request_id=_optional_id(_get(payload, "leaveRequestId"), "leaveRequestId"),
    )


def leave_request_from_payload(payload: Mapping[str, Any]) -> LeaveRequest:
    start = _get(payload, "startDate")
    end = _get(payload, "endDate")
    return LeaveRequest(
        leave_request_id=normalize_id(_get(payload, "id", "_id"), "id"),
        employee_id=normalize_id(_get(payload, "employeeId"), "employeeId"),
        status=_enum(LeaveStatus, _get(payload, "status"), "status"),
        start_date=_date(start, "startDate") if start is not None else None,
        end_date=_date(end, "endDate") if end is not None else None,
        reason=str(_get(payload, "reason") or ""),
    )


def employee_from_payload(payload: Mapping[str, Any]) -> Employee:
    salary = _get(payload, "basicSalary")
    if salary is None:
        raise ValidationError("basicSalary is required", field="basicSalary")
    return Employee(
        employee_id=normalize_id(_get(payload, "id", "_id"), "id"),
        full_name=str(_get(payload, "name", "fullName") or ""),
        basic_salary=require_non_negative_int(salary, "basicSalary"),
        shift_id=_optional_id(_get(payload, "workShiftId"), "workShiftId"),
        is_active=bool(payload.get("isActive", True)),
    )


def shift_from_payload(payload: Mapping[str, Any]) -> Shift:
    check_in = _get(payload, "checkInTime")
    check_out = _get(payload, "checkOutTime")
    if not check_in or not check_out:
        raise ValidationError("checkInTime and checkOutTime are required", field="checkInTime")
    try:
        start_time, end_time = parse_hhmm(str(check_in)), parse_hhmm(str(check_out))
    except ValueError:
        raise ValidationError("Shift times must be HH:MM", field="checkInTime")
    return Shift(
        shift_id=normalize_id(_get(payload, "id", "_id"), "id"),
        shift_name=str(_get(payload, "name") or ""),
        start_time=start_time,
        end_time=end_time,
        late_threshold_minutes=require_non_negative_int(_get(payload, "lateThresholdMinutes") or 0, "lateThresholdMinutes"),
        early_leave_threshold_minutes=require_non_negative_int(
            _get(payload, "earlyLeaveThresholdMinutes") or 0, "earlyLeaveThresholdMinutes"
        ),
    )


def deduction_settings_from_payload(payload: Optional[Mapping[str, Any]]) -> DeductionSettings:
    """Strict: every amount, block size and the payment day must be present."""
    if not payload:
        raise MissingSettings("Deduction settings are not configured")

    for key in SETTINGS_FIELDS:
        if _get(payload, key) is None:
            raise MissingSettings("Deduction setting is missing", field=key)

    weekdays = payload["workingDaysPerWeek"]
    if isinstance(weekdays, (str, bytes)) or not hasattr(weekdays, "__iter__"):
        raise ValidationError("workingDaysPerWeek must be a list of weekday indices", field="workingDaysPerWeek")
    holidays = payload.get("holidays") or []
    if isinstance(holidays, (str, bytes)):
        raise ValidationError("holidays must be a list of ISO dates", field="holidays")

    settings = DeductionSettings(
        absent_deduction=require_non_negative_int(payload["absentDeduction"], "absentDeduction"),
        leave_deduction=require_non_negative_int(payload["leaveDeduction"], "leaveDeduction"),
        late_deduction=require_non_negative_int(payload["lateDeduction"], "lateDeduction"),
        early_leave_deduction=require_non_negative_int(payload["earlyLeaveDeduction"], "earlyLeaveDeduction"),
        late_time_block=require_non_negative_int(payload["lateTimeBlock"], "lateTimeBlock"),
        early_leave_time_block=require_non_negative_int(payload["earlyLeaveTimeBlock"], "earlyLeaveTimeBlock"),
        working_days_per_week=frozenset(
            require_int_in_range(d, "workingDaysPerWeek", 0, 6) for d in weekdays
        ),
        salary_payment_date=require_int_in_range(
            payload["salaryPaymentDate"], "salaryPaymentDate", 1, MAX_SALARY_PAYMENT_DATE
        ),
        holidays=frozenset(_date(h, "holidays") for h in holidays),
    )
    return validate_deduction_settings(settings)


def deduction_settings_to_payload(settings: DeductionSettings) -> dict:
    payload = {camel: getattr(settings, snake) for camel, snake in SETTINGS_FIELDS.items()}
    payload["workingDaysPerWeek"] = sorted(settings.working_days_per_week)
    payload["holidays"] = sorted(h.isoformat() for h in settings.holidays)
    return payload


def _iso(value: Optional[datetime | date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def salary_calculation_to_payload(calc: SalaryCalculation) -> dict:
    return {
        "id": calc.calculation_id,
        "employeeId": calc.employee_id,
        "employeeName": calc.employee_name,
        "period": calc.period,
        "periodStart": _iso(calc.period_start),
        "periodEnd": _iso(calc.period_end),
        "basicSalary": calc.basic_salary,
        "workingDays": calc.working_days,
        "presentDays": calc.present_days,
        "leaveDays": calc.leave_days,
        "absentDays": calc.absent_days,
        "lateCount": calc.late_count,
        "earlyLeaveCount": calc.early_leave_count,
        "totalLateMinutes": calc.total_late_minutes,
        "totalEarlyLeaveMinutes": calc.total_early_leave_minutes,
        "lateBlocks": calc.late_blocks,
        "earlyLeaveBlocks": calc.early_leave_blocks,
        "deductions": {
            "absent": calc.absent_deduction,
            "leave": calc.leave_deduction,
            "late": calc.late_deduction,
            "earlyLeave": calc.early_leave_deduction,
            "total": calc.total_deduction,
        },
        "totalDeduction": calc.total_deduction,
        "netSalary": calc.net_salary,
        "status": calc.status.value,
        "calculatedAt": _iso(calc.calculated_at),
        "finalizedAt": _iso(calc.finalized_at),
        "paidAt": _iso(calc.paid_at),
        "warnings": list(calc.warnings),
    }
