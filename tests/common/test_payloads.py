from datetime import date, datetime, time

import pytest

from src.payroll_system.payroll_system.common.payloads import (
    attendance_record_from_payload,
    deduction_settings_from_payload,
    deduction_settings_to_payload,
    employee_from_payload,
    leave_request_from_payload,
    normalize_id,
    shift_from_payload,
)
from src.payroll_system.payroll_system.core.enums import AttendanceType, CheckInStatus, CheckOutStatus, LeaveStatus
from src.payroll_system.payroll_system.core.exceptions import MissingSettings, ValidationError

SETTINGS_PAYLOAD = {
    "absentDeduction": 70000,
    "leaveDeduction": 35000,
    "lateDeduction": 5000,
    "earlyLeaveDeduction": 5000,
    "lateTimeBlock": 30,
    "earlyLeaveTimeBlock": 30,
    "salaryPaymentDate": 5,
    "workingDaysPerWeek": [1, 2, 3, 4, 5],
}


@pytest.mark.parametrize("value", ["E1", {"_id": "E1", "name": "A"}, {"id": "E1"}])
def test_normalize_id_accepts_id_shapes(value):
    assert normalize_id(value, "employeeId") == "E1"


def test_normalize_id_numeric_and_missing():
    assert normalize_id(12) == "12"
    with pytest.raises(ValidationError):
        normalize_id(None, "employeeId")
    with pytest.raises(ValidationError):
        normalize_id({"name": "A"}, "employeeId")


def test_attendance_record_from_dashboard_payload():
    record = attendance_record_from_payload(
        {
            "_id": "A1",
            "employeeId": {"_id": "E1"},
            "date": "2024-03-04T00:00:00.000Z",
            "attendanceType": "present",
            "checkInTime": "08:40",
            "checkOutTime": "2024-03-04T16:30:00",
            "checkInStatus": "late",
            "checkOutStatus": "early",
        }
    )

    assert record.employee_id == "E1"
    assert record.date == date(2024, 3, 4)
    assert record.check_in_time == datetime(2024, 3, 4, 8, 40)
    assert record.check_out_time == datetime(2024, 3, 4, 16, 30)
    assert record.check_in_status == CheckInStatus.LATE
    assert record.check_out_status == CheckOutStatus.EARLY
    assert record.leave_request_id is None


def test_attendance_record_defaults_and_bad_enum():
    record = attendance_record_from_payload({"id": 5, "employeeId": "E1", "date": "2024-03-04"})

    assert record.attendance_type == AttendanceType.PRESENT
    assert record.check_in_status == CheckInStatus.ON_TIME
    assert record.check_out_status == CheckOutStatus.NOT_CHECKED_OUT

    with pytest.raises(ValidationError) as exc:
        attendance_record_from_payload({"id": 5, "employeeId": "E1", "date": "2024-03-04", "attendanceType": "wfh"})
    assert exc.value.field == "attendanceType"


def test_leave_employee_and_shift_payloads():
    leave = leave_request_from_payload({"_id": "L1", "employeeId": "E1", "status": "Approved", "startDate": "2024-03-04"})
    employee = employee_from_payload({"_id": "E1", "name": "A", "basicSalary": "5000000", "workShiftId": {"_id": "S1"}})
    shift = shift_from_payload({"_id": "S1", "name": "Office", "checkInTime": "08:00", "checkOutTime": "17:00"})

    assert leave.status == LeaveStatus.APPROVED and leave.is_approved
    assert leave.start_date == date(2024, 3, 4)
    assert employee.basic_salary == 5_000_000
    assert employee.shift_id == "S1"
    assert shift.start_time == time(8, 0)
    assert shift.end_time == time(17, 0)


def test_negative_salary_rejected():
    with pytest.raises(ValidationError):
        employee_from_payload({"_id": "E1", "basicSalary": -1})


def test_settings_round_trip_through_payload():
    settings = deduction_settings_from_payload(dict(SETTINGS_PAYLOAD, holidays=["2024-04-30"]))

    assert settings.working_days_per_week == frozenset({1, 2, 3, 4, 5})
    assert settings.holidays == frozenset({date(2024, 4, 30)})
    assert deduction_settings_to_payload(settings)["holidays"] == ["2024-04-30"]


@pytest.mark.parametrize("key", sorted(SETTINGS_PAYLOAD))
def test_each_missing_setting_is_reported(key):
    payload = {k: v for k, v in SETTINGS_PAYLOAD.items() if k != key}

    with pytest.raises(MissingSettings) as exc:
        deduction_settings_from_payload(payload)

    assert exc.value.field == key


@pytest.mark.parametrize(
    "override",
    [
        {"lateTimeBlock": 0},
        {"absentDeduction": -1},
        {"salaryPaymentDate": 29},
        {"workingDaysPerWeek": [7]},
        {"workingDaysPerWeek": "1,2,3"},
        {"lateDeduction": True},
    ],
)
def test_invalid_settings_values(override):
    with pytest.raises(ValidationError):
        deduction_settings_from_payload(dict(SETTINGS_PAYLOAD, **override))


def test_empty_settings_payload():
    with pytest.raises(MissingSettings):
        deduction_settings_from_payload({})


def test_hhmm_check_out_same_day_when_after_check_in():
    record = attendance_record_from_payload(
        {"id": "A1", "employeeId": "E1", "date": "2024-03-04", "checkInTime": "08:00", "checkOutTime": "17:00"}
    )

    assert record.check_out_time == datetime(2024, 3, 4, 17, 0)
