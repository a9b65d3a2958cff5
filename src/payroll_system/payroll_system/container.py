from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .leaves.mysql_leave_repository import MySQLLeaveRequestRepository
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.service import SalaryService
from .settings.mysql_settings_repository import MySQLSalarySettingsRepository
from .settings.service import SalarySettingsService
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class Container:
    db: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    shifts_repo: MySQLShiftRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRequestRepository
    settings_repo: MySQLSalarySettingsRepository
    salaries_repo: MySQLSalaryRepository

    salary_service: SalaryService
    salary_settings_service: SalarySettingsService


def build_container(*, db_config: dict) -> Container:
    db = DatabaseConnection.from_mapping(db_config)

    employees_repo = MySQLEmployeeRepository(db)
    shifts_repo = MySQLShiftRepository(db)
    attendance_repo = MySQLAttendanceRepository(db)
    leaves_repo = MySQLLeaveRequestRepository(db)
    settings_repo = MySQLSalarySettingsRepository(db)
    salaries_repo = MySQLSalaryRepository(db)

    salary_service = SalaryService(
        employees_repo,
        shifts_repo,
        attendance_repo,
        leaves_repo,
        settings_repo,
        salaries_repo,
    )
    salary_settings_service = SalarySettingsService(settings_repo)

    return Container(
        db=db,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        settings_repo=settings_repo,
        salaries_repo=salaries_repo,
        salary_service=salary_service,
        salary_settings_service=salary_settings_service,
    )
