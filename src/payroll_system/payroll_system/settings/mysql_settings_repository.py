from __future__ import annotations

import json
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetchone, load_json_list, transaction
from .model import DeductionSettings
from .repository import SalarySettingsRepository

SETTINGS_ROW_ID = 1


def _int_or_none(value) -> Optional[int]:
    return int(value) if value is not None else None


class MySQLSalarySettingsRepository(SalarySettingsRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get(self) -> Optional[DeductionSettings]:
        with transaction(self._db) as cur:
            cur.execute(
                """
                SELECT absent_deduction, leave_deduction, late_deduction, early_leave_deduction,
                       late_time_block, early_leave_time_block, working_days_per_week,
                       salary_payment_date, holidays
                FROM salary_settings
                WHERE settings_id=%s
                """,
                (SETTINGS_ROW_ID,),
            )
            r = fetchone(cur)
            if not r:
                return None

            weekdays = r.get("working_days_per_week")
            return DeductionSettings(
                absent_deduction=_int_or_none(r.get("absent_deduction")),
                leave_deduction=_int_or_none(r.get("leave_deduction")),
                late_deduction=_int_or_none(r.get("late_deduction")),
                early_leave_deduction=_int_or_none(r.get("early_leave_deduction")),
                late_time_block=_int_or_none(r.get("late_time_block")),
                early_leave_time_block=_int_or_none(r.get("early_leave_time_block")),
                working_days_per_week=(
                    frozenset(int(d) for d in load_json_list(weekdays)) if weekdays is not None else None
                ),
                salary_payment_date=_int_or_none(r.get("salary_payment_date")),
                holidays=frozenset(parse_iso_date(str(h)) for h in load_json_list(r.get("holidays"))),
            )

    def save(self, settings: DeductionSettings) -> None:
        with transaction(self._db) as cur:
            cur.execute(
                """
                INSERT INTO salary_settings (
                    settings_id, absent_deduction, leave_deduction, late_deduction, early_leave_deduction,
                    late_time_block, early_leave_time_block, working_days_per_week,
                    salary_payment_date, holidays
                ) VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    absent_deduction=VALUES(absent_deduction),
                    leave_deduction=VALUES(leave_deduction),
                    late_deduction=VALUES(late_deduction),
                    early_leave_deduction=VALUES(early_leave_deduction),
                    late_time_block=VALUES(late_time_block),
                    early_leave_time_block=VALUES(early_leave_time_block),
                    working_days_per_week=VALUES(working_days_per_week),
                    salary_payment_date=VALUES(salary_payment_date),
                    holidays=VALUES(holidays)
                """,
                (
                    SETTINGS_ROW_ID,
                    settings.absent_deduction,
                    settings.leave_deduction,
                    settings.late_deduction,
                    settings.early_leave_deduction,
                    settings.late_time_block,
                    settings.early_leave_time_block,
                    json.dumps(sorted(settings.working_days_per_week)),
                    settings.salary_payment_date,
                    json.dumps(sorted(h.isoformat() for h in settings.holidays)),
                ),
            )
