from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetchone, normalize_mysql_time, transaction
from .model import Shift
from .repository import ShiftRepository

_SELECT_SHIFT = """
    SELECT shift_id, shift_name, start_time, end_time,
           late_threshold_minutes, early_leave_threshold_minutes
    FROM shifts
"""


def _to_shift(row: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=str(row["shift_id"]),
        shift_name=row["shift_name"] or "",
        start_time=normalize_mysql_time(row["start_time"]),
        end_time=normalize_mysql_time(row["end_time"]),
        late_threshold_minutes=int(row.get("late_threshold_minutes") or 0),
        early_leave_threshold_minutes=int(row.get("early_leave_threshold_minutes") or 0),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with transaction(self._db) as cur:
            cur.execute(_SELECT_SHIFT + " WHERE shift_id = %s", (str(shift_id),))
            row = fetchone(cur)
        return _to_shift(row) if row else None
