from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ..common.datetime_utils import parse_hhmm
from .connection import DatabaseConnection


@contextmanager
def transaction(db: DatabaseConnection) -> Iterator[Any]:
    """Dictionary cursor inside a single transaction.

    Commits when the block exits normally, rolls back on any exception.
    The connection is always closed.
    """
    conn = db.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def placeholders(values: Sequence[Any]) -> str:
    """``%s,%s,%s`` for an IN (...) clause."""
    return ", ".join("%s" for _ in values)


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as ``time``, ``timedelta`` or ``'HH:MM[:SS]'`` depending on the connector."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)
    if isinstance(value, str):
        return parse_hhmm(value)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def load_json_list(value: Any) -> list:
    """JSON columns come back as str or bytes depending on the connector."""
    if value is None or value == "":
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, list):
        raise ValueError(f"Expected a JSON list, got {type(value)!r}")
    return value
