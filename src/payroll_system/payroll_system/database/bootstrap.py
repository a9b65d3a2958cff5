"""Schema and seed loading for the payroll database.

Used by ``scripts/db.py`` and, when ``AUTO_INIT_DB``/``AUTO_SEED_DB`` are
set, by the app factory on startup.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, List, Mapping

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# schema.sql names its own database; the configured one wins.
_DB_SELECTION_RE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;[ \t]*$")


def strip_database_selection(sql: str) -> str:
    return _DB_SELECTION_RE.sub("", sql)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ``;``, ignoring ``--`` comments and ``;`` inside quoted strings."""
    statement: List[str] = []
    quote = ""
    i = 0
    n = len(sql)
    while i < n:
        ch = sql[i]
        if quote:
            statement.append(ch)
            if ch == "\\" and i + 1 < n:
                statement.append(sql[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in ("'", '"', "`"):
            quote = ch
            statement.append(ch)
        elif sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = n if newline == -1 else newline
            continue
        elif ch == ";":
            text = "".join(statement).strip()
            if text:
                yield text
            statement = []
        else:
            statement.append(ch)
        i += 1

    text = "".join(statement).strip()
    if text:
        yield text


def run_sql_file(db_config: Mapping, path: str | Path) -> int:
    """Execute every statement of ``path`` in one transaction; returns the statement count."""
    sql = strip_database_selection(Path(path).read_text(encoding="utf-8"))
    conn = DatabaseConnection.from_mapping(db_config).connect()
    try:
        cur = conn.cursor()
        executed = 0
        for statement in iter_sql_statements(sql):
            cur.execute(statement)
            executed += 1
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
    return executed


def ensure_database_exists(db_config: Mapping) -> None:
    db = DatabaseConnection.from_mapping(db_config)
    conn = db.connect(with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{db.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = run_sql_file(db_config, schema_path)
    logger.info("Applied schema %s (%d statements)", schema_path, count)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path) -> None:
    count = run_sql_file(db_config, seed_path)
    logger.info("Applied seed %s (%d statements)", seed_path, count)


def list_tables(db_config: Mapping) -> List[str]:
    conn = DatabaseConnection.from_mapping(db_config).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
