from datetime import time, timedelta

import pytest

from src.payroll_system.payroll_system.database.bootstrap import iter_sql_statements, strip_database_selection
from src.payroll_system.payroll_system.database.mysql_base import load_json_list, normalize_mysql_time, placeholders


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(8, 30)) == time(8, 30)
    assert normalize_mysql_time(timedelta(hours=8, minutes=30)) == time(8, 30)
    assert normalize_mysql_time("17:00:00") == time(17, 0)


def test_normalize_mysql_time_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_mysql_time("8")
    with pytest.raises(TypeError):
        normalize_mysql_time(830)


def test_load_json_list():
    assert load_json_list(None) == []
    assert load_json_list(b"[1, 2]") == [1, 2]
    assert load_json_list('["2024-04-30"]') == ["2024-04-30"]
    with pytest.raises(ValueError):
        load_json_list('{"a": 1}')


def test_placeholders():
    assert placeholders(["a", "b", "c"]) == "%s, %s, %s"


def test_iter_sql_statements_handles_quotes_and_comments():
    sql = """
    -- settings row
    INSERT INTO t (a) VALUES ('x;y');
    UPDATE t SET a = "1;2"; -- trailing
    SELECT 1
    """

    stmts = list(iter_sql_statements(sql))

    assert stmts == ["INSERT INTO t (a) VALUES ('x;y')", 'UPDATE t SET a = "1;2"', "SELECT 1"]


def test_strip_database_selection():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);"

    assert list(iter_sql_statements(strip_database_selection(sql))) == ["CREATE TABLE t (id INT)"]
