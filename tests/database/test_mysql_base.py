from datetime import datetime, time, timedelta

import mysql.connector
import pytest

from src.timeclock.timeclock.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.timeclock.timeclock.database.mysql_base import db_cursor, is_duplicate_key, normalize_mysql_time


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(8, 30)) == time(8, 30)
    assert normalize_mysql_time(timedelta(hours=13, minutes=5, seconds=9)) == time(13, 5, 9)
    assert normalize_mysql_time("07:45") == time(7, 45)
    assert normalize_mysql_time(datetime(2024, 1, 8, 18, 0, 1)) == time(18, 0, 1)


def test_normalize_mysql_time_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_mysql_time("0745")
    with pytest.raises(TypeError):
        normalize_mysql_time(745)


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self):
        self.conn = FakeConn()

    def connect(self):
        return self.conn


def test_db_cursor_commits_and_closes():
    factory = FakeFactory()

    with db_cursor(factory) as (conn, cur):
        assert cur is factory.conn.cursor_obj

    assert factory.conn.committed and factory.conn.closed and cur.closed
    assert not factory.conn.rolled_back


def test_db_cursor_rolls_back_on_error():
    factory = FakeFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory):
            raise RuntimeError("boom")

    assert factory.conn.rolled_back and factory.conn.closed
    assert not factory.conn.committed


def test_sql_splitter_handles_quotes_and_comments():
    sql = _strip_create_db_and_use(
        "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\n-- comment; here\n"
        "INSERT INTO motives VALUES (1, 'a;b');\nSELECT 1;\n"
    )

    assert [s.strip() for s in _iter_sql_statements(sql)] == ["INSERT INTO motives VALUES (1, 'a;b')", "SELECT 1"]


def test_is_duplicate_key():
    assert is_duplicate_key(mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062))
    assert not is_duplicate_key(mysql.connector.IntegrityError(msg="FK fails", errno=1452))
    assert not is_duplicate_key(ValueError("x"))
