from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import RawAttendanceRecord
from .repository import AttendanceEventRepository

_SELECT_EVENTS = """
    SELECT e.event_id, e.user_id, e.event_date, e.event_time,
           e.is_manual, e.motive_id, e.observations,
           m.motive_name, d.device_name
    FROM attendance_events e
    LEFT JOIN motives m ON m.motive_id = e.motive_id
    LEFT JOIN devices d ON d.device_id = e.device_id
"""


def _to_record(r: dict) -> RawAttendanceRecord:
    return RawAttendanceRecord(
        event_id=int(r["event_id"]),
        user_id=int(r["user_id"]),
        event_date=r["event_date"],
        event_time=normalize_mysql_time(r["event_time"]),
        motive_name=r.get("motive_name"),
        motive_code=r.get("motive_id"),
        is_manual=bool(r.get("is_manual")),
        observations=r.get("observations"),
        device_name=r.get("device_name"),
    )


class MySQLAttendanceEventRepository(AttendanceEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[RawAttendanceRecord]:
        clauses = ["e.user_id=%s", "e.event_date IS NOT NULL", "e.event_time IS NOT NULL"]
        params: list[object] = [int(user_id)]

        if start is not None:
            clauses.append("e.event_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("e.event_date <= %s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT_EVENTS}
                WHERE {where}
                ORDER BY e.event_date ASC, e.event_time ASC, e.event_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_recent_for_user(self, user_id: int, limit: int) -> Sequence[RawAttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT_EVENTS}
                WHERE e.user_id=%s
                ORDER BY e.event_date DESC, e.event_time DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def motive_exists(self, motive_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT motive_id FROM motives WHERE motive_id=%s LIMIT 1", (int(motive_id),))
            return fetchone(cur) is not None

    def create_manual(
        self,
        *,
        user_id: int,
        event_date: date,
        event_time: time,
        weekday_name: str,
        motive_id: int,
        observations: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(
                    user_id, device_id, event_date, event_time, weekday_name, is_manual, motive_id, observations
                )
                VALUES(%s,NULL,%s,%s,%s,1,%s,%s)
                """,
                (int(user_id), event_date, event_time, weekday_name, int(motive_id), observations),
            )
            return int(cur.lastrowid)
