from __future__ import annotations

from typing import Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..events.service import WEEKDAY_NAMES
from .model import ActivityEntry, ActivityFilters, ActivityType
from .repository import ActivityRepository


def _activity_where(filters: ActivityFilters) -> tuple[str, list[object]]:
    clauses: list[str] = []
    params: list[object] = []

    if filters.user_id is not None:
        clauses.append("user_id=%s")
        params.append(int(filters.user_id))
    if filters.q:
        clauses.append(
            "(employee LIKE %s OR position_name LIKE %s OR device_name LIKE %s"
            " OR motive LIKE %s OR CAST(event_id AS CHAR) LIKE %s)"
        )
        like = f"%{filters.q}%"
        params.extend([like] * 5)
    if filters.event_type is not None:
        clauses.append("event_type=%s")
        params.append(filters.event_type.value)
    if filters.device_id is not None:
        clauses.append("device_id=%s")
        params.append(int(filters.device_id))

    clauses.append("occurred_at BETWEEN %s AND %s")
    params.extend([filters.start, filters.end])
    return " AND ".join(clauses), params


def _to_entry(r: dict) -> ActivityEntry:
    # day_of_week comes from MySQL DAYOFWEEK() (1=Sunday)
    weekday = Weekday.from_dayofweek(r["day_of_week"])
    return ActivityEntry(
        event_id=int(r["event_id"]),
        user_id=int(r["user_id"]),
        employee=r["employee"],
        position_name=r.get("position_name") or "",
        event_type=ActivityType(r["event_type"]),
        occurred_at=r["occurred_at"],
        weekday_name=WEEKDAY_NAMES[weekday],
        device_id=r.get("device_id"),
        device_name=r.get("device_name"),
        method=r.get("method") or "device",
        motive=r.get("motive"),
        observations=r.get("observations"),
    )


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_activity(self, filters: ActivityFilters) -> Sequence[ActivityEntry]:
        where, params = _activity_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, user_id, employee, position_name, event_type, occurred_at,
                       day_of_week, device_id, device_name, method, motive, observations
                FROM v_recent_activity
                WHERE {where}
                ORDER BY occurred_at DESC, event_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(filters.per_page), int(filters.offset)]),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def count_activity(self, filters: ActivityFilters) -> int:
        where, params = _activity_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM v_recent_activity WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def list_devices(self) -> Sequence[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT device_id, device_name FROM devices ORDER BY device_name ASC")
            return [{"id": int(r["device_id"]), "name": r["device_name"]} for r in fetchall(cur)]
