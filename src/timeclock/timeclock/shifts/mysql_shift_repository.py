from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Weekday
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, normalize_mysql_time
from .model import ShiftTemplate, ShiftWindow
from .repository import ShiftTemplateRepository

# Column prefix per weekday, indexed like ``Weekday``.
DAY_PREFIXES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
WINDOW_FIELDS = ("entrance", "meal_start", "meal_end", "exit")

_WINDOW_COLUMNS = [f"{p}_{f}" for p in DAY_PREFIXES for f in WINDOW_FIELDS]
_SELECT_TEMPLATE = "SELECT t.template_id, t.template_name, t.active, " + ", ".join(
    f"t.{c}" for c in _WINDOW_COLUMNS
)


def _to_template(r: dict) -> ShiftTemplate:
    windows: dict[Weekday, ShiftWindow] = {}
    for day, prefix in zip(Weekday, DAY_PREFIXES):
        windows[day] = ShiftWindow(
            entrance_time=normalize_mysql_time(r.get(f"{prefix}_entrance")),
            exit_time=normalize_mysql_time(r.get(f"{prefix}_exit")),
            meal_start_time=normalize_mysql_time(r.get(f"{prefix}_meal_start")),
            meal_end_time=normalize_mysql_time(r.get(f"{prefix}_meal_end")),
        )
    return ShiftTemplate.from_mapping(
        template_id=int(r["template_id"]),
        name=r["template_name"],
        windows=windows,
        active=bool(r.get("active", True)),
    )


class MySQLShiftTemplateRepository(ShiftTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user(self, user_id: int) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT_TEMPLATE}
                FROM positions p
                JOIN shift_templates t ON t.template_id = p.template_id
                WHERE p.user_id=%s
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_template(r) if r else None

    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_TEMPLATE} FROM shift_templates t WHERE t.template_id=%s", (int(template_id),))
            r = fetchone(cur)
            return _to_template(r) if r else None

    def get_by_name(self, name: str) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_TEMPLATE} FROM shift_templates t WHERE t.template_name=%s", (name,))
            r = fetchone(cur)
            return _to_template(r) if r else None

    def list_all(self) -> Sequence[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_TEMPLATE} FROM shift_templates t ORDER BY t.template_name ASC")
            return [_to_template(r) for r in fetchall(cur)]

    def create(self, *, name: str, active: bool, windows: dict[Weekday, ShiftWindow]) -> int:
        values: list[object] = [name, 1 if active else 0]
        for day in Weekday:
            w = windows.get(day, ShiftWindow())
            values.extend([w.entrance_time, w.meal_start_time, w.meal_end_time, w.exit_time])

        columns = ["template_name", "active", *_WINDOW_COLUMNS]
        placeholders = ",".join(["%s"] * len(columns))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO shift_templates({', '.join(columns)}) VALUES({placeholders})",
                    tuple(values),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("A shift template with that name already exists") from e
            raise

    def delete(self, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_templates WHERE template_id=%s LIMIT 1", (int(template_id),))
            return cur.rowcount > 0

    def assign(self, *, user_id: int, position_name: str, template_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO positions(position_name, template_id, user_id)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE position_name=VALUES(position_name), template_id=VALUES(template_id)
                """,
                (position_name, int(template_id), int(user_id)),
            )
