from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.enums import RequestKind, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import InboxFilters, Request
from .repository import RequestRepository


@dataclass(frozen=True)
class RequestTable:
    table: str
    pk_column: str


REQUEST_TABLES: dict[RequestKind, RequestTable] = {
    RequestKind.PERMISSION: RequestTable(table="permissions", pk_column="permission_id"),
    RequestKind.INCIDENT: RequestTable(table="incidents", pk_column="incident_id"),
}


def _inbox_where(filters: InboxFilters) -> tuple[str, list[object]]:
    clauses = ["main_date BETWEEN %s AND %s"]
    params: list[object] = [filters.start, filters.end]

    if filters.q:
        clauses.append("(employee LIKE %s OR reason LIKE %s OR request_type LIKE %s)")
        like = f"%{filters.q}%"
        params.extend([like, like, like])
    if filters.kind is not None:
        clauses.append("kind=%s")
        params.append(filters.kind.value)
    if filters.status is not None:
        clauses.append("status=%s")
        params.append(filters.status.value)

    return " AND ".join(clauses), params


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, kind: RequestKind, request_id: int) -> Optional[Request]:
        t = REQUEST_TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {t.pk_column} AS request_id, user_id, status,
                       approver_id, resolution_comment, resolved_at
                FROM {t.table}
                WHERE {t.pk_column}=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Request(
                request_id=int(r["request_id"]),
                kind=kind,
                user_id=int(r["user_id"]),
                status=RequestStatus(r["status"]),
                approver_id=r.get("approver_id"),
                resolution_comment=r.get("resolution_comment"),
                resolved_at=r.get("resolved_at"),
            )

    def decide(
        self,
        *,
        kind: RequestKind,
        request_id: int,
        status: RequestStatus,
        approver_id: int,
        comment: Optional[str] = None,
    ) -> bool:
        t = REQUEST_TABLES[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {t.table}
                SET status=%s, approver_id=%s, resolved_at=NOW(),
                    resolution_comment=COALESCE(%s, resolution_comment)
                WHERE {t.pk_column}=%s AND status=%s
                LIMIT 1
                """,
                (
                    status.value,
                    int(approver_id),
                    comment,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_inbox(self, filters: InboxFilters) -> Sequence[dict]:
        where, params = _inbox_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT kind, request_id, user_id, employee, request_type, reason,
                       main_date, status, approver_id, resolution_comment, created_at
                FROM v_request_inbox
                WHERE {where}
                ORDER BY COALESCE(created_at, main_date) DESC, kind, request_id
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(filters.per_page), int(filters.offset)]),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                out.append(
                    {
                        "key": f"{r['kind']}:{int(r['request_id'])}",
                        "kind": r["kind"],
                        "request_id": int(r["request_id"]),
                        "user_id": int(r["user_id"]),
                        "employee": r["employee"],
                        "request_type": r["request_type"],
                        "reason": r.get("reason") or "",
                        "main_date": r["main_date"].strftime("%Y-%m-%d"),
                        "status": r["status"],
                        "resolution_comment": r.get("resolution_comment") or "",
                        "created_at": r["created_at"].strftime("%Y-%m-%d %H:%M") if r.get("created_at") else "",
                    }
                )
            return out

    def count_inbox(self, filters: InboxFilters) -> int:
        where, params = _inbox_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM v_request_inbox WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def count_by_kind(self, filters: InboxFilters) -> dict[RequestKind, int]:
        where, params = _inbox_where(filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT kind, COUNT(*) AS total FROM v_request_inbox WHERE {where} GROUP BY kind",
                tuple(params),
            )
            counts = {kind: 0 for kind in RequestKind}
            for r in fetchall(cur):
                counts[RequestKind(r["kind"])] = int(r["total"])
            return counts
