from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..core.enums import RequestKind, RequestStatus
from .model import InboxFilters, Request
from .repository import RequestRepository


class InMemoryRequestRepository(RequestRepository):
    """Process-local store.

    There is no conditional UPDATE here, so each row gets its own lock and
    ``decide`` does read-check-write while holding it.
    """

    def __init__(self, *, clock: Optional[Callable[[], datetime]] = None):
        self._rows: dict[tuple[RequestKind, int], Request] = {}
        self._details: dict[tuple[RequestKind, int], dict] = {}
        self._row_locks: dict[tuple[RequestKind, int], threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._clock = clock or datetime.now

    def add(
        self,
        request: Request,
        *,
        employee: str = "",
        request_type: str = "",
        reason: str = "",
        main_date: Optional[date] = None,
        created_at: Optional[datetime] = None,
    ) -> None:
        key = (request.kind, int(request.request_id))
        with self._registry_lock:
            self._rows[key] = request
            self._row_locks.setdefault(key, threading.Lock())
            self._details[key] = {
                "employee": employee,
                "request_type": request_type,
                "reason": reason,
                "main_date": main_date or date.today(),
                "created_at": created_at,
            }

    def _lock_for(self, key: tuple[RequestKind, int]) -> Optional[threading.Lock]:
        with self._registry_lock:
            return self._row_locks.get(key)

    def get(self, *, kind: RequestKind, request_id: int) -> Optional[Request]:
        return self._rows.get((kind, int(request_id)))

    def decide(
        self,
        *,
        kind: RequestKind,
        request_id: int,
        status: RequestStatus,
        approver_id: int,
        comment: Optional[str] = None,
    ) -> bool:
        key = (kind, int(request_id))
        lock = self._lock_for(key)
        if lock is None:
            return False

        with lock:
            current = self._rows.get(key)
            if current is None or current.status != RequestStatus.PENDING:
                return False
            self._rows[key] = replace(
                current,
                status=status,
                approver_id=int(approver_id),
                resolution_comment=comment if comment is not None else current.resolution_comment,
                resolved_at=self._clock(),
            )
            return True

    def _matching(self, filters: InboxFilters) -> list[tuple[Request, dict]]:
        needle = filters.q.lower()
        out: list[tuple[Request, dict]] = []
        with self._registry_lock:
            snapshot = [(req, self._details[key]) for key, req in self._rows.items()]

        for req, d in snapshot:
            if not (filters.start <= d["main_date"] <= filters.end):
                continue
            if filters.kind is not None and req.kind != filters.kind:
                continue
            if filters.status is not None and req.status != filters.status:
                continue
            if needle and not any(needle in (d[f] or "").lower() for f in ("employee", "reason", "request_type")):
                continue
            out.append((req, d))
        out.sort(key=lambda item: (item[0].kind.value, item[0].request_id))
        out.sort(key=lambda item: item[1]["created_at"] or datetime.combine(item[1]["main_date"], datetime.min.time()), reverse=True)
        return out

    def list_inbox(self, filters: InboxFilters) -> Sequence[dict]:
        page = self._matching(filters)[filters.offset : filters.offset + filters.per_page]
        return [
            {
                "key": f"{req.kind.value}:{req.request_id}",
                "kind": req.kind.value,
                "request_id": req.request_id,
                "user_id": req.user_id,
                "employee": d["employee"],
                "request_type": d["request_type"],
                "reason": d["reason"],
                "main_date": d["main_date"].strftime("%Y-%m-%d"),
                "status": req.status.value,
                "resolution_comment": req.resolution_comment or "",
                "created_at": d["created_at"].strftime("%Y-%m-%d %H:%M") if d["created_at"] else "",
            }
            for req, d in page
        ]

    def count_inbox(self, filters: InboxFilters) -> int:
        return len(self._matching(filters))

    def count_by_kind(self, filters: InboxFilters) -> dict[RequestKind, int]:
        counts = {kind: 0 for kind in RequestKind}
        for req, _ in self._matching(filters):
            counts[req.kind] += 1
        return counts
