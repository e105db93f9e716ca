from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestKind, RequestStatus


@dataclass(frozen=True)
class Request:
    """Permission or incident request; both share this shape."""

    request_id: int
    kind: RequestKind
    user_id: int
    status: RequestStatus
    approver_id: Optional[int] = None
    resolution_comment: Optional[str] = None
    resolved_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING


@dataclass(frozen=True)
class TransitionResult:
    ok: bool
    kind: RequestKind
    request_id: int
    new_status: RequestStatus
    approver_id: int
    comment: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.request_id}"


@dataclass(frozen=True)
class SkippedItem:
    key: str
    reason: str


@dataclass
class BulkTransitionResult:
    changed: list[TransitionResult] = field(default_factory=list)
    skipped: list[SkippedItem] = field(default_factory=list)


@dataclass(frozen=True)
class InboxFilters:
    q: str = ""
    kind: Optional[RequestKind] = None
    status: Optional[RequestStatus] = None
    start: date = date(1970, 1, 1)
    end: date = date(2100, 12, 31)
    page: int = 1
    per_page: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page
