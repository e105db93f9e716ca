from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RequestKind, RequestStatus
from .model import InboxFilters, Request


class RequestRepository(Protocol):
    def get(self, *, kind: RequestKind, request_id: int) -> Optional[Request]:
        raise NotImplementedError

    def decide(
        self,
        *,
        kind: RequestKind,
        request_id: int,
        status: RequestStatus,
        approver_id: int,
        comment: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to ``status`` in one conditional write.

        Returns False when no row was PENDING at write time. A None comment
        keeps whatever comment is stored.
        """

        raise NotImplementedError

    def list_inbox(self, filters: InboxFilters) -> Sequence[dict]:
        raise NotImplementedError

    def count_inbox(self, filters: InboxFilters) -> int:
        raise NotImplementedError

    def count_by_kind(self, filters: InboxFilters) -> dict[RequestKind, int]:
        raise NotImplementedError
