from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable, Optional, Union

from ..common.validators import clamp_int, require_positive_int
from ..core.constants import DEFAULT_INBOX_PAGE_SIZE, MAX_INBOX_PAGE_SIZE
from ..core.enums import ApprovalAction, RequestKind, RequestStatus
from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from .model import BulkTransitionResult, InboxFilters, SkippedItem, TransitionResult
from .repository import RequestRepository

logger = logging.getLogger("timeclock.requests")

_KIND_ALIASES = {
    "permission": RequestKind.PERMISSION,
    "permiso": RequestKind.PERMISSION,
    "incident": RequestKind.INCIDENT,
    "incidencia": RequestKind.INCIDENT,
}

_ACTION_ALIASES = {
    "approve": ApprovalAction.APPROVE,
    "aprobar": ApprovalAction.APPROVE,
    "reject": ApprovalAction.REJECT,
    "rechazar": ApprovalAction.REJECT,
}

_BADGE_CLASSES = {
    RequestStatus.PENDING: "bg-yellow-50 text-yellow-700 border border-yellow-200",
    RequestStatus.APPROVED: "bg-green-50 text-green-700 border border-green-200",
    RequestStatus.REJECTED: "bg-red-50 text-red-700 border border-red-200",
}
_DEFAULT_BADGE_CLASS = "bg-slate-50 text-slate-700 border border-slate-200"


def parse_kind(value: Union[str, RequestKind, None]) -> RequestKind:
    if isinstance(value, RequestKind):
        return value
    kind = _KIND_ALIASES.get((value or "").strip().lower())
    if kind is None:
        raise ValidationError("Request kind is not valid")
    return kind


def parse_action(value: Union[str, ApprovalAction, None]) -> ApprovalAction:
    if isinstance(value, ApprovalAction):
        return value
    action = _ACTION_ALIASES.get((value or "").strip().lower())
    if action is None:
        raise ValidationError("Action is not valid")
    return action


def parse_key(key: str) -> tuple[RequestKind, int]:
    """Split a ``"kind:id"`` key as sent by bulk selections."""

    raw_kind, sep, raw_id = (key or "").partition(":")
    if not sep:
        raise ValidationError("Malformed key")
    return parse_kind(raw_kind), require_positive_int(raw_id.strip(), "Request")


def badge_class(status: Union[str, RequestStatus, None]) -> str:
    try:
        return _BADGE_CLASSES.get(RequestStatus(status), _DEFAULT_BADGE_CLASS)
    except ValueError:
        return _DEFAULT_BADGE_CLASS


class ApprovalService:
    def __init__(self, requests: RequestRepository):
        self._requests = requests

    def transition(
        self,
        *,
        kind: Union[str, RequestKind],
        request_id: int,
        action: Union[str, ApprovalAction],
        approver_id: int,
        comment: Optional[str] = None,
    ) -> TransitionResult:
        """Approve or reject one PENDING request.

        The status check inside ``decide`` is what makes concurrent deciders
        safe; the ``get`` before it only produces a clearer error.
        """

        kind = parse_kind(kind)
        action = parse_action(action)
        request_id = require_positive_int(request_id, "Request")
        approver_id = require_positive_int(approver_id, "Approver")
        if comment is not None and not isinstance(comment, str):
            raise ValidationError("Comment must be text")
        comment = (comment or "").strip() or None

        req = self._requests.get(kind=kind, request_id=request_id)
        if not req:
            raise NotFoundError("Request not found")
        if not req.is_pending:
            raise ConflictError(f"Request is already {req.status.value}")

        new_status = action.target_status
        decided = self._requests.decide(
            kind=kind,
            request_id=request_id,
            status=new_status,
            approver_id=approver_id,
            comment=comment,
        )
        if not decided:
            raise ConflictError("Request was decided by someone else")

        logger.info(
            "request decided",
            extra={
                "kind": kind.value,
                "request_id": request_id,
                "status": new_status.value,
                "approver_id": approver_id,
            },
        )
        return TransitionResult(
            ok=True,
            kind=kind,
            request_id=request_id,
            new_status=new_status,
            approver_id=approver_id,
            comment=comment,
        )

    def bulk_transition(
        self,
        *,
        keys: Iterable[str],
        action: Union[str, ApprovalAction],
        approver_id: int,
        comment: Optional[str] = None,
    ) -> BulkTransitionResult:
        """Process ``"kind:id"`` keys one by one. Never raises.

        Items are independent: earlier successes stay applied when a later
        item fails.
        """

        result = BulkTransitionResult()
        for key in keys:
            try:
                kind, request_id = parse_key(key)
                result.changed.append(
                    self.transition(
                        kind=kind,
                        request_id=request_id,
                        action=action,
                        approver_id=approver_id,
                        comment=comment,
                    )
                )
            except DomainError as exc:
                result.skipped.append(SkippedItem(key=str(key), reason=str(exc)))
            except Exception:
                logger.exception("bulk transition failed", extra={"key": str(key)})
                result.skipped.append(SkippedItem(key=str(key), reason="error"))

        logger.info(
            "bulk transition done",
            extra={"changed": len(result.changed), "skipped": len(result.skipped)},
        )
        return result

    def list_inbox(
        self,
        *,
        q: str = "",
        kind: Union[str, RequestKind, None] = None,
        status: Union[str, RequestStatus, None] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        page: int = 1,
        per_page: int = DEFAULT_INBOX_PAGE_SIZE,
    ) -> dict:
        """Danh sách yêu cầu (permiso + incidencia) có lọc và phân trang."""

        page = clamp_int(page, low=1, default=1)
        per_page = clamp_int(per_page, low=1, high=MAX_INBOX_PAGE_SIZE, default=DEFAULT_INBOX_PAGE_SIZE)

        if status is not None and not isinstance(status, RequestStatus):
            try:
                status = RequestStatus(str(status).strip().upper())
            except ValueError:
                raise ValidationError("Status is not valid")

        defaults = InboxFilters()
        filters = InboxFilters(
            q=(q or "").strip(),
            kind=parse_kind(kind) if kind else None,
            status=status,
            start=start or defaults.start,
            end=end or defaults.end,
            page=page,
            per_page=per_page,
        )
        if filters.end < filters.start:
            raise ValidationError("End date must be >= start date")

        items = [dict(row, status_class=badge_class(row["status"])) for row in self._requests.list_inbox(filters)]
        total = self._requests.count_inbox(filters)
        badges = self._requests.count_by_kind(filters)

        return {
            "items": items,
            "total": total,
            "page": page,
            "per_page": per_page,
            "total_pages": max(math.ceil(total / per_page), 1),
            "badges": {k.value: badges.get(k, 0) for k in RequestKind},
            "filters": filters,
        }
