from __future__ import annotations

from datetime import date
from enum import Enum, IntEnum


class EventKind(str, Enum):
    """Loại sự kiện chấm công sau khi chuẩn hoá."""

    ENTRANCE = "ENTRANCE"
    EXIT = "EXIT"
    MEAL_OUT = "MEAL_OUT"
    MEAL_IN = "MEAL_IN"
    UNCLASSIFIED = "UNCLASSIFIED"


class Weekday(IntEnum):
    """Canonical weekday index, same numbering as ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, value: date) -> "Weekday":
        return cls(value.weekday())

    @classmethod
    def from_dayofweek(cls, value: int) -> "Weekday":
        """Convert MySQL ``DAYOFWEEK`` numbering (1=Sunday .. 7=Saturday)."""

        value = int(value)
        if value < 1 or value > 7:
            raise ValueError(f"DAYOFWEEK out of range: {value}")
        return cls((value + 5) % 7)


class RequestStatus(str, Enum):
    """Trạng thái luồng duyệt yêu cầu (permiso/incidencia)."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class RequestKind(str, Enum):
    PERMISSION = "permission"
    INCIDENT = "incident"


class ApprovalAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"

    @property
    def target_status(self) -> RequestStatus:
        return RequestStatus.APPROVED if self is ApprovalAction.APPROVE else RequestStatus.REJECTED
