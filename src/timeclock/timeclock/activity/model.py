from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ActivityType(str, Enum):
    """Loại dòng trong feed hoạt động (khớp cột event_type của view)."""

    ENTRANCE = "entrance"
    EXIT = "exit"
    MANUAL = "manual"
    MEAL_IN = "meal_in"
    MEAL_OUT = "meal_out"
    OTHER = "other"


class ActivityRange(str, Enum):
    TODAY = "today"
    LAST_24H = "24h"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class ActivityFilters:
    start: datetime
    end: datetime
    q: str = ""
    event_type: Optional[ActivityType] = None
    device_id: Optional[int] = None
    user_id: Optional[int] = None
    page: int = 1
    per_page: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class ActivityEntry:
    event_id: int
    user_id: int
    employee: str
    position_name: str
    event_type: ActivityType
    occurred_at: datetime
    weekday_name: str
    device_id: Optional[int] = None
    device_name: Optional[str] = None
    method: str = "device"
    motive: Optional[str] = None
    observations: Optional[str] = None

    def to_ui(self) -> dict:
        return {
            "id": self.event_id,
            "audit_id": str(self.event_id),
            "user_id": self.user_id,
            "employee": self.employee,
            "position": self.position_name,
            "event_type": self.event_type.value,
            "occurred_at": self.occurred_at.strftime("%Y-%m-%d %H:%M:%S"),
            "weekday": self.weekday_name,
            "device_id": self.device_id,
            "device_name": self.device_name or "-",
            "method": self.method,
            "motive": self.motive or "",
            "observations": self.observations or "",
        }
