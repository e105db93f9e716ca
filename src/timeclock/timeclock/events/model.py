from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import EventKind


@dataclass(frozen=True)
class RawAttendanceRecord:
    """Row as fetched from storage, before the motive is classified."""

    event_id: int
    user_id: int
    event_date: date
    event_time: time
    motive_name: Optional[str] = None
    motive_code: Optional[int] = None
    is_manual: bool = False
    observations: Optional[str] = None
    device_name: Optional[str] = None


@dataclass(frozen=True)
class AttendanceEvent:
    """Thực thể miền (domain): một lần chấm công đã chuẩn hoá."""

    user_id: int
    event_date: date
    event_time: time
    kind: EventKind
    is_manual: bool = False
    event_id: Optional[int] = None
    motive_name: Optional[str] = None
    observations: Optional[str] = None
    device_name: Optional[str] = None
