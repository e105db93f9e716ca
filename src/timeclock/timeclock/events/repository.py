from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import RawAttendanceRecord


class AttendanceEventRepository(Protocol):
    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[RawAttendanceRecord]:
        """Events of one person, oldest first; open bounds mean "no limit"."""

        raise NotImplementedError

    def list_recent_for_user(self, user_id: int, limit: int) -> Sequence[RawAttendanceRecord]:
        """Newest first, for history display."""

        raise NotImplementedError

    def motive_exists(self, motive_id: int) -> bool:
        raise NotImplementedError

    def create_manual(
        self,
        *,
        user_id: int,
        event_date: date,
        event_time: time,
        weekday_name: str,
        motive_id: int,
        observations: str,
    ) -> int:
        raise NotImplementedError
