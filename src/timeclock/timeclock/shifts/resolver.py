from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import Weekday
from .model import ShiftTemplate, ShiftWindow


@dataclass(frozen=True)
class DailyScheduled:
    user_id: int
    work_date: date
    scheduled_seconds: int


class ScheduleResolver:
    """Expected window for any calendar date from a person's weekly template."""

    def __init__(self, template: Optional[ShiftTemplate]):
        self._template = template if template is not None and template.active else None

    def window_for(self, work_date: date) -> Optional[ShiftWindow]:
        if self._template is None:
            return None
        window = self._template.window(Weekday.of(work_date))
        return window if window.is_scheduled else None

    def scheduled_seconds(self, work_date: date) -> int:
        window = self.window_for(work_date)
        return window.scheduled_seconds() if window else 0

    @property
    def days_scheduled(self) -> int:
        return self._template.days_scheduled if self._template else 0

    def daily_scheduled(self, user_id: int, dates: Iterable[date]) -> list[DailyScheduled]:
        out: list[DailyScheduled] = []
        for d in sorted(set(dates)):
            if self.window_for(d) is None:
                continue
            out.append(DailyScheduled(user_id=user_id, work_date=d, scheduled_seconds=self.scheduled_seconds(d)))
        return out
