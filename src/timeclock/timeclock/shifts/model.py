from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import seconds_between
from ..core.enums import Weekday


@dataclass(frozen=True)
class ShiftWindow:
    """Expected entrance/exit (and optional meal) for one weekday."""

    entrance_time: Optional[time] = None
    exit_time: Optional[time] = None
    meal_start_time: Optional[time] = None
    meal_end_time: Optional[time] = None

    @property
    def is_scheduled(self) -> bool:
        return self.entrance_time is not None and self.exit_time is not None

    def meal_seconds(self) -> int:
        if self.meal_start_time is None or self.meal_end_time is None:
            return 0
        return max(0, seconds_between(self.meal_start_time, self.meal_end_time))

    def scheduled_seconds(self) -> int:
        if not self.is_scheduled:
            return 0
        return max(0, seconds_between(self.entrance_time, self.exit_time) - self.meal_seconds())


NOT_SCHEDULED = ShiftWindow()


@dataclass(frozen=True)
class ShiftTemplate:
    """Thực thể miền (domain): lịch làm việc theo tuần.

    ``windows`` always holds seven slots indexed by ``Weekday``.
    """

    template_id: int
    name: str
    windows: tuple[ShiftWindow, ...]
    active: bool = True

    def __post_init__(self):
        if len(self.windows) != 7:
            raise ValueError("A shift template needs exactly 7 weekday windows")

    @classmethod
    def from_mapping(
        cls,
        *,
        template_id: int,
        name: str,
        windows: dict[Weekday, ShiftWindow],
        active: bool = True,
    ) -> "ShiftTemplate":
        return cls(
            template_id=template_id,
            name=name,
            windows=tuple(windows.get(day, NOT_SCHEDULED) for day in Weekday),
            active=active,
        )

    def window(self, day: Weekday) -> ShiftWindow:
        return self.windows[int(day)]

    @property
    def days_scheduled(self) -> int:
        return sum(1 for w in self.windows if w.is_scheduled)
