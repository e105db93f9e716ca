from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import seconds_between
from ..model import DayRecord
from .base import WorkedTimeCalculator


class StandardWorkedTimeCalculator(WorkedTimeCalculator):
    """Standard rule: (exit - entrance) - meal breaks, not below 0."""

    def worked_seconds(self, day: DayRecord) -> Optional[int]:
        bounds = day.bounds
        if not bounds.is_complete:
            return None
        seconds = seconds_between(bounds.entrance_time, bounds.exit_time)
        seconds -= day.meal_seconds
        return max(seconds, 0)
