from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import seconds_between


@dataclass(frozen=True)
class DayBounds:
    user_id: int
    work_date: date
    entrance_time: Optional[time] = None
    exit_time: Optional[time] = None

    @property
    def is_complete(self) -> bool:
        return (
            self.entrance_time is not None
            and self.exit_time is not None
            and self.exit_time >= self.entrance_time
        )


@dataclass(frozen=True)
class MealInterval:
    meal_out_time: time
    meal_in_time: Optional[time] = None

    @property
    def seconds(self) -> int:
        # Unpaired meal-out counts as zero.
        if self.meal_in_time is None:
            return 0
        return max(0, seconds_between(self.meal_out_time, self.meal_in_time))


@dataclass(frozen=True)
class DayRecord:
    """One person's reconstructed day: bounds plus meal breaks."""

    bounds: DayBounds
    meals: tuple[MealInterval, ...] = ()

    @property
    def user_id(self) -> int:
        return self.bounds.user_id

    @property
    def work_date(self) -> date:
        return self.bounds.work_date

    @property
    def meal_seconds(self) -> int:
        return sum(m.seconds for m in self.meals)


@dataclass(frozen=True)
class DailyWorked:
    user_id: int
    work_date: date
    worked_seconds: int
