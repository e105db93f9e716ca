from __future__ import annotations

from collections import defaultdict
from datetime import date, time
from typing import Iterable, Optional, Sequence

from ..core.enums import EventKind
from ..events.model import AttendanceEvent
from .calculator.base import WorkedTimeCalculator
from .calculator.standard_calculator import StandardWorkedTimeCalculator
from .model import DailyWorked, DayBounds, DayRecord, MealInterval


def pair_meals(meal_outs: Iterable[time], meal_ins: Iterable[time]) -> tuple[MealInterval, ...]:
    """Pair each meal-out with the earliest unused meal-in at or after it.

    Meal-outs are walked in ascending order; a matched meal-in is consumed.
    """

    available = sorted(meal_ins)
    used = [False] * len(available)
    intervals: list[MealInterval] = []

    for out_t in sorted(meal_outs):
        match: Optional[time] = None
        for i, in_t in enumerate(available):
            if used[i] or in_t < out_t:
                continue
            used[i] = True
            match = in_t
            break
        intervals.append(MealInterval(meal_out_time=out_t, meal_in_time=match))

    return tuple(intervals)


def _build_day(user_id: int, work_date: date, events: Sequence[AttendanceEvent]) -> DayRecord:
    entrances = [e.event_time for e in events if e.kind == EventKind.ENTRANCE]
    exits = [e.event_time for e in events if e.kind == EventKind.EXIT]
    meal_outs = [e.event_time for e in events if e.kind == EventKind.MEAL_OUT]
    meal_ins = [e.event_time for e in events if e.kind == EventKind.MEAL_IN]

    bounds = DayBounds(
        user_id=user_id,
        work_date=work_date,
        entrance_time=min(entrances) if entrances else None,
        exit_time=max(exits) if exits else None,
    )
    return DayRecord(bounds=bounds, meals=pair_meals(meal_outs, meal_ins))


def pair_days(events: Iterable[AttendanceEvent]) -> list[DayRecord]:
    """Group events by (person, date) and rebuild each day.

    Every date with at least one event is returned, including open days and
    days holding only unclassified events, so history views can show them.
    Output is ordered by person, then date.
    """

    grouped: dict[tuple[int, date], list[AttendanceEvent]] = defaultdict(list)
    for e in events:
        grouped[(e.user_id, e.event_date)].append(e)

    return [_build_day(user_id, work_date, grouped[(user_id, work_date)]) for user_id, work_date in sorted(grouped)]


def daily_worked(
    days: Iterable[DayRecord],
    calculator: Optional[WorkedTimeCalculator] = None,
) -> list[DailyWorked]:
    """Worked seconds for complete days; open days are left out."""

    calculator = calculator or StandardWorkedTimeCalculator()
    out: list[DailyWorked] = []
    for day in days:
        seconds = calculator.worked_seconds(day)
        if seconds is None:
            continue
        out.append(DailyWorked(user_id=day.user_id, work_date=day.work_date, worked_seconds=seconds))
    return out
