from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Union

from ..common.datetime_utils import iter_dates
from ..core.exceptions import ValidationError
from ..events.model import AttendanceEvent, RawAttendanceRecord
from ..events.normalizer import normalize
from ..reports.aggregator import WeeklyReportRow, aggregate_weeks
from ..shifts.model import ShiftTemplate
from ..shifts.resolver import DailyScheduled, ScheduleResolver
from .calculator.base import WorkedTimeCalculator
from .model import DailyWorked, DayRecord
from .pairing import daily_worked, pair_days

logger = logging.getLogger("timeclock.reconciliation")


@dataclass(frozen=True)
class ReconciliationResult:
    days: list[DayRecord]
    worked: list[DailyWorked]
    scheduled: list[DailyScheduled]
    weeks: list[WeeklyReportRow]


def reconcile(
    user_id: int,
    events: Iterable[Union[AttendanceEvent, RawAttendanceRecord]],
    template: Optional[ShiftTemplate],
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    calculator: Optional[WorkedTimeCalculator] = None,
) -> ReconciliationResult:
    """Run one person's events through pairing, scheduling and weekly totals.

    Without a range, scheduled time is counted on the dates that have events.
    With ``start`` and ``end`` every date of the range is scheduled, so weeks
    without any event still show their expected time.
    """

    if (start is None) != (end is None):
        raise ValidationError("start and end must be given together")
    if start is not None and end < start:
        raise ValidationError("end must be on or after start")

    normalized = [e if isinstance(e, AttendanceEvent) else normalize(e) for e in events]
    normalized = [e for e in normalized if e.user_id == user_id]
    if start is not None:
        normalized = [e for e in normalized if start <= e.event_date <= end]

    days = pair_days(normalized)
    worked = daily_worked(days, calculator)

    resolver = ScheduleResolver(template)
    if start is not None:
        schedule_dates = list(iter_dates(start, end))
    else:
        schedule_dates = [d.work_date for d in days]
    scheduled = resolver.daily_scheduled(user_id, schedule_dates)

    weeks = aggregate_weeks(worked, scheduled, resolver.days_scheduled)
    logger.debug(
        "reconciled",
        extra={"user_id": user_id, "days": len(days), "worked_days": len(worked), "weeks": len(weeks)},
    )
    return ReconciliationResult(days=days, worked=worked, scheduled=scheduled, weeks=weeks)
