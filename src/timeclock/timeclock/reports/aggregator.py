from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Optional, Union

from ..common.datetime_utils import format_duration, iso_week_key
from ..reconciliation.model import DailyWorked
from ..shifts.resolver import DailyScheduled


@dataclass(frozen=True)
class WeeklyReportRow:
    user_id: int
    iso_year: int
    iso_week: int
    worked_seconds: int
    scheduled_seconds: int
    overtime_seconds: int
    days_worked: int
    days_scheduled: int
    compliance_pct: Optional[float]

    @property
    def week_label(self) -> str:
        return f"{self.iso_year}-W{self.iso_week:02d}"

    def to_ui(self) -> dict:
        return {
            "user_id": self.user_id,
            "week": self.week_label,
            "worked_hours": format_duration(self.worked_seconds),
            "scheduled_hours": format_duration(self.scheduled_seconds),
            "overtime_hours": format_duration(self.overtime_seconds),
            "days_worked": self.days_worked,
            "days_scheduled": self.days_scheduled,
            "compliance_pct": self.compliance_pct,
        }


def compliance_percentage(days_worked: int, days_scheduled: int) -> Optional[float]:
    """Percentage rounded half-up to one decimal; None without scheduled days.

    Not capped: working more days than scheduled yields more than 100.
    """

    if days_scheduled <= 0:
        return None
    pct = Decimal(100 * days_worked) / Decimal(days_scheduled)
    return float(pct.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def aggregate_weeks(
    worked: Iterable[DailyWorked],
    scheduled: Iterable[DailyScheduled],
    days_scheduled: Union[int, Mapping[int, int]] = 0,
) -> list[WeeklyReportRow]:
    """Full outer join of worked and scheduled seconds per (person, ISO week).

    ``days_scheduled`` is the fixed expected-days count, either one value for
    everybody or a mapping by person. Rows come back newest week first.
    """

    worked_sec: dict[tuple[int, tuple[int, int]], int] = defaultdict(int)
    worked_dates: dict[tuple[int, tuple[int, int]], set] = defaultdict(set)
    sched_sec: dict[tuple[int, tuple[int, int]], int] = defaultdict(int)

    for w in worked:
        key = (w.user_id, iso_week_key(w.work_date))
        worked_sec[key] += int(w.worked_seconds)
        if w.worked_seconds > 0:
            worked_dates[key].add(w.work_date)

    for s in scheduled:
        key = (s.user_id, iso_week_key(s.work_date))
        sched_sec[key] += int(s.scheduled_seconds)

    def expected_days(user_id: int) -> int:
        if isinstance(days_scheduled, Mapping):
            return int(days_scheduled.get(user_id, 0))
        return int(days_scheduled)

    rows: list[WeeklyReportRow] = []
    for user_id, (year, week) in set(worked_sec) | set(sched_sec):
        key = (user_id, (year, week))
        w_total = worked_sec.get(key, 0)
        s_total = sched_sec.get(key, 0)
        days_worked = len(worked_dates.get(key, ()))
        expected = expected_days(user_id)
        rows.append(
            WeeklyReportRow(
                user_id=user_id,
                iso_year=year,
                iso_week=week,
                worked_seconds=w_total,
                scheduled_seconds=s_total,
                overtime_seconds=max(0, w_total - s_total),
                days_worked=days_worked,
                days_scheduled=expected,
                compliance_pct=compliance_percentage(days_worked, expected),
            )
        )

    rows.sort(key=lambda r: r.user_id)
    rows.sort(key=lambda r: (r.iso_year, r.iso_week), reverse=True)
    return rows
