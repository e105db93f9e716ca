from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_duration
from ..reconciliation.calculator.base import WorkedTimeCalculator
from ..reconciliation.calculator.standard_calculator import StandardWorkedTimeCalculator
from ..reconciliation.engine import ReconciliationResult, reconcile
from ..events.repository import AttendanceEventRepository
from ..events.service import AttendanceEventService
from ..shifts.repository import ShiftTemplateRepository
from .aggregator import WeeklyReportRow


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    weeks: list[WeeklyReportRow]


def _fmt_time(t) -> str:
    return t.strftime("%H:%M:%S") if t else "-"


class AttendanceReportService:
    def __init__(
        self,
        events: AttendanceEventRepository,
        templates: ShiftTemplateRepository,
        *,
        calculator: Optional[WorkedTimeCalculator] = None,
        history: Optional[AttendanceEventService] = None,
    ):
        self._events = events
        self._templates = templates
        self._calculator = calculator or StandardWorkedTimeCalculator()
        self._history = history or AttendanceEventService(events)

    def _reconcile(self, user_id: int, start: Optional[date], end: Optional[date]) -> ReconciliationResult:
        records = self._events.list_for_user(int(user_id), start=start, end=end)
        template = self._templates.get_for_user(int(user_id))
        return reconcile(int(user_id), records, template, start=start, end=end, calculator=self._calculator)

    def build_weekly_report(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[WeeklyReportRow]:
        return self._reconcile(user_id, start, end).weeks

    def build_attendance_report(
        self,
        *,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> ReportData:
        """Per-day rows for display plus the weekly summary.

        Open days stay in the rows with an empty worked value.
        """

        result = self._reconcile(user_id, start, end)
        worked_by_date = {w.work_date: w.worked_seconds for w in result.worked}

        out_rows: list[dict] = []
        for day in reversed(result.days):
            worked = worked_by_date.get(day.work_date)
            out_rows.append(
                {
                    "user_id": day.user_id,
                    "work_date": day.work_date.strftime("%Y-%m-%d"),
                    "entrance": _fmt_time(day.bounds.entrance_time),
                    "exit": _fmt_time(day.bounds.exit_time),
                    "meals": [
                        {"out": _fmt_time(m.meal_out_time), "in": _fmt_time(m.meal_in_time)} for m in day.meals
                    ],
                    "meal_hours": format_duration(day.meal_seconds),
                    "worked_hours": format_duration(worked) if worked is not None else "-",
                    "complete": worked is not None,
                }
            )

        return ReportData(rows=out_rows, weeks=result.weeks)

    def build_profile(self, *, user_id: int, history_limit: Optional[int] = None) -> dict:
        template = self._templates.get_for_user(int(user_id))
        return {
            "user_id": int(user_id),
            "template": template,
            "history": self._history.get_history_ui(int(user_id), limit=history_limit),
            "weekly_report": [r.to_ui() for r in self.build_weekly_report(user_id=user_id)],
        }
