from __future__ import annotations

from datetime import date

from src.timeclock.timeclock.reports.service import AttendanceReportService


class FakeEventsRepo:
    def __init__(self, records):
        self._records = records

    def list_for_user(self, user_id, *, start=None, end=None):
        return [
            r
            for r in self._records
            if r.user_id == user_id and (start is None or start <= r.event_date) and (end is None or r.event_date <= end)
        ]

    def list_recent_for_user(self, user_id, limit):
        rows = [r for r in self._records if r.user_id == user_id]
        rows.sort(key=lambda r: (r.event_date, r.event_time), reverse=True)
        return rows[:limit]


class FakeTemplatesRepo:
    def __init__(self, template):
        self._template = template

    def get_for_user(self, user_id):
        return self._template


def _records(make_record):
    return [
        make_record(1, date(2024, 1, 8), "09:00", "Entrada"),
        make_record(1, date(2024, 1, 8), "13:00", "Salida de comida"),
        make_record(1, date(2024, 1, 8), "13:30", "Entrada de comida"),
        make_record(1, date(2024, 1, 8), "18:00", "Salida"),
        make_record(1, date(2024, 1, 9), "09:00", "Entrada"),
    ]


def test_weekly_report(make_record, office_template):
    svc = AttendanceReportService(FakeEventsRepo(_records(make_record)), FakeTemplatesRepo(office_template))

    rows = svc.build_weekly_report(user_id=1)

    assert len(rows) == 1
    assert rows[0].worked_seconds == 30600
    assert rows[0].scheduled_seconds == 2 * 28800
    assert rows[0].days_worked == 1


def test_attendance_report_rows_newest_first(make_record, office_template):
    svc = AttendanceReportService(FakeEventsRepo(_records(make_record)), FakeTemplatesRepo(office_template))

    data = svc.build_attendance_report(user_id=1, start=date(2024, 1, 8), end=date(2024, 1, 14))

    assert [r["work_date"] for r in data.rows] == ["2024-01-09", "2024-01-08"]
    assert data.rows[0]["complete"] is False
    assert data.rows[0]["worked_hours"] == "-"
    assert data.rows[1]["worked_hours"] == "08:30:00"
    assert data.rows[1]["meals"] == [{"out": "13:00:00", "in": "13:30:00"}]
    assert data.weeks[0].scheduled_seconds == 5 * 28800


def test_profile_bundles_template_history_and_weeks(make_record, office_template):
    svc = AttendanceReportService(FakeEventsRepo(_records(make_record)), FakeTemplatesRepo(office_template))

    profile = svc.build_profile(user_id=1, history_limit=2)

    assert profile["template"] is office_template
    assert [h["label"] for h in profile["history"]] == ["Entrada", "Salida"]
    assert profile["weekly_report"][0]["week"] == "2024-W02"
