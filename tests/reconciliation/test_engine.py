from dataclasses import replace
from datetime import date

import pytest

from src.timeclock.timeclock.core.exceptions import ValidationError
from src.timeclock.timeclock.reconciliation.engine import reconcile

MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 9)
SUNDAY = date(2024, 1, 14)


def _full_day(make_record, user_id, day):
    return [
        make_record(user_id, day, "09:00", "Entrada"),
        make_record(user_id, day, "13:00", "Salida de comida"),
        make_record(user_id, day, "13:30", "Entrada de comida"),
        make_record(user_id, day, "18:00", "Salida"),
    ]


def test_reconcile_without_range_schedules_event_dates(make_record, office_template):
    records = _full_day(make_record, 1, MONDAY)

    result = reconcile(1, records, office_template)

    assert len(result.weeks) == 1
    week = result.weeks[0]
    assert (week.iso_year, week.iso_week) == (2024, 2)
    assert week.worked_seconds == 30600
    assert week.scheduled_seconds == 28800
    assert week.overtime_seconds == 1800
    assert week.days_worked == 1
    assert week.days_scheduled == 5
    assert week.compliance_pct == 20.0


def test_reconcile_with_range_schedules_every_date(make_record, office_template):
    records = _full_day(make_record, 1, MONDAY)

    result = reconcile(1, records, office_template, start=MONDAY, end=SUNDAY)

    assert result.weeks[0].scheduled_seconds == 5 * 28800
    assert result.weeks[0].overtime_seconds == 0


def test_reconcile_ignores_other_users_and_dates_outside_range(make_record, office_template):
    records = _full_day(make_record, 1, MONDAY) + _full_day(make_record, 2, TUESDAY)
    records += _full_day(make_record, 1, date(2024, 1, 15))

    result = reconcile(1, records, office_template, start=MONDAY, end=SUNDAY)

    assert [d.work_date for d in result.days] == [MONDAY]


def test_reconcile_without_template(make_record):
    result = reconcile(1, _full_day(make_record, 1, MONDAY), None)

    week = result.weeks[0]
    assert week.scheduled_seconds == 0
    assert week.overtime_seconds == 30600
    assert week.compliance_pct is None


def test_inactive_template_counts_as_not_scheduled(make_record, office_template):
    inactive = replace(office_template, active=False)

    result = reconcile(1, _full_day(make_record, 1, MONDAY), inactive)

    assert result.scheduled == []
    assert result.weeks[0].days_scheduled == 0


def test_reconcile_rejects_half_open_or_inverted_range(office_template):
    with pytest.raises(ValidationError):
        reconcile(1, [], office_template, start=MONDAY)
    with pytest.raises(ValidationError):
        reconcile(1, [], office_template, start=SUNDAY, end=MONDAY)


def test_reconcile_is_deterministic(make_record, office_template):
    records = _full_day(make_record, 1, MONDAY) + _full_day(make_record, 1, TUESDAY)

    assert reconcile(1, records, office_template) == reconcile(1, list(reversed(records)), office_template)
