from datetime import date, time

import pytest

from src.timeclock.timeclock.core.enums import Weekday
from src.timeclock.timeclock.shifts.model import ShiftTemplate, ShiftWindow
from src.timeclock.timeclock.shifts.resolver import ScheduleResolver


@pytest.mark.parametrize(
    "dayofweek, expected",
    [(1, Weekday.SUNDAY), (2, Weekday.MONDAY), (4, Weekday.WEDNESDAY), (7, Weekday.SATURDAY)],
)
def test_weekday_from_mysql_dayofweek(dayofweek, expected):
    assert Weekday.from_dayofweek(dayofweek) == expected


def test_weekday_from_dayofweek_out_of_range():
    with pytest.raises(ValueError):
        Weekday.from_dayofweek(0)
    with pytest.raises(ValueError):
        Weekday.from_dayofweek(8)


def test_weekday_of_date_uses_monday_zero():
    assert Weekday.of(date(2024, 1, 8)) == Weekday.MONDAY
    assert Weekday.of(date(2024, 1, 14)) == Weekday.SUNDAY


def test_template_needs_seven_windows():
    with pytest.raises(ValueError):
        ShiftTemplate(template_id=1, name="x", windows=(ShiftWindow(),) * 6)


def test_window_scheduled_seconds_subtracts_meal():
    window = ShiftWindow(time(9, 0), time(18, 0), time(14, 0), time(15, 0))

    assert window.scheduled_seconds() == 8 * 3600


def test_window_without_meal():
    assert ShiftWindow(time(7, 0), time(15, 0)).scheduled_seconds() == 8 * 3600


def test_resolver_maps_dates_to_windows(office_template):
    resolver = ScheduleResolver(office_template)

    assert resolver.scheduled_seconds(date(2024, 1, 10)) == 28800
    assert resolver.window_for(date(2024, 1, 13)) is None
    assert resolver.days_scheduled == 5


def test_resolver_daily_scheduled_skips_unscheduled_and_duplicates(office_template):
    resolver = ScheduleResolver(office_template)
    dates = [date(2024, 1, 12), date(2024, 1, 13), date(2024, 1, 12), date(2024, 1, 11)]

    out = resolver.daily_scheduled(1, dates)

    assert [d.work_date for d in out] == [date(2024, 1, 11), date(2024, 1, 12)]


def test_resolver_without_template():
    resolver = ScheduleResolver(None)

    assert resolver.scheduled_seconds(date(2024, 1, 10)) == 0
    assert resolver.days_scheduled == 0
