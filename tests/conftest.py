from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

import pytest

from src.timeclock.timeclock.core.enums import Weekday
from src.timeclock.timeclock.events.model import RawAttendanceRecord
from src.timeclock.timeclock.shifts.model import ShiftTemplate, ShiftWindow


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, ISO week 2 of 2024
    return datetime(2024, 1, 10, 9, 30, 15)


@pytest.fixture
def office_template() -> ShiftTemplate:
    """Mon-Fri 09:00-18:00 with a 14:00-15:00 meal: 8h scheduled per day."""

    window = ShiftWindow(
        entrance_time=time(9, 0),
        exit_time=time(18, 0),
        meal_start_time=time(14, 0),
        meal_end_time=time(15, 0),
    )
    weekdays = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]
    return ShiftTemplate.from_mapping(template_id=1, name="Oficina", windows={d: window for d in weekdays})


@pytest.fixture
def make_record():
    counter = {"next": 1}

    def _make(
        user_id: int,
        day: date,
        hhmm: str,
        motive: Optional[str] = None,
        *,
        code: Optional[int] = None,
        manual: bool = False,
    ) -> RawAttendanceRecord:
        event_id = counter["next"]
        counter["next"] += 1
        hh, mm = hhmm.split(":")
        return RawAttendanceRecord(
            event_id=event_id,
            user_id=user_id,
            event_date=day,
            event_time=time(int(hh), int(mm)),
            motive_name=motive,
            motive_code=code,
            is_manual=manual,
        )

    return _make
