from __future__ import annotations

from datetime import date, time

import pytest

from src.timeclock.timeclock.core.exceptions import ValidationError
from src.timeclock.timeclock.events.model import RawAttendanceRecord
from src.timeclock.timeclock.events.service import AttendanceEventService


class FakeEventsRepo:
    def __init__(self, motives=(1, 2, 3, 4)):
        self._motives = set(motives)
        self.created: list[dict] = []
        self.recent: list[RawAttendanceRecord] = []

    def motive_exists(self, motive_id):
        return int(motive_id) in self._motives

    def create_manual(self, **kwargs):
        self.created.append(kwargs)
        return len(self.created)

    def list_recent_for_user(self, user_id, limit):
        return [r for r in self.recent if r.user_id == user_id][:limit]


def test_record_manual_stamps_local_time_and_weekday(fixed_now):
    repo = FakeEventsRepo()
    svc = AttendanceEventService(repo)

    receipt = svc.record_manual(user_id=5, motive_id=1, observations="  olvidé checar ", now=fixed_now)

    assert receipt.event_id == 1
    assert receipt.weekday_name == "miércoles"
    assert repo.created[0]["event_date"] == date(2024, 1, 10)
    assert repo.created[0]["event_time"] == time(9, 30, 15)
    assert repo.created[0]["observations"] == "olvidé checar"


def test_record_manual_requires_observations(fixed_now):
    svc = AttendanceEventService(FakeEventsRepo())

    with pytest.raises(ValidationError):
        svc.record_manual(user_id=5, motive_id=1, observations="   ", now=fixed_now)


def test_record_manual_rejects_long_observations(fixed_now):
    svc = AttendanceEventService(FakeEventsRepo())

    with pytest.raises(ValidationError):
        svc.record_manual(user_id=5, motive_id=1, observations="x" * 201, now=fixed_now)


def test_record_manual_rejects_unknown_motive(fixed_now):
    repo = FakeEventsRepo(motives=(1, 2))
    svc = AttendanceEventService(repo)

    with pytest.raises(ValidationError):
        svc.record_manual(user_id=5, motive_id=9, observations="ok", now=fixed_now)
    assert repo.created == []


def test_history_ui_labels_events(make_record):
    repo = FakeEventsRepo()
    repo.recent = [
        make_record(5, date(2024, 1, 10), "13:00", "Salida de comida"),
        make_record(5, date(2024, 1, 10), "09:00", "Entrada", manual=True),
        make_record(6, date(2024, 1, 10), "09:05", "Entrada"),
    ]
    svc = AttendanceEventService(repo, history_limit=10)

    rows = svc.get_history_ui(5)

    assert [r["label"] for r in rows] == ["Salida a comida", "Entrada"]
    assert rows[1]["manual"] is True
    assert rows[0]["time"] == "13:00:00"
    assert rows[0]["device"] == "-"


@pytest.mark.parametrize(
    "limit, expected",
    [(None, 7), (0, 1), (-5, 1), ("junk", 7), (10000, 500), (25, 25)],
)
def test_history_limit_is_clamped(limit, expected):
    seen = []

    class RecordingRepo(FakeEventsRepo):
        def list_recent_for_user(self, user_id, limit):
            seen.append(limit)
            return []

    AttendanceEventService(RecordingRepo(), history_limit=7).get_history_ui(5, limit=limit)

    assert seen == [expected]
