from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import clamp_int, require_max_length, require_non_empty, require_positive_int
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TIMEZONE, MAX_HISTORY_LIMIT, MAX_OBSERVATIONS_LENGTH
from ..core.enums import Weekday
from ..core.exceptions import ValidationError
from .normalizer import display_label, normalize
from .repository import AttendanceEventRepository

logger = logging.getLogger("timeclock.events")

WEEKDAY_NAMES = {
    Weekday.MONDAY: "lunes",
    Weekday.TUESDAY: "martes",
    Weekday.WEDNESDAY: "miércoles",
    Weekday.THURSDAY: "jueves",
    Weekday.FRIDAY: "viernes",
    Weekday.SATURDAY: "sábado",
    Weekday.SUNDAY: "domingo",
}


@dataclass(frozen=True)
class ManualEventReceipt:
    event_id: int
    user_id: int
    motive_id: int
    recorded_at: datetime
    weekday_name: str


class AttendanceEventService:
    def __init__(
        self,
        events: AttendanceEventRepository,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self._events = events
        self._timezone = timezone
        self._history_limit = clamp_int(history_limit, low=1, high=MAX_HISTORY_LIMIT, default=DEFAULT_HISTORY_LIMIT)

    def record_manual(
        self,
        *,
        user_id: int,
        motive_id: int,
        observations: str,
        now: Optional[datetime] = None,
    ) -> ManualEventReceipt:
        user_id = require_positive_int(user_id, "User")
        motive_id = require_positive_int(motive_id, "Motive")
        observations = require_non_empty(observations, "Observations")
        require_max_length(observations, "Observations", MAX_OBSERVATIONS_LENGTH)

        if not self._events.motive_exists(motive_id):
            raise ValidationError("Motive is not valid")

        now = now or now_local(self._timezone)
        weekday_name = WEEKDAY_NAMES[Weekday.of(now.date())]
        event_id = self._events.create_manual(
            user_id=user_id,
            event_date=now.date(),
            event_time=now.time().replace(microsecond=0),
            weekday_name=weekday_name,
            motive_id=motive_id,
            observations=observations,
        )
        logger.info("manual event recorded", extra={"user_id": user_id, "event_id": event_id, "motive_id": motive_id})
        return ManualEventReceipt(
            event_id=event_id,
            user_id=user_id,
            motive_id=motive_id,
            recorded_at=now.replace(microsecond=0),
            weekday_name=weekday_name,
        )

    def get_history_ui(self, user_id: int, *, limit: Optional[int] = None) -> list[dict]:
        if limit is None:
            limit = self._history_limit
        else:
            limit = clamp_int(limit, low=1, high=MAX_HISTORY_LIMIT, default=self._history_limit)
        rows = self._events.list_recent_for_user(int(user_id), limit)
        return [self._to_ui(normalize(r)) for r in rows]

    @staticmethod
    def _to_ui(event) -> dict:
        return {
            "event_id": event.event_id,
            "date": event.event_date.strftime("%Y-%m-%d"),
            "time": event.event_time.strftime("%H:%M:%S"),
            "kind": event.kind.value,
            "label": display_label(event.kind),
            "manual": event.is_manual,
            "device": event.device_name or "-",
            "observations": event.observations or "",
        }
