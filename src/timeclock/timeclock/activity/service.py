from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..common.datetime_utils import now_local
from ..common.validators import clamp_int, require_positive_int
from ..core.constants import (
    DEFAULT_ACTIVITY_PAGE_SIZE,
    DEFAULT_ACTIVITY_RANGE,
    DEFAULT_TIMEZONE,
    MAX_ACTIVITY_PAGE_SIZE,
)
from ..core.exceptions import ValidationError
from .model import ActivityFilters, ActivityRange, ActivityType
from .repository import ActivityRepository

_RANGE_ALIASES = {
    "today": ActivityRange.TODAY,
    "hoy": ActivityRange.TODAY,
    "24h": ActivityRange.LAST_24H,
    "week": ActivityRange.WEEK,
    "semana": ActivityRange.WEEK,
    "month": ActivityRange.MONTH,
    "mes": ActivityRange.MONTH,
}

_TYPE_ALIASES = {
    "entrance": ActivityType.ENTRANCE,
    "entrada": ActivityType.ENTRANCE,
    "exit": ActivityType.EXIT,
    "salida": ActivityType.EXIT,
    "manual": ActivityType.MANUAL,
    "meal_in": ActivityType.MEAL_IN,
    "comida_entrada": ActivityType.MEAL_IN,
    "meal_out": ActivityType.MEAL_OUT,
    "comida_salida": ActivityType.MEAL_OUT,
    "other": ActivityType.OTHER,
}

_END_OF_DAY = time(23, 59, 59)


def parse_range(value: Union[str, ActivityRange, None]) -> ActivityRange:
    if isinstance(value, ActivityRange):
        return value
    period = _RANGE_ALIASES.get((value or DEFAULT_ACTIVITY_RANGE).strip().lower())
    if period is None:
        raise ValidationError("Range is not valid")
    return period


def parse_activity_type(value: Union[str, ActivityType, None]) -> Optional[ActivityType]:
    if value is None or isinstance(value, ActivityType):
        return value
    v = value.strip().lower()
    if not v:
        return None
    event_type = _TYPE_ALIASES.get(v)
    if event_type is None:
        raise ValidationError("Activity type is not valid")
    return event_type


def _one_month_before(value: datetime) -> datetime:
    year, month = (value.year, value.month - 1) if value.month > 1 else (value.year - 1, 12)
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def resolve_window(period: ActivityRange, now: datetime) -> tuple[datetime, datetime]:
    """Turn a preset into a [start, end] datetime window ending at ``now``.

    ``week`` is the whole ISO week containing ``now`` (Monday to Sunday).
    """

    if period == ActivityRange.TODAY:
        return datetime.combine(now.date(), time.min), now
    if period == ActivityRange.LAST_24H:
        return now - timedelta(hours=24), now
    if period == ActivityRange.WEEK:
        monday = now.date() - timedelta(days=now.weekday())
        return datetime.combine(monday, time.min), datetime.combine(monday + timedelta(days=6), _END_OF_DAY)
    return _one_month_before(now), now


class ActivityService:
    """Feed các lần chấm công gần đây, cho toàn bộ hoặc cho một người."""

    def __init__(self, activity: ActivityRepository, *, timezone: str = DEFAULT_TIMEZONE):
        self._activity = activity
        self._timezone = timezone

    def list_activity(
        self,
        *,
        q: str = "",
        event_type: Union[str, ActivityType, None] = None,
        device_id: Optional[int] = None,
        period: Union[str, ActivityRange, None] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        page: int = 1,
        per_page: int = DEFAULT_ACTIVITY_PAGE_SIZE,
        only_user_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        """Explicit ``start``/``end`` dates win over ``period`` and cover whole days."""

        page = clamp_int(page, low=1, default=1)
        per_page = clamp_int(per_page, low=1, high=MAX_ACTIVITY_PAGE_SIZE, default=DEFAULT_ACTIVITY_PAGE_SIZE)

        if (start is None) != (end is None):
            raise ValidationError("start and end must be given together")
        if start is not None:
            if end < start:
                raise ValidationError("End date must be >= start date")
            window = (datetime.combine(start, time.min), datetime.combine(end, _END_OF_DAY))
            period = None
        else:
            period = parse_range(period)
            window = resolve_window(period, now or now_local(self._timezone))

        if device_id in (None, ""):
            device_id = None
        else:
            device_id = require_positive_int(device_id, "Device")
        if only_user_id is not None:
            only_user_id = require_positive_int(only_user_id, "User")

        filters = ActivityFilters(
            start=window[0],
            end=window[1],
            q=(q or "").strip(),
            event_type=parse_activity_type(event_type),
            device_id=device_id,
            user_id=only_user_id,
            page=page,
            per_page=per_page,
        )

        items = [entry.to_ui() for entry in self._activity.list_activity(filters)]
        total = self._activity.count_activity(filters)
        return {
            "items": items,
            "total": total,
            "page": page,
            "per_page": per_page,
            "total_pages": max(math.ceil(total / per_page), 1),
            "range": period.value if period else None,
            "start": filters.start,
            "end": filters.end,
        }

    def list_devices(self) -> list[dict]:
        return list(self._activity.list_devices())
