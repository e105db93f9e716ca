from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE


def parse_clock_time(value: Optional[str]) -> Optional[time]:
    """Parse HH:MM or HH:MM:SS; blank means "not set"."""

    v = (value or "").strip()
    if not v:
        return None
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def now_local(tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Current wall-clock time in the configured civil timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def seconds_between(start: time, end: time) -> int:
    """Signed seconds from ``start`` to ``end`` on the same day."""
    return seconds_of_day(end) - seconds_of_day(start)


def iso_week_key(value: date) -> tuple[int, int]:
    iso = value.isocalendar()
    return iso[0], iso[1]


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def format_duration(total_seconds: int) -> str:
    """Render seconds as HH:MM:SS (hours may exceed 24)."""

    total_seconds = int(total_seconds)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
