from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import EventKind
from .model import AttendanceEvent, RawAttendanceRecord

MOTIVE_NAMES: dict[str, EventKind] = {
    "entrada": EventKind.ENTRANCE,
    "salida": EventKind.EXIT,
    "salida de comida": EventKind.MEAL_OUT,
    "salida comida": EventKind.MEAL_OUT,
    "entrada de comida": EventKind.MEAL_IN,
    "entrada comida": EventKind.MEAL_IN,
}

# Motive table ids; 3 is the return from the meal, 4 the departure.
MOTIVE_CODES: dict[int, EventKind] = {
    1: EventKind.ENTRANCE,
    2: EventKind.EXIT,
    3: EventKind.MEAL_IN,
    4: EventKind.MEAL_OUT,
}

DISPLAY_LABELS: dict[EventKind, str] = {
    EventKind.ENTRANCE: "Entrada",
    EventKind.EXIT: "Salida",
    EventKind.MEAL_OUT: "Salida a comida",
    EventKind.MEAL_IN: "Regreso de comida",
    EventKind.UNCLASSIFIED: "Movimiento",
}


def classify_motive(motive_name: Optional[str], motive_code: Optional[int] = None) -> EventKind:
    """Map a motive to its event kind.

    The name wins when it matches the lookup table; otherwise the numeric code is
    tried. Anything else is ``UNCLASSIFIED``, never an error.
    """

    if motive_name is not None:
        kind = MOTIVE_NAMES.get(motive_name.strip().lower())
        if kind is not None:
            return kind

    if motive_code is not None:
        try:
            return MOTIVE_CODES.get(int(motive_code), EventKind.UNCLASSIFIED)
        except (TypeError, ValueError):
            return EventKind.UNCLASSIFIED

    return EventKind.UNCLASSIFIED


def normalize(record: RawAttendanceRecord) -> AttendanceEvent:
    return AttendanceEvent(
        user_id=record.user_id,
        event_date=record.event_date,
        event_time=record.event_time,
        kind=classify_motive(record.motive_name, record.motive_code),
        is_manual=record.is_manual,
        event_id=record.event_id,
        motive_name=record.motive_name,
        observations=record.observations,
        device_name=record.device_name,
    )


def normalize_all(records: Iterable[RawAttendanceRecord]) -> list[AttendanceEvent]:
    return [normalize(r) for r in records]


def display_label(kind: EventKind) -> str:
    return DISPLAY_LABELS.get(kind, DISPLAY_LABELS[EventKind.UNCLASSIFIED])
