from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} exceeds {max_len} characters")
    return value


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a valid id")
    if number <= 0:
        raise ValidationError(f"{field_name} is not a valid id")
    return number


def clamp_int(value: Any, *, low: int, high: Optional[int] = None, default: int) -> int:
    """Coerce query-string style numbers into ``[low, high]``; junk gives ``default``."""

    try:
        number = int(value)
    except (TypeError, ValueError):
        number = default
    number = max(number, low)
    return number if high is None else min(number, high)
