from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..common.datetime_utils import parse_clock_time
from ..common.validators import require_non_empty, require_positive_int
from ..core.enums import Weekday
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import ShiftWindow
from .repository import ShiftTemplateRepository

logger = logging.getLogger("timeclock.shifts")


class ShiftTemplateService:
    def __init__(self, templates: ShiftTemplateRepository):
        self._templates = templates

    @staticmethod
    def _parse_time(value: Optional[str], label: str):
        try:
            return parse_clock_time(value)
        except ValueError:
            raise ValidationError(f"{label}: invalid time (HH:MM)")

    def _parse_window(self, day: Weekday, raw: Mapping[str, Optional[str]]) -> ShiftWindow:
        label = day.name.capitalize()
        window = ShiftWindow(
            entrance_time=self._parse_time(raw.get("entrance"), f"{label} entrance"),
            exit_time=self._parse_time(raw.get("exit"), f"{label} exit"),
            meal_start_time=self._parse_time(raw.get("meal_start"), f"{label} meal start"),
            meal_end_time=self._parse_time(raw.get("meal_end"), f"{label} meal end"),
        )

        if (window.entrance_time is None) != (window.exit_time is None):
            raise ValidationError(f"{label}: entrance and exit must be set together")
        if (window.meal_start_time is None) != (window.meal_end_time is None):
            raise ValidationError(f"{label}: meal start and end must be set together")
        if window.is_scheduled and window.exit_time <= window.entrance_time:
            raise ValidationError(f"{label}: exit must be after entrance")
        return window

    def create_template(
        self,
        *,
        name: str,
        days: Mapping[Weekday, Mapping[str, Optional[str]]],
        active: bool = True,
    ) -> int:
        """Create a weekly template from raw ``HH:MM`` strings per weekday.

        Missing weekdays are "not scheduled".
        """

        name = require_non_empty(name, "Template name")
        windows = {day: self._parse_window(day, days.get(day, {})) for day in Weekday}

        if self._templates.get_by_name(name):
            raise ConflictError("A shift template with that name already exists")

        template_id = self._templates.create(name=name, active=bool(active), windows=windows)
        logger.info("shift template created", extra={"template_id": template_id, "template_name": name})
        return template_id

    def delete_template(self, *, template_id: int) -> None:
        template_id = require_positive_int(template_id, "Template")
        if not self._templates.delete(template_id):
            raise NotFoundError("Shift template not found")
        logger.info("shift template deleted", extra={"template_id": template_id})

    def assign_template(self, *, user_id: int, position_name: str, template_id: int) -> None:
        user_id = require_positive_int(user_id, "User")
        template_id = require_positive_int(template_id, "Template")
        position_name = require_non_empty(position_name, "Position name")

        if not self._templates.get_by_id(template_id):
            raise NotFoundError("Shift template not found")

        self._templates.assign(user_id=user_id, position_name=position_name, template_id=template_id)

    def list_templates(self):
        return self._templates.list_all()
