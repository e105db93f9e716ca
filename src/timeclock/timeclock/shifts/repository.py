from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import ShiftTemplate, ShiftWindow


class ShiftTemplateRepository(Protocol):
    def get_for_user(self, user_id: int) -> Optional[ShiftTemplate]:
        """Template assigned through the person's position, if any."""

        raise NotImplementedError

    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ShiftTemplate]:
        raise NotImplementedError

    def create(self, *, name: str, active: bool, windows: dict[Weekday, ShiftWindow]) -> int:
        raise NotImplementedError

    def delete(self, template_id: int) -> bool:
        raise NotImplementedError

    def assign(self, *, user_id: int, position_name: str, template_id: int) -> None:
        """Create or replace the person's position (one per person)."""

        raise NotImplementedError
