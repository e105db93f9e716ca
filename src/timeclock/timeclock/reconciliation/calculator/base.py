from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import DayRecord


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_seconds(self, day: DayRecord) -> Optional[int]:
        """Seconds worked that day, or None when the day does not count."""

        raise NotImplementedError
