from __future__ import annotations

from typing import Protocol, Sequence

from .model import ActivityEntry, ActivityFilters


class ActivityRepository(Protocol):
    def list_activity(self, filters: ActivityFilters) -> Sequence[ActivityEntry]:
        """Newest first, one page as described by ``filters``."""

        raise NotImplementedError

    def count_activity(self, filters: ActivityFilters) -> int:
        raise NotImplementedError

    def list_devices(self) -> Sequence[dict]:
        raise NotImplementedError
