from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkingDays


class SaturdayOffRepository(Protocol):
    """Company settings documents keyed ``saturday_off_{year}_{MM}``."""

    def get_dates(self, year: int, month: int) -> Sequence[str]:
        """Return configured dates, or an empty list when no document exists."""

        raise NotImplementedError

    def set_dates(self, year: int, month: int, dates: Sequence[str], *, updated_by: str) -> None:
        raise NotImplementedError


class WorkingDaysCacheRepository(Protocol):
    """Advisory cache keyed ``{year}_{MM}``; never the source of truth."""

    def get(self, year: int, month: int) -> Optional[WorkingDays]:
        raise NotImplementedError

    def upsert(self, value: WorkingDays) -> None:
        raise NotImplementedError
