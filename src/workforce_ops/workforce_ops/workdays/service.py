from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..auth.model import Principal
from ..auth.policy import require
from ..common.datetime_utils import parse_iso_date
from ..core.enums import Permission
from ..core.exceptions import ValidationError
from .calculator import compute_working_days
from .holidays import is_saturday
from .model import WorkingDays
from .repository import SaturdayOffRepository, WorkingDaysCacheRepository

logger = logging.getLogger(__name__)


class WorkingDayService:
    def __init__(self, sat_off: SaturdayOffRepository, cache: WorkingDaysCacheRepository):
        self._sat_off = sat_off
        self._cache = cache

    def compute(self, year: int, month: int) -> WorkingDays:
        """Fresh computation from holidays and the Saturday-off settings."""

        return compute_working_days(year, month, self._sat_off.get_dates(year, month))

    def get_working_days(self, year: int, month: int) -> WorkingDays:
        result = self.compute(year, month)
        self._store(result)
        return result

    def refresh_cache(self, year: int, month: int) -> WorkingDays:
        result = self.compute(year, month)
        self._cache.upsert(result)
        return result

    def get_cached(self, year: int, month: int) -> Optional[WorkingDays]:
        return self._cache.get(year, month)

    def set_saturday_off(self, principal: Principal, *, year: int, month: int, dates: Iterable[str]) -> WorkingDays:
        require(principal, Permission.MANAGE_CALENDAR)

        if dates is None or isinstance(dates, str):
            raise ValidationError("dates must be a list of YYYY-MM-DD strings")

        cleaned: list[str] = []
        for value in dates:
            d = parse_iso_date(value)
            if d.year != year or d.month != month:
                raise ValidationError(f"{value} is outside {year}-{month:02d}")
            if not is_saturday(d):
                raise ValidationError(f"{value} is not a Saturday")
            if value not in cleaned:
                cleaned.append(value)
        cleaned.sort()

        self._sat_off.set_dates(year, month, cleaned, updated_by=principal.user_id)
        logger.info("[calendar] saturday-off for %s-%02d set to %s by %s", year, month, cleaned, principal.user_id)
        return self.refresh_cache(year, month)

    def _store(self, result: WorkingDays) -> None:
        # Cache is advisory; a failed write must not fail the read.
        try:
            self._cache.upsert(result)
        except Exception:
            logger.exception("[calendar] failed to cache working days for %s", result.key)
