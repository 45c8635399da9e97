from __future__ import annotations

import calendar
import re
from datetime import date, datetime

from ..core.exceptions import ValidationError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValidationError("Invalid date")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date")


def now_local() -> datetime:
    """Current local time.

    Services accept an explicit ``now`` and fall back to this.
    """
    return datetime.now()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_key(year: int, month: int) -> str:
    return f"{int(year)}_{int(month):02d}"
