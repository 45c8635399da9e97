from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import ValidationError


def require_int(value: Any, field_name: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")


def require_month_year(month: Any, year: Any, *, min_year: int, max_year: int) -> tuple[int, int]:
    m = require_int(month, "month")
    y = require_int(year, "year")
    if m < 1 or m > 12 or y < min_year or y > max_year:
        raise ValidationError("Invalid month or year")
    return m, y


def optional_float(value: Any, field_name: str) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")
    if not math.isfinite(number):
        raise ValidationError(f"Invalid {field_name}")
    return number


def require_coordinate(value: Any, field_name: str, *, limit: float) -> float:
    number = optional_float(value, field_name)
    if number is None:
        raise ValidationError("latitude and longitude are required")
    if abs(number) > limit:
        raise ValidationError(f"Invalid {field_name}")
    return number


def optional_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None
