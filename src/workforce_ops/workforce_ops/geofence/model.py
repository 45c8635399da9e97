from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OfficeLocation:
    office_id: int
    name: str
    latitude: float
    longitude: float
    radius_meters: Optional[int] = None
    is_active: bool = True
