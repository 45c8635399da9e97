from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Holiday:
    date: str  # YYYY-MM-DD
    day: str
    name: str


@dataclass(frozen=True)
class WorkingDays:
    """Working-day breakdown of one calendar month."""

    year: int
    month: int
    total_days: int
    total_working_days: int
    holidays: list[str] = field(default_factory=list)
    sat_off: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.year}_{self.month:02d}"
