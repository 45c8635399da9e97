from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayStatus, OvertimeStatus, PresenceStatus


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out pair.

    Created on check-in with ``check_out_time=None``, closed once on check-out
    and touched at most once more by the overtime review.
    """

    record_id: int
    user_id: str
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    check_in_location: Optional[Location]
    check_out_location: Optional[Location]
    within_geofence: bool
    reason: Optional[str] = None
    check_out_within_geofence: Optional[bool] = None
    check_out_reason: Optional[str] = None
    presence: PresenceStatus = PresenceStatus.PRESENT
    potential_overtime_hours: float = 0.0
    overtime_status: Optional[OvertimeStatus] = None
    approved_overtime_hours: float = 0.0
    overtime_reviewed_by: Optional[str] = None
    overtime_reviewed_at: Optional[datetime] = None
    review_comment: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class AttendanceOverride:
    """Administrative day-credit correction, keyed ``{user_id}_{date}``."""

    user_id: str
    work_date: date
    day_credit: float
    reason: Optional[str]
    updated_by: str
    updated_at: datetime

    @property
    def key(self) -> str:
        return f"{self.user_id}_{self.work_date.isoformat()}"


@dataclass(frozen=True)
class DailyComputation:
    """Read-model derived from an attendance record, never persisted."""

    date: str
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    total_hours: float
    status: DayStatus
    day_credit: float
    underwork: bool
    overtime_hours: float


@dataclass(frozen=True)
class MonthlyAggregate:
    present_credit: float
    half_days: int
    full_days: int
    zero_days: int
    underwork_alerts: int
    overtime_hours: float
