from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import OvertimeStatus
from .model import AttendanceOverride, AttendanceRecord, Location


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user_between(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_present_days(self, user_id: str, start_date: date, end_date: date) -> int:
        """Distinct dates with ``presence='Present'`` in the range."""

        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        location: Location,
        within_geofence: bool,
        reason: Optional[str] = None,
    ) -> int:
        """Insert an open record; raises ConflictError if one is already open."""

        raise NotImplementedError

    def close_checkout(
        self,
        *,
        record_id: int,
        check_out_time: datetime,
        location: Location,
        within_geofence: bool,
        reason: Optional[str],
        potential_overtime_hours: float,
        overtime_status: Optional[OvertimeStatus],
    ) -> bool:
        """Conditional write: only succeeds while the record is still open."""

        raise NotImplementedError

    def list_pending_overtime(self, *, user_ids: Optional[Iterable[str]] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def resolve_overtime(
        self,
        *,
        record_id: int,
        status: OvertimeStatus,
        approved_hours: float,
        reviewed_by: str,
        reviewed_at: datetime,
        comment: Optional[str] = None,
    ) -> bool:
        """Conditional write: only succeeds while the review is still Pending."""

        raise NotImplementedError


class OverrideRepository(Protocol):
    def get(self, user_id: str, work_date: date) -> Optional[AttendanceOverride]:
        raise NotImplementedError

    def list_between(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceOverride]:
        raise NotImplementedError

    def upsert(self, override: AttendanceOverride) -> None:
        raise NotImplementedError
