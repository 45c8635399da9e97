from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional

from ..auth.model import Principal
from ..auth.policy import can_view_attendance, require
from ..common.datetime_utils import month_bounds, now_local, parse_iso_date
from ..common.validators import optional_text
from ..core.enums import OvertimeStatus, Permission
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..geofence.service import GeofenceService
from ..users.repository import UserRepository
from ..workdays.service import WorkingDayService
from .classifier import aggregate_month, apply_override, classify_day
from .model import AttendanceOverride, DailyComputation, Location
from .repository import AttendanceRepository, OverrideRepository

logger = logging.getLogger(__name__)

ALLOWED_DAY_CREDITS = (0.0, 0.5, 1.0)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def daily_to_dict(day: DailyComputation) -> dict:
    return {
        "date": day.date,
        "checkIn": _iso(day.check_in),
        "checkOut": _iso(day.check_out),
        "totalHours": day.total_hours,
        "status": day.status.value,
        "dayCredit": day.day_credit,
        "underwork": day.underwork,
        "overtimeHours": day.overtime_hours,
    }


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        overrides: OverrideRepository,
        users: UserRepository,
        geofence: GeofenceService,
        working_days: WorkingDayService,
    ):
        self._attendance = attendance
        self._overrides = overrides
        self._users = users
        self._geofence = geofence
        self._working_days = working_days

    def check_in(
        self,
        principal: Principal,
        *,
        latitude: float,
        longitude: float,
        accuracy: Optional[float] = None,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        require(principal, Permission.RECORD_ATTENDANCE)
        now = now or now_local()

        if self._attendance.get_open_for_user(principal.user_id):
            raise ConflictError("You are already checked in")

        fence = self._geofence.locate(latitude, longitude)
        record_id = self._attendance.create_checkin(
            user_id=principal.user_id,
            work_date=now.date(),
            check_in_time=now,
            location=Location(latitude=latitude, longitude=longitude, accuracy=accuracy),
            within_geofence=fence.within_geofence,
            reason=None if fence.within_geofence else optional_text(reason),
        )
        logger.info(
            "[attendance] check-in user=%s record=%s within_geofence=%s distance=%sm",
            principal.user_id, record_id, fence.within_geofence, fence.distance_meters,
        )
        return {
            "recordId": record_id,
            "withinGeofence": fence.within_geofence,
            "distanceMeters": fence.distance_meters,
        }

    def check_out(
        self,
        principal: Principal,
        *,
        latitude: float,
        longitude: float,
        accuracy: Optional[float] = None,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> dict:
        require(principal, Permission.RECORD_ATTENDANCE)
        now = now or now_local()

        record = self._attendance.get_open_for_user(principal.user_id)
        if not record:
            raise ValidationError("No active attendance record found")

        fence = self._geofence.locate(latitude, longitude)
        day = classify_day(record.check_in_time, now, work_date=record.work_date.isoformat())
        overtime_status = OvertimeStatus.PENDING if day.overtime_hours > 0 else None

        closed = self._attendance.close_checkout(
            record_id=record.record_id,
            check_out_time=now,
            location=Location(latitude=latitude, longitude=longitude, accuracy=accuracy),
            within_geofence=fence.within_geofence,
            reason=None if fence.within_geofence else optional_text(reason),
            potential_overtime_hours=day.overtime_hours,
            overtime_status=overtime_status,
        )
        if not closed:
            # Another request closed the same record first.
            raise ConflictError("Attendance record is already checked out")

        logger.info(
            "[attendance] check-out user=%s record=%s hours=%s status=%s overtime=%s",
            principal.user_id, record.record_id, day.total_hours, day.status.value, day.overtime_hours,
        )
        return {
            "recordId": record.record_id,
            "withinGeofence": fence.within_geofence,
            "distanceMeters": fence.distance_meters,
            "day": daily_to_dict(day),
            "overtimeApprovalStatus": overtime_status.value if overtime_status else None,
        }

    def _ensure_can_view(self, principal: Principal, user_id: str) -> None:
        target_team = None
        if principal.user_id != user_id:
            target = self._users.get_by_id(user_id)
            target_team = target.team_id if target else None
        if not can_view_attendance(principal, user_id, target_team_id=target_team):
            raise AuthorizationError("Forbidden")

    def get_daily_logs(self, principal: Principal, *, user_id: str, date_str: str) -> list[dict]:
        work_date = parse_iso_date(date_str)
        self._ensure_can_view(principal, user_id)

        override = self._overrides.get(user_id, work_date)
        records = self._attendance.list_for_user_between(user_id, work_date, work_date)

        logs = []
        for r in records:
            day = apply_override(classify_day(r.check_in_time, r.check_out_time, work_date=date_str), override)
            logs.append(daily_to_dict(day))
        return logs

    def set_override(
        self,
        principal: Principal,
        *,
        user_id: str,
        date_str: str,
        day_credit: Any,
        reason: Any = None,
        now: Optional[datetime] = None,
    ) -> AttendanceOverride:
        require(principal, Permission.OVERRIDE_ATTENDANCE)
        work_date = parse_iso_date(date_str)

        if isinstance(day_credit, bool):
            raise ValidationError("Invalid dayCredit")
        try:
            credit = float(day_credit)
        except (TypeError, ValueError):
            raise ValidationError("Invalid dayCredit")
        if credit not in ALLOWED_DAY_CREDITS:
            raise ValidationError("Invalid dayCredit")

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        override = AttendanceOverride(
            user_id=user_id,
            work_date=work_date,
            day_credit=credit,
            reason=optional_text(reason),
            updated_by=principal.user_id,
            updated_at=now or now_local(),
        )
        self._overrides.upsert(override)
        logger.info("[attendance] override %s -> %s by %s", override.key, credit, principal.user_id)
        return override

    def monthly_summary(self, principal: Principal, *, user_id: str, month: int, year: int) -> dict:
        self._ensure_can_view(principal, user_id)

        start, end = month_bounds(year, month)
        working = self._working_days.get_working_days(year, month)
        present_days = self._attendance.count_present_days(user_id, start, end)

        overrides: dict[date, AttendanceOverride] = {o.work_date: o for o in self._overrides.list_between(user_id, start, end)}
        days: dict[date, DailyComputation] = {}
        for r in self._attendance.list_for_user_between(user_id, start, end):
            day = classify_day(r.check_in_time, r.check_out_time, work_date=r.work_date.isoformat())
            # Several records on one date: keep the one with the most hours.
            best = days.get(r.work_date)
            if best is None or day.total_hours > best.total_hours:
                days[r.work_date] = day
        for work_date, override in overrides.items():
            if work_date not in days:
                days[work_date] = classify_day(None, None, work_date=work_date.isoformat())
        merged = [apply_override(d, overrides.get(k)) for k, d in sorted(days.items())]
        aggregate = aggregate_month(merged)

        rate = (present_days / working.total_working_days) * 100 if working.total_working_days > 0 else 0
        return {
            "userId": user_id,
            "month": month,
            "year": year,
            "presentDays": present_days,
            "workingDays": working.total_working_days,
            "attendanceRate": round(rate, 2),
            "presentCredit": aggregate.present_credit,
            "fullDays": aggregate.full_days,
            "halfDays": aggregate.half_days,
            "zeroDays": aggregate.zero_days,
            "underworkAlerts": aggregate.underwork_alerts,
            "overtimeHours": aggregate.overtime_hours,
        }
