from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

import pytest

from src.workforce_ops.workforce_ops.attendance.model import AttendanceOverride, AttendanceRecord, Location
from src.workforce_ops.workforce_ops.auth.model import Principal
from src.workforce_ops.workforce_ops.core.enums import (
    OvertimeStatus,
    PayrollStatus,
    PresenceStatus,
    Role,
    SalaryType,
)
from src.workforce_ops.workforce_ops.core.exceptions import ConflictError
from src.workforce_ops.workforce_ops.geofence.model import OfficeLocation
from src.workforce_ops.workforce_ops.payroll.model import PayrollRecord
from src.workforce_ops.workforce_ops.users.model import UserProfile
from src.workforce_ops.workforce_ops.workdays.model import WorkingDays

OFFICE_LAT = 28.6139
OFFICE_LON = 77.2090


class InMemoryUsers:
    def __init__(self, profiles: Iterable[UserProfile]):
        self.by_id: dict[str, UserProfile] = {p.user_id: p for p in profiles}

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        return self.by_id.get(user_id)

    def list_by_roles(self, roles) -> Sequence[UserProfile]:
        wanted = set(roles)
        return [p for p in self.by_id.values() if p.is_active and p.role in wanted]

    def list_team_member_ids(self, team_id: str) -> Sequence[str]:
        return [p.user_id for p in self.by_id.values() if p.team_id == team_id]

    def update_salary(self, user_id: str, *, salary_type: SalaryType, salary_amount: float, updated_by: str) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = replace(self.by_id[user_id], salary_type=salary_type, salary_amount=salary_amount)
        return True


class InMemoryOffices:
    def __init__(self, offices: Iterable[OfficeLocation] = ()):
        self.offices = list(offices)

    def list_active(self) -> Sequence[OfficeLocation]:
        return [o for o in self.offices if o.is_active]


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0

    def add(self, user_id: str, check_in: datetime, check_out: Optional[datetime] = None, **fields) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(
            record_id=self._id,
            user_id=user_id,
            work_date=check_in.date(),
            check_in_time=check_in,
            check_out_time=check_out,
            check_in_location=None,
            check_out_location=None,
            within_geofence=True,
            **fields,
        )
        self.records[rec.record_id] = rec
        return rec

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(int(record_id))

    def get_open_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        open_records = [r for r in self.records.values() if r.user_id == user_id and r.is_open]
        open_records.sort(key=lambda r: r.check_in_time, reverse=True)
        return open_records[0] if open_records else None

    def list_for_user_between(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        items = [r for r in self.records.values() if r.user_id == user_id and start_date <= r.work_date <= end_date]
        return sorted(items, key=lambda r: (r.work_date, r.check_in_time))

    def count_present_days(self, user_id: str, start_date: date, end_date: date) -> int:
        return len(
            {
                r.work_date
                for r in self.list_for_user_between(user_id, start_date, end_date)
                if r.presence == PresenceStatus.PRESENT
            }
        )

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
        if self.get_open_for_user(user_id):
            raise ConflictError("You are already checked in")
        rec = self.add(user_id, check_in_time, reason=reason)
        self.records[rec.record_id] = replace(rec, check_in_location=location, within_geofence=within_geofence)
        return rec.record_id

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
        rec = self.records.get(record_id)
        if not rec or not rec.is_open:
            return False
        self.records[record_id] = replace(
            rec,
            check_out_time=check_out_time,
            check_out_location=location,
            check_out_within_geofence=within_geofence,
            check_out_reason=reason,
            potential_overtime_hours=potential_overtime_hours,
            overtime_status=overtime_status,
        )
        return True

    def list_pending_overtime(self, *, user_ids: Optional[Iterable[str]] = None) -> Sequence[AttendanceRecord]:
        allowed = set(user_ids) if user_ids is not None else None
        return [
            r
            for r in self.records.values()
            if r.overtime_status == OvertimeStatus.PENDING and (allowed is None or r.user_id in allowed)
        ]

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
        rec = self.records.get(record_id)
        if not rec or rec.overtime_status != OvertimeStatus.PENDING:
            return False
        self.records[record_id] = replace(
            rec,
            overtime_status=status,
            approved_overtime_hours=approved_hours,
            overtime_reviewed_by=reviewed_by,
            overtime_reviewed_at=reviewed_at,
            review_comment=comment,
        )
        return True


class InMemoryOverrides:
    def __init__(self):
        self.by_key: dict[str, AttendanceOverride] = {}

    def get(self, user_id: str, work_date: date) -> Optional[AttendanceOverride]:
        return self.by_key.get(f"{user_id}_{work_date.isoformat()}")

    def list_between(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceOverride]:
        return [o for o in self.by_key.values() if o.user_id == user_id and start_date <= o.work_date <= end_date]

    def upsert(self, override: AttendanceOverride) -> None:
        self.by_key[override.key] = override


class InMemorySaturdayOff:
    def __init__(self):
        self.by_period: dict[tuple[int, int], list[str]] = {}

    def get_dates(self, year: int, month: int) -> Sequence[str]:
        return list(self.by_period.get((year, month), []))

    def set_dates(self, year: int, month: int, dates: Sequence[str], *, updated_by: str) -> None:
        self.by_period[(year, month)] = list(dates)


class InMemoryWorkingDaysCache:
    def __init__(self, *, broken: bool = False):
        self.by_key: dict[str, WorkingDays] = {}
        self.broken = broken

    def get(self, year: int, month: int) -> Optional[WorkingDays]:
        return self.by_key.get(f"{year}_{month:02d}")

    def upsert(self, value: WorkingDays) -> None:
        if self.broken:
            raise RuntimeError("cache unavailable")
        self.by_key[value.key] = value


class InMemoryPayroll:
    def __init__(self):
        self.by_id: dict[str, PayrollRecord] = {}

    def get(self, payroll_id: str) -> Optional[PayrollRecord]:
        return self.by_id.get(payroll_id)

    def upsert_many(self, records: Sequence[PayrollRecord]) -> None:
        for rec in records:
            self.by_id[rec.payroll_id] = replace(rec, status=PayrollStatus.UNPAID, paid_at=None)

    def list_for_user(self, user_id: str) -> Sequence[PayrollRecord]:
        return [r for r in self.by_id.values() if r.user_id == user_id]

    def mark_paid(self, payroll_id: str, *, paid_at: datetime) -> bool:
        rec = self.by_id.get(payroll_id)
        if not rec or rec.status != PayrollStatus.UNPAID:
            return False
        self.by_id[payroll_id] = replace(rec, status=PayrollStatus.PAID, paid_at=paid_at)
        return True


PROFILES = (
    UserProfile("admin-1", "Ada Admin", "admin@example.com", Role.ADMIN),
    UserProfile("hr-1", "Hana HR", "hr@example.com", Role.HR, salary_type=SalaryType.MONTHLY, salary_amount=42000.0),
    UserProfile("lead-1", "Liam Lead", "lead@example.com", Role.TEAM_LEAD, team_id="team-a",
                salary_type=SalaryType.MONTHLY, salary_amount=50000.0),
    UserProfile("lead-2", "Lone Lead", "lone@example.com", Role.TEAM_LEAD),
    UserProfile("emp-1", "Eva Employee", "eva@example.com", Role.EMPLOYEE, team_id="team-a",
                salary_type=SalaryType.MONTHLY, salary_amount=30000.0),
    UserProfile("emp-2", "Ethan Employee", "ethan@example.com", Role.EMPLOYEE, team_id="team-b",
                salary_type=SalaryType.DAILY, salary_amount=1000.0),
    UserProfile("client-1", "Cora Client", "client@example.com", Role.CLIENT),
    UserProfile("gone-1", "Gus Gone", "gone@example.com", Role.EMPLOYEE, is_active=False),
)


def principal_for(profile: UserProfile) -> Principal:
    return Principal(user_id=profile.user_id, role=profile.role, name=profile.name, team_id=profile.team_id)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(PROFILES)


@pytest.fixture
def principals(users) -> dict[str, Principal]:
    return {uid: principal_for(p) for uid, p in users.by_id.items()}


@pytest.fixture
def offices() -> InMemoryOffices:
    return InMemoryOffices([OfficeLocation(1, "Head Office", OFFICE_LAT, OFFICE_LON, radius_meters=50)])


@pytest.fixture
def attendance() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def overrides() -> InMemoryOverrides:
    return InMemoryOverrides()


@pytest.fixture
def sat_off() -> InMemorySaturdayOff:
    return InMemorySaturdayOff()


@pytest.fixture
def wd_cache() -> InMemoryWorkingDaysCache:
    return InMemoryWorkingDaysCache()


@pytest.fixture
def payroll_repo() -> InMemoryPayroll:
    return InMemoryPayroll()
