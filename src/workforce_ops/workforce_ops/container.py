from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_override_repository import MySQLOverrideRepository
from .attendance.repository import AttendanceRepository, OverrideRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .auth.token_verifier import JwtTokenVerifier, TokenVerifier
from .core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from .database.connection import DBConfig, DatabaseConnection
from .geofence.mysql_office_repository import MySQLOfficeRepository
from .geofence.repository import OfficeRepository
from .geofence.service import GeofenceService
from .overtime.service import OvertimeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService
from .workdays.mysql_workdays_repository import MySQLSaturdayOffRepository, MySQLWorkingDaysCacheRepository
from .workdays.repository import SaturdayOffRepository, WorkingDaysCacheRepository
from .workdays.service import WorkingDayService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    offices_repo: OfficeRepository
    attendance_repo: AttendanceRepository
    overrides_repo: OverrideRepository
    sat_off_repo: SaturdayOffRepository
    working_days_cache_repo: WorkingDaysCacheRepository
    payroll_repo: PayrollRepository

    auth_service: AuthService
    user_service: UserService
    geofence_service: GeofenceService
    working_day_service: WorkingDayService
    attendance_service: AttendanceService
    overtime_service: OvertimeService
    payroll_service: PayrollService


def wire_container(
    *,
    verifier: TokenVerifier,
    users_repo: UserRepository,
    offices_repo: OfficeRepository,
    attendance_repo: AttendanceRepository,
    overrides_repo: OverrideRepository,
    sat_off_repo: SaturdayOffRepository,
    working_days_cache_repo: WorkingDaysCacheRepository,
    payroll_repo: PayrollRepository,
    geofence_radius_meters: int = DEFAULT_GEOFENCE_RADIUS_METERS,
) -> Container:
    """Build the services on top of already constructed repositories."""

    working_day_service = WorkingDayService(sat_off_repo, working_days_cache_repo)
    geofence_service = GeofenceService(offices_repo, default_radius_meters=geofence_radius_meters)

    return Container(
        users_repo=users_repo,
        offices_repo=offices_repo,
        attendance_repo=attendance_repo,
        overrides_repo=overrides_repo,
        sat_off_repo=sat_off_repo,
        working_days_cache_repo=working_days_cache_repo,
        payroll_repo=payroll_repo,
        auth_service=AuthService(verifier, users_repo),
        user_service=UserService(users_repo),
        geofence_service=geofence_service,
        working_day_service=working_day_service,
        attendance_service=AttendanceService(
            attendance_repo,
            overrides_repo,
            users_repo,
            geofence_service,
            working_day_service,
        ),
        overtime_service=OvertimeService(attendance_repo, users_repo),
        payroll_service=PayrollService(payroll_repo, attendance_repo, users_repo, working_day_service),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithms: Sequence[str] = ("HS256",),
    jwt_audience: Optional[str] = None,
    geofence_radius_meters: int = DEFAULT_GEOFENCE_RADIUS_METERS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_container(
        verifier=JwtTokenVerifier(jwt_secret, algorithms=tuple(jwt_algorithms), audience=jwt_audience),
        users_repo=MySQLUserRepository(conn),
        offices_repo=MySQLOfficeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        overrides_repo=MySQLOverrideRepository(conn),
        sat_off_repo=MySQLSaturdayOffRepository(conn),
        working_days_cache_repo=MySQLWorkingDaysCacheRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        geofence_radius_meters=geofence_radius_meters,
    )
