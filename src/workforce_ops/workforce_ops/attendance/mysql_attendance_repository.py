from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

import mysql.connector

from ..core.enums import OvertimeStatus, PresenceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, Location
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, user_id, work_date, check_in_time, check_out_time,
    check_in_lat, check_in_lon, check_in_accuracy,
    check_out_lat, check_out_lon, check_out_accuracy,
    within_geofence, reason, check_out_within_geofence, check_out_reason,
    presence, potential_overtime_hours, overtime_status, approved_overtime_hours,
    overtime_reviewed_by, overtime_reviewed_at, review_comment
"""


def _location(row: dict, prefix: str) -> Optional[Location]:
    lat = row.get(f"{prefix}_lat")
    lon = row.get(f"{prefix}_lon")
    if lat is None or lon is None:
        return None
    accuracy = row.get(f"{prefix}_accuracy")
    return Location(latitude=float(lat), longitude=float(lon), accuracy=float(accuracy) if accuracy is not None else None)


def _to_record(r: dict) -> AttendanceRecord:
    out_within = r.get("check_out_within_geofence")
    overtime_status = r.get("overtime_status")
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        check_in_location=_location(r, "check_in"),
        check_out_location=_location(r, "check_out"),
        within_geofence=bool(r.get("within_geofence")),
        reason=r.get("reason"),
        check_out_within_geofence=bool(out_within) if out_within is not None else None,
        check_out_reason=r.get("check_out_reason"),
        presence=PresenceStatus(r.get("presence") or PresenceStatus.PRESENT.value),
        potential_overtime_hours=float(r.get("potential_overtime_hours") or 0),
        overtime_status=OvertimeStatus(overtime_status) if overtime_status else None,
        approved_overtime_hours=float(r.get("approved_overtime_hours") or 0),
        overtime_reviewed_by=r.get("overtime_reviewed_by"),
        overtime_reviewed_at=r.get("overtime_reviewed_at"),
        review_comment=r.get("review_comment"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND check_out_time IS NULL
                ORDER BY check_in_time DESC
                LIMIT 1
                """,
                (user_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_user_between(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, check_in_time ASC
                """,
                (user_id, start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_present_days(self, user_id: str, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT work_date) AS present_days
                FROM attendance_records
                WHERE user_id=%s AND work_date BETWEEN %s AND %s AND presence=%s
                """,
                (user_id, start_date, end_date, PresenceStatus.PRESENT.value),
            )
            r = fetchone(cur)
            return int(r["present_days"]) if r else 0

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, work_date, check_in_time,
                        check_in_lat, check_in_lon, check_in_accuracy,
                        within_geofence, reason, presence
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user_id,
                        work_date,
                        check_in_time,
                        location.latitude,
                        location.longitude,
                        location.accuracy,
                        int(within_geofence),
                        reason,
                        PresenceStatus.PRESENT.value,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError:
            # uq_attendance_open_user: at most one open record per user
            raise ConflictError("You are already checked in")

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s,
                    check_out_lat=%s, check_out_lon=%s, check_out_accuracy=%s,
                    check_out_within_geofence=%s, check_out_reason=%s,
                    potential_overtime_hours=%s, overtime_status=%s
                WHERE record_id=%s AND check_out_time IS NULL
                """,
                (
                    check_out_time,
                    location.latitude,
                    location.longitude,
                    location.accuracy,
                    int(within_geofence),
                    reason,
                    potential_overtime_hours,
                    overtime_status.value if overtime_status else None,
                    int(record_id),
                ),
            )
            return cur.rowcount > 0

    def list_pending_overtime(self, *, user_ids: Optional[Iterable[str]] = None) -> Sequence[AttendanceRecord]:
        clauses = ["overtime_status=%s", "potential_overtime_hours > 0"]
        params: list[object] = [OvertimeStatus.PENDING.value]

        if user_ids is not None:
            ids = list(user_ids)
            if not ids:
                return []
            clauses.append(f"user_id IN ({', '.join(['%s'] * len(ids))})")
            params.extend(ids)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date DESC, record_id DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET overtime_status=%s, approved_overtime_hours=%s,
                    overtime_reviewed_by=%s, overtime_reviewed_at=%s, review_comment=%s
                WHERE record_id=%s AND overtime_status=%s
                """,
                (
                    status.value,
                    approved_hours,
                    reviewed_by,
                    reviewed_at,
                    comment,
                    int(record_id),
                    OvertimeStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
