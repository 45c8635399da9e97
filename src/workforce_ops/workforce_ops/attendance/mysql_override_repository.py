from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceOverride
from .repository import OverrideRepository


def _to_override(r: dict) -> AttendanceOverride:
    return AttendanceOverride(
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        day_credit=float(r["day_credit"]),
        reason=r.get("reason"),
        updated_by=str(r["updated_by"]),
        updated_at=r["updated_at"],
    )


class MySQLOverrideRepository(OverrideRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str, work_date: date) -> Optional[AttendanceOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, work_date, day_credit, reason, updated_by, updated_at
                FROM attendance_overrides
                WHERE override_key=%s
                """,
                (f"{user_id}_{work_date.isoformat()}",),
            )
            r = fetchone(cur)
            return _to_override(r) if r else None

    def list_between(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, work_date, day_credit, reason, updated_by, updated_at
                FROM attendance_overrides
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (user_id, start_date, end_date),
            )
            return [_to_override(r) for r in fetchall(cur)]

    def upsert(self, override: AttendanceOverride) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_overrides(override_key, user_id, work_date, day_credit, reason, updated_by, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    day_credit=VALUES(day_credit), reason=VALUES(reason),
                    updated_by=VALUES(updated_by), updated_at=VALUES(updated_at)
                """,
                (
                    override.key,
                    override.user_id,
                    override.work_date,
                    override.day_credit,
                    override.reason,
                    override.updated_by,
                    override.updated_at,
                ),
            )
