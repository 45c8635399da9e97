from __future__ import annotations

import json
from typing import Optional, Sequence

from ..common.datetime_utils import month_key
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json
from .model import WorkingDays
from .repository import SaturdayOffRepository, WorkingDaysCacheRepository


def _saturday_off_key(year: int, month: int) -> str:
    return f"saturday_off_{month_key(year, month)}"


class MySQLSaturdayOffRepository(SaturdayOffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_dates(self, year: int, month: int) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT value FROM company_settings WHERE setting_key=%s", (_saturday_off_key(year, month),))
            r = fetchone(cur)
        if not r or not r.get("value"):
            return []
        data = load_json(r["value"], {})
        dates = data.get("dates") if isinstance(data, dict) else None
        return [str(d) for d in dates] if isinstance(dates, list) else []

    def set_dates(self, year: int, month: int, dates: Sequence[str], *, updated_by: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO company_settings(setting_key, value, updated_by, updated_at)
                VALUES(%s,%s,%s,NOW())
                ON DUPLICATE KEY UPDATE value=VALUES(value), updated_by=VALUES(updated_by), updated_at=NOW()
                """,
                (_saturday_off_key(year, month), json.dumps({"dates": list(dates)}), updated_by),
            )


class MySQLWorkingDaysCacheRepository(WorkingDaysCacheRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, year: int, month: int) -> Optional[WorkingDays]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT year, month, total_days, total_working_days, holidays, sat_off
                FROM working_days_cache
                WHERE period_key=%s
                """,
                (month_key(year, month),),
            )
            r = fetchone(cur)
        if not r:
            return None
        return WorkingDays(
            year=int(r["year"]),
            month=int(r["month"]),
            total_days=int(r["total_days"]),
            total_working_days=int(r["total_working_days"]),
            holidays=list(load_json(r["holidays"], [])),
            sat_off=list(load_json(r["sat_off"], [])),
        )

    def upsert(self, value: WorkingDays) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO working_days_cache(period_key, year, month, total_days, total_working_days, holidays, sat_off, updated_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,NOW())
                ON DUPLICATE KEY UPDATE
                    total_days=VALUES(total_days), total_working_days=VALUES(total_working_days),
                    holidays=VALUES(holidays), sat_off=VALUES(sat_off), updated_at=NOW()
                """,
                (
                    value.key,
                    value.year,
                    value.month,
                    value.total_days,
                    value.total_working_days,
                    json.dumps(value.holidays),
                    json.dumps(value.sat_off),
                ),
            )
