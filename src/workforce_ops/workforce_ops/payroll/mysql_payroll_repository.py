from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import PayrollStatus, SalaryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayrollRecord
from .repository import PayrollRepository

_COLUMNS = """
    user_id, name, month, year, present_days, total_working_days,
    salary_type, salary_amount, salary_paid, status, generated_at, paid_at
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        user_id=str(r["user_id"]),
        name=r.get("name") or "Unknown",
        month=int(r["month"]),
        year=int(r["year"]),
        present_days=int(r["present_days"]),
        total_working_days=int(r["total_working_days"]),
        salary_type=SalaryType(r.get("salary_type") or SalaryType.MONTHLY.value),
        salary_amount=float(r.get("salary_amount") or 0),
        salary_paid=float(r.get("salary_paid") or 0),
        status=PayrollStatus(r.get("status") or PayrollStatus.UNPAID.value),
        generated_at=r.get("generated_at"),
        paid_at=r.get("paid_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, payroll_id: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll WHERE payroll_id=%s", (payroll_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert_many(self, records: Sequence[PayrollRecord]) -> None:
        if not records:
            return
        # One connection, one commit: the batch lands together or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO payroll(
                    payroll_id, user_id, name, month, year, present_days, total_working_days,
                    salary_type, salary_amount, salary_paid, status, generated_at, paid_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,NULL)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), present_days=VALUES(present_days),
                    total_working_days=VALUES(total_working_days), salary_type=VALUES(salary_type),
                    salary_amount=VALUES(salary_amount), salary_paid=VALUES(salary_paid),
                    status=VALUES(status), generated_at=VALUES(generated_at), paid_at=NULL
                """,
                [
                    (
                        rec.payroll_id,
                        rec.user_id,
                        rec.name,
                        rec.month,
                        rec.year,
                        rec.present_days,
                        rec.total_working_days,
                        rec.salary_type.value,
                        rec.salary_amount,
                        rec.salary_paid,
                        rec.status.value,
                        rec.generated_at,
                    )
                    for rec in records
                ],
            )

    def list_for_user(self, user_id: str) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll
                WHERE user_id=%s
                ORDER BY year DESC, month DESC, generated_at DESC
                """,
                (user_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def mark_paid(self, payroll_id: str, *, paid_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll SET status=%s, paid_at=%s WHERE payroll_id=%s AND status=%s",
                (PayrollStatus.PAID.value, paid_at, payroll_id, PayrollStatus.UNPAID.value),
            )
            return cur.rowcount > 0
