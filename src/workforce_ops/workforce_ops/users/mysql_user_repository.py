from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import Role, SalaryType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import UserProfile
from .repository import UserRepository

_COLUMNS = "user_id, name, email, role, team_id, salary_type, salary_amount, is_active"


def _to_profile(row: dict) -> UserProfile:
    salary_type = row.get("salary_type")
    salary_amount = row.get("salary_amount")
    return UserProfile(
        user_id=str(row["user_id"]),
        name=row.get("name") or "Unknown",
        email=row.get("email"),
        role=Role.parse(row.get("role")),
        team_id=row.get("team_id"),
        salary_type=SalaryType(salary_type) if salary_type else None,
        salary_amount=float(salary_amount) if salary_amount is not None else None,
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def list_by_roles(self, roles: Iterable[Role]) -> Sequence[UserProfile]:
        wanted = {r for r in roles}
        if not wanted:
            return []
        # Stored labels are mixed case, so filter after Role.parse instead of in SQL.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE is_active=1 ORDER BY user_id ASC")
            profiles = [_to_profile(r) for r in fetchall(cur)]
        return [p for p in profiles if p.role in wanted]

    def list_team_member_ids(self, team_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE team_id=%s", (team_id,))
            return [str(r["user_id"]) for r in fetchall(cur)]

    def update_salary(self, user_id: str, *, salary_type: SalaryType, salary_amount: float, updated_by: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET salary_type=%s, salary_amount=%s, updated_by=%s, updated_at=NOW()
                WHERE user_id=%s
                """,
                (salary_type.value, salary_amount, updated_by, user_id),
            )
            return cur.rowcount > 0
