from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role, SalaryType
from .model import UserProfile


class UserRepository(Protocol):
    """Repository interface for user profiles.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        raise NotImplementedError

    def list_by_roles(self, roles: Iterable[Role]) -> Sequence[UserProfile]:
        raise NotImplementedError

    def list_team_member_ids(self, team_id: str) -> Sequence[str]:
        raise NotImplementedError

    def update_salary(self, user_id: str, *, salary_type: SalaryType, salary_amount: float, updated_by: str) -> bool:
        raise NotImplementedError
