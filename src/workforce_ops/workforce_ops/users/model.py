from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role, SalaryType


@dataclass(frozen=True)
class UserProfile:
    """Domain entity: user profile.

    ``user_id`` is the subject issued by the identity provider; the role is
    only ever taken from here, never from the token.
    """

    user_id: str
    name: str
    email: Optional[str]
    role: Role
    team_id: Optional[str] = None
    salary_type: Optional[SalaryType] = None
    salary_amount: Optional[float] = None
    is_active: bool = True
