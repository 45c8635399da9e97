"""Role-based access policy.

One table decides every permission check; route handlers never compare role
strings themselves.
"""
from __future__ import annotations

from typing import Optional

from ..core.enums import Permission, Role
from ..core.exceptions import AuthorizationError
from .model import Principal

_EVERYONE_BUT_CLIENTS = frozenset({Permission.RECORD_ATTENDANCE})

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(
        {
            Permission.RECORD_ATTENDANCE,
            Permission.VIEW_ANY_ATTENDANCE,
            Permission.OVERRIDE_ATTENDANCE,
            Permission.REVIEW_OVERTIME,
            Permission.MANAGE_PAYROLL,
            Permission.MANAGE_SALARY,
            Permission.MANAGE_CALENDAR,
        }
    ),
    Role.SUB_ADMIN: _EVERYONE_BUT_CLIENTS
    | {Permission.VIEW_ANY_ATTENDANCE, Permission.OVERRIDE_ATTENDANCE},
    Role.HR: _EVERYONE_BUT_CLIENTS
    | {
        Permission.VIEW_ANY_ATTENDANCE,
        Permission.OVERRIDE_ATTENDANCE,
        Permission.REVIEW_OVERTIME,
        Permission.MANAGE_CALENDAR,
    },
    Role.TEAM_LEAD: _EVERYONE_BUT_CLIENTS | {Permission.REVIEW_OVERTIME},
    Role.EMPLOYEE: _EVERYONE_BUT_CLIENTS,
    Role.CLIENT: frozenset(),
}


def is_allowed(role: Role, permission: Permission) -> bool:
    return permission in ROLE_PERMISSIONS.get(role, frozenset())


def require(principal: Principal, permission: Permission) -> None:
    if not is_allowed(principal.role, permission):
        raise AuthorizationError("You do not have permission to perform this action")


def can_view_attendance(viewer: Principal, target_user_id: str, *, target_team_id: Optional[str] = None) -> bool:
    """Self, attendance administrators, or the lead of the target's team."""

    if viewer.user_id == target_user_id:
        return True
    if is_allowed(viewer.role, Permission.VIEW_ANY_ATTENDANCE):
        return True
    return viewer.role == Role.TEAM_LEAD and viewer.team_id is not None and viewer.team_id == target_team_id
