from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..auth.model import Principal
from ..auth.policy import require
from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.enums import OvertimeStatus, Permission, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

_DECISIONS = (OvertimeStatus.APPROVED, OvertimeStatus.REJECTED)


def overtime_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.record_id,
        "userId": r.user_id,
        "date": r.work_date.isoformat(),
        "checkIn": r.check_in_time.isoformat() if r.check_in_time else None,
        "checkOut": r.check_out_time.isoformat() if r.check_out_time else None,
        "potentialOvertimeHours": r.potential_overtime_hours,
        "overtimeApprovalStatus": r.overtime_status.value if r.overtime_status else None,
        "approvedOvertimeHours": r.approved_overtime_hours,
        "overtimeApprovedByUserId": r.overtime_reviewed_by,
        "overtimeApprovedAt": r.overtime_reviewed_at.isoformat() if r.overtime_reviewed_at else None,
        "adminComment": r.review_comment,
    }


class OvertimeService:
    """Pending -> Approved | Rejected. Both outcomes are terminal."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def list_pending(self, principal: Principal) -> list[AttendanceRecord]:
        require(principal, Permission.REVIEW_OVERTIME)

        if principal.role != Role.TEAM_LEAD:
            return list(self._attendance.list_pending_overtime())

        # Team leads only see their own team; no team means nothing to review.
        if not principal.team_id:
            return []
        members = [m for m in self._users.list_team_member_ids(principal.team_id) if m != principal.user_id]
        return list(self._attendance.list_pending_overtime(user_ids=members))

    def review(
        self,
        principal: Principal,
        *,
        record_id: int,
        status: Any,
        comment: Any = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        require(principal, Permission.REVIEW_OVERTIME)

        try:
            decision = OvertimeStatus(status)
        except ValueError:
            decision = None
        if decision not in _DECISIONS:
            raise ValidationError("Invalid 'status' provided. Must be 'Approved' or 'Rejected'.")

        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Record not found")
        if principal.role == Role.TEAM_LEAD and not self._is_team_member(principal, record.user_id):
            raise AuthorizationError("Team leads can only review their own team's overtime.")
        if record.overtime_status != OvertimeStatus.PENDING:
            state = record.overtime_status.value if record.overtime_status else "N/A"
            raise ConflictError(f"This record is already in '{state}' state and cannot be reviewed.")

        approved_hours = record.potential_overtime_hours if decision == OvertimeStatus.APPROVED else 0.0
        ok = self._attendance.resolve_overtime(
            record_id=record.record_id,
            status=decision,
            approved_hours=approved_hours,
            reviewed_by=principal.user_id,
            reviewed_at=now or now_local(),
            comment=optional_text(comment),
        )
        if not ok:
            raise ConflictError("This record has already been reviewed.")

        logger.info(
            "[overtime] record=%s %s by %s (approved_hours=%s)",
            record.record_id, decision.value, principal.user_id, approved_hours,
        )
        updated = self._attendance.get_by_id(record.record_id)
        if not updated:
            raise NotFoundError("Record not found")
        return updated

    def _is_team_member(self, principal: Principal, user_id: str) -> bool:
        if not principal.team_id or user_id == principal.user_id:
            return False
        return user_id in set(self._users.list_team_member_ids(principal.team_id))
