from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..attendance.repository import AttendanceRepository
from ..auth.model import Principal
from ..auth.policy import require
from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import require_month_year
from ..core.constants import DEFAULT_PAYROLL_HISTORY_LIMIT, PAYROLL_MAX_YEAR, PAYROLL_MIN_YEAR
from ..core.enums import Permission, PayrollStatus, Role, SalaryType
from ..core.exceptions import ConflictError, InvalidPeriodError, NotFoundError
from ..users.model import UserProfile
from ..users.repository import UserRepository
from ..workdays.service import WorkingDayService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import ProRatedPayrollCalculator
from .model import PayrollRecord, payroll_key
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

# Admins are paid outside this process.
PAYROLL_ROLES = (Role.EMPLOYEE, Role.HR, Role.TEAM_LEAD)


def payroll_to_dict(p: PayrollRecord) -> dict:
    return {
        "id": p.payroll_id,
        "userId": p.user_id,
        "name": p.name,
        "month": p.month,
        "year": p.year,
        "presentDays": p.present_days,
        "totalWorkingDays": p.total_working_days,
        "salaryType": p.salary_type.value,
        "salaryAmount": p.salary_amount,
        "salaryPaid": p.salary_paid,
        "status": p.status.value,
        "createdAt": p.generated_at.isoformat() if p.generated_at else None,
        "paidAt": p.paid_at.isoformat() if p.paid_at else None,
    }


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
        working_days: WorkingDayService,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._attendance = attendance
        self._users = users
        self._working_days = working_days
        self._calculator = calculator or ProRatedPayrollCalculator()

    def _period(self, month: Any, year: Any) -> tuple[int, int]:
        return require_month_year(month, year, min_year=PAYROLL_MIN_YEAR, max_year=PAYROLL_MAX_YEAR)

    def _compute(self, month: int, year: int, *, now: datetime) -> list[PayrollRecord]:
        total_working_days = self._working_days.get_working_days(year, month).total_working_days
        if total_working_days <= 0:
            raise InvalidPeriodError(f"No working days in {year}-{month:02d}")

        start, end = month_bounds(year, month)
        return [
            self._compute_for(user, month, year, start, end, total_working_days, now)
            for user in self._users.list_by_roles(PAYROLL_ROLES)
        ]

    def _compute_for(self, user: UserProfile, month, year, start, end, total_working_days, now) -> PayrollRecord:
        present_days = self._attendance.count_present_days(user.user_id, start, end)
        salary_type = user.salary_type or SalaryType.MONTHLY
        salary_amount = float(user.salary_amount or 0)
        salary_paid = self._calculator.salary_paid(
            present_days=present_days,
            total_working_days=total_working_days,
            salary_type=salary_type,
            salary_amount=salary_amount,
        )
        return PayrollRecord(
            user_id=user.user_id,
            name=user.name,
            month=month,
            year=year,
            present_days=present_days,
            total_working_days=total_working_days,
            salary_type=salary_type,
            salary_amount=salary_amount,
            salary_paid=salary_paid,
            status=PayrollStatus.UNPAID,
            generated_at=now,
        )

    def preview(self, principal: Principal, *, month: Any, year: Any) -> list[PayrollRecord]:
        """Compute the month's payroll without persisting it."""

        require(principal, Permission.MANAGE_PAYROLL)
        m, y = self._period(month, year)
        return self._compute(m, y, now=now_local())

    def generate(self, principal: Principal, *, month: Any, year: Any, now: Optional[datetime] = None) -> list[PayrollRecord]:
        """Recompute and overwrite every eligible employee's record for the month."""

        require(principal, Permission.MANAGE_PAYROLL)
        m, y = self._period(month, year)
        records = self._compute(m, y, now=now or now_local())
        self._payroll.upsert_many(records)
        logger.info("[payroll] generated %s records for %s-%02d by %s", len(records), y, m, principal.user_id)
        return records

    def mark_paid(self, principal: Principal, *, payroll_id: str, now: Optional[datetime] = None) -> PayrollRecord:
        require(principal, Permission.MANAGE_PAYROLL)

        record = self._payroll.get(payroll_id)
        if not record:
            raise NotFoundError("Payroll record not found")
        if record.status == PayrollStatus.PAID or not self._payroll.mark_paid(payroll_id, paid_at=now or now_local()):
            raise ConflictError("Payroll record is already paid")

        logger.info("[payroll] %s marked paid by %s", payroll_id, principal.user_id)
        updated = self._payroll.get(payroll_id)
        if not updated:
            raise NotFoundError("Payroll record not found")
        return updated

    def get_mine(self, principal: Principal, *, month: Any, year: Any) -> PayrollRecord:
        m, y = self._period(month, year)
        record = self._payroll.get(payroll_key(principal.user_id, m, y))
        if not record:
            raise NotFoundError("Payroll not generated for this period")
        return record

    def history(self, principal: Principal, *, limit: int = DEFAULT_PAYROLL_HISTORY_LIMIT) -> list[PayrollRecord]:
        records = sorted(
            self._payroll.list_for_user(principal.user_id),
            key=lambda p: (p.year, p.month, p.generated_at or datetime.min),
            reverse=True,
        )
        return records[: int(limit)]
