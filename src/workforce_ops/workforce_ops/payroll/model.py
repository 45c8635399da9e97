from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PayrollStatus, SalaryType


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: one employee's pay for one month, keyed ``{user}_{month}_{year}``."""

    user_id: str
    name: str
    month: int
    year: int
    present_days: int
    total_working_days: int
    salary_type: SalaryType
    salary_amount: float
    salary_paid: float
    status: PayrollStatus = PayrollStatus.UNPAID
    generated_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None

    @property
    def payroll_id(self) -> str:
        return payroll_key(self.user_id, self.month, self.year)


def payroll_key(user_id: str, month: int, year: int) -> str:
    return f"{user_id}_{int(month)}_{int(year)}"
