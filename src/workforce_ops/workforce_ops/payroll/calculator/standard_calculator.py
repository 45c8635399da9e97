from __future__ import annotations

from .base import PayrollCalculator
from ...core.enums import SalaryType
from ...core.exceptions import InvalidPeriodError


class ProRatedPayrollCalculator(PayrollCalculator):
    """Monthly pay is pro-rated over working days; daily pay is per present day."""

    def salary_paid(
        self,
        *,
        present_days: int,
        total_working_days: int,
        salary_type: SalaryType,
        salary_amount: float,
    ) -> float:
        if total_working_days <= 0:
            raise InvalidPeriodError("Pay period has no working days")
        if not salary_amount:
            return 0.0

        if salary_type == SalaryType.DAILY:
            paid = present_days * salary_amount
        else:
            paid = (present_days / total_working_days) * salary_amount
        return round(paid, 2)
