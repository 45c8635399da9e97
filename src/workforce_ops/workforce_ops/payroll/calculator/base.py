from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import SalaryType


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def salary_paid(
        self,
        *,
        present_days: int,
        total_working_days: int,
        salary_type: SalaryType,
        salary_amount: float,
    ) -> float:
        raise NotImplementedError
