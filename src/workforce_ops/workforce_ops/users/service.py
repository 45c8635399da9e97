from __future__ import annotations

import logging
import math
from typing import Any

from ..auth.model import Principal
from ..auth.policy import require
from ..core.constants import MAX_SALARY_AMOUNT
from ..core.enums import Permission, SalaryType
from ..core.exceptions import NotFoundError, ValidationError
from .model import UserProfile
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage user profiles (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: str) -> UserProfile:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def set_salary(self, principal: Principal, *, user_id: str, salary_type: Any, salary_amount: Any) -> dict:
        require(principal, Permission.MANAGE_SALARY)

        if not salary_type or salary_amount is None or salary_amount == "":
            raise ValidationError("salaryType and salaryAmount are required")
        try:
            parsed_type = SalaryType(salary_type)
        except ValueError:
            raise ValidationError('salaryType must be "monthly" or "daily"')
        if (
            isinstance(salary_amount, bool)
            or not isinstance(salary_amount, (int, float))
            or not math.isfinite(salary_amount)
            or salary_amount <= 0
            or salary_amount > MAX_SALARY_AMOUNT
        ):
            raise ValidationError("salaryAmount must be a positive number")

        self.get_profile(user_id)

        amount = round(float(salary_amount), 2)
        if not self._users.update_salary(user_id, salary_type=parsed_type, salary_amount=amount, updated_by=principal.user_id):
            raise NotFoundError("User not found")

        logger.info("[users] salary for %s set to %s %s by %s", user_id, amount, parsed_type.value, principal.user_id)
        return {"userId": user_id, "salaryType": parsed_type.value, "salaryAmount": amount}
