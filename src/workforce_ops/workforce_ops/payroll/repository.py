from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PayrollRecord


class PayrollRepository(Protocol):
    def get(self, payroll_id: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def upsert_many(self, records: Sequence[PayrollRecord]) -> None:
        """Overwrite every record by key in one batch."""

        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def mark_paid(self, payroll_id: str, *, paid_at: datetime) -> bool:
        """Conditional write: only an Unpaid record can become Paid."""

        raise NotImplementedError
