from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import CompensationBreakdown, CompensationRecord


class CompensationRepository(Protocol):
    def get_for_employee(self, employee_id: int) -> Optional[CompensationRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        breakdown: CompensationBreakdown,
        effective_date: Optional[date],
    ) -> CompensationRecord:
        raise NotImplementedError

    def upsert_for_employee(self, *, employee_id: int, breakdown: CompensationBreakdown) -> CompensationRecord:
        """Replace the figures of the employee's record, creating it if missing.

        The effective date of an existing record is kept.
        """

        raise NotImplementedError
