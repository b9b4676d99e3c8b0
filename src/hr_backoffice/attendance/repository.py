from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    def list_for_employee_between(self, employee_id: int, *, start: datetime, end: datetime) -> Sequence[AttendanceEntry]:
        """Entries with start <= date <= end, oldest first."""

        raise NotImplementedError
