from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveApplication, LeaveApplicationView


class LeaveRepository(Protocol):
    def list_with_employee(self) -> Sequence[LeaveApplicationView]:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        raise NotImplementedError

    def save_decision(self, *, leave_id: int, status: LeaveStatus, hr_comments: str) -> Optional[LeaveApplication]:
        """Persist status and comments; return the updated record."""

        raise NotImplementedError
