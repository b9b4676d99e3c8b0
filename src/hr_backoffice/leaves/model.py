from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class LeaveApplication:
    leave_id: int
    employee_id: int
    status: LeaveStatus
    hr_comments: str = ""
    leave_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employeeId": self.employee_id,
            "leaveType": self.leave_type,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "reason": self.reason,
            "status": self.status.value,
            "hrComments": self.hr_comments,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class LeaveApplicationView:
    """Read-model: an application joined with its employee (None if orphaned)."""

    application: LeaveApplication
    employee: Optional[Employee]

    def to_dict(self) -> dict:
        out = self.application.to_dict()
        out["employee"] = self.employee.to_public_dict() if self.employee else None
        return out
