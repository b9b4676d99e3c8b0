from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee record.

    Note: plain data, no DB access. `password_hash` never leaves the service
    layer; use `to_public_dict` for responses.
    """

    employee_id: int
    first_name: str
    last_name: str
    email: str
    password_hash: str
    position: str
    joining_date: Optional[date]
    role: Role = Role.EMPLOYEE
    total_performance: float = 0.0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_public_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "position": self.position,
            "joiningDate": self.joining_date.isoformat() if self.joining_date else None,
            "role": self.role.value,
            "totalPerformance": self.total_performance,
        }


@dataclass(frozen=True)
class EmployeeProfile:
    """Fields HR may set on an employee through add/edit."""

    first_name: str
    last_name: str
    email: str
    position: str
    joining_date: Optional[date]
    role: Role = Role.EMPLOYEE
