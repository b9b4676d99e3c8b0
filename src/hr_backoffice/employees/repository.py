from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee, EmployeeProfile


class EmployeeRepository(Protocol):
    """Store interface for employee records.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def count_by_role(self, role: Role) -> int:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        """Ordered by total_performance, highest first."""

        raise NotImplementedError

    def search(self, text: str, *, role: Role) -> Sequence[Employee]:
        """Case-insensitive substring match on first name, last name or email."""

        raise NotImplementedError

    def create(self, profile: EmployeeProfile, *, password_hash: str) -> Employee:
        raise NotImplementedError

    def update(self, employee_id: int, profile: EmployeeProfile) -> Optional[Employee]:
        """Return the updated record, or None when no employee has this id."""

        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> Optional[Employee]:
        """Return the deleted record, or None when it did not exist."""

        raise NotImplementedError
