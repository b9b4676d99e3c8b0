from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for access decisions."""

    EMPLOYEE = "employee"
    HR = "hr"
    ADMIN = "admin"


class LeaveStatus(str, Enum):
    """Leave application states. Approved and Rejected are terminal."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class Period(str, Enum):
    TODAY = "today"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
