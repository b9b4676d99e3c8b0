from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import parse_record_id
from ..core.constants import ATTENDANCE_ERROR_MESSAGE
from ..core.exceptions import DomainError, ValidationError
from ..security.policy import AccessPolicy
from ..security.principal import Principal
from .model import AttendanceSummary
from .periods import expected_hours, parse_period, resolve_window
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceQueryError(DomainError):
    """The attendance store could not be read."""


class AttendanceService:
    """Worked vs. expected hours of one employee over a reporting period."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        policy: Optional[AccessPolicy] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._policy = policy or AccessPolicy()
        self._clock = clock

    def summarize(
        self,
        *,
        principal: Optional[Principal],
        user_id: Any,
        period: Optional[str] = None,
    ) -> AttendanceSummary:
        employee_id = parse_record_id(user_id)
        if employee_id is None:
            raise ValidationError("A valid userId is required.")
        # HR and admins see everyone; employees only see themselves.
        self._policy.require(principal, owner_id=employee_id)

        resolved = parse_period(period)
        window = resolve_window(resolved, self._clock())

        try:
            entries = list(
                self._attendance.list_for_employee_between(employee_id, start=window.start, end=window.end)
            )
        except Exception:
            logger.exception("Error retrieving attendance data for employee %s", employee_id)
            raise AttendanceQueryError(ATTENDANCE_ERROR_MESSAGE)

        worked = sum((e.duration or 0) for e in entries)
        return AttendanceSummary(
            period=resolved,
            window=window,
            entries=entries,
            worked_hours=worked,
            total_working_hours=expected_hours(resolved),
        )
