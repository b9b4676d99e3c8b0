from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import parse_record_id
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..security.policy import AccessPolicy
from ..security.principal import Principal
from .model import LeaveApplication, LeaveApplicationView
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

DECISIONS = (LeaveStatus.APPROVED, LeaveStatus.REJECTED)


class LeaveService:
    """HR review of leave applications.

    Note: a decided application may be decided again; the last decision wins.
    """

    def __init__(self, leaves: LeaveRepository, *, policy: Optional[AccessPolicy] = None):
        self._leaves = leaves
        self._policy = policy or AccessPolicy()

    def list_applications(self, *, principal: Optional[Principal]) -> Sequence[LeaveApplicationView]:
        self._policy.require(principal)
        return list(self._leaves.list_with_employee())

    def decide(
        self,
        *,
        principal: Optional[Principal],
        leave_id: Any,
        status: Any,
        hr_comments: Any = None,
    ) -> LeaveApplication:
        self._policy.require(principal, message="You don't have permission to perform this action.")

        record_id = parse_record_id(leave_id)
        current = self._leaves.get_by_id(record_id) if record_id is not None else None
        if not current:
            raise NotFoundError("Leave application not found.")

        decision = next((s for s in DECISIONS if s.value == status), None)
        if decision is None:
            raise ValidationError("Invalid status. Use 'Approved' or 'Rejected'.")

        comments = "" if hr_comments is None else str(hr_comments).strip()
        updated = self._leaves.save_decision(leave_id=record_id, status=decision, hr_comments=comments)
        if not updated:
            raise NotFoundError("Leave application not found.")

        logger.info(
            "Leave application %s %s -> %s by %s",
            record_id,
            current.status.value,
            decision.value,
            principal.user_id,
        )
        return updated
