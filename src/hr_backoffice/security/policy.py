from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import HR_ROLES
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .principal import Principal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    reason: str = ""


class AccessPolicy:
    """Role gate shared by every service operation.

    `evaluate` returns an explicit decision; `require` raises on deny so the
    operation body never runs for an unauthorized caller.
    """

    def __init__(self, default_roles: Iterable[Role] = HR_ROLES):
        self._default_roles = frozenset(default_roles)

    def evaluate(
        self,
        principal: Optional[Principal],
        roles: Optional[Iterable[Role]] = None,
        *,
        owner_id: Optional[int] = None,
    ) -> AccessDecision:
        if principal is None:
            return AccessDecision(False, "No principal")

        allowed_roles = self._default_roles if roles is None else frozenset(roles)
        if principal.role in allowed_roles:
            return AccessDecision(True)
        if owner_id is not None and principal.user_id == owner_id:
            return AccessDecision(True, "Owner")
        return AccessDecision(False, f"Role '{principal.role.value}' is not allowed")

    def require(
        self,
        principal: Optional[Principal],
        roles: Optional[Iterable[Role]] = None,
        *,
        owner_id: Optional[int] = None,
        message: str = "You don't have permission to access this API.",
    ) -> None:
        decision = self.evaluate(principal, roles, owner_id=owner_id)
        if not decision.allowed:
            logger.info("Access denied: %s", decision.reason)
            raise AuthorizationError(message)
