from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as stored into the session by the auth layer."""

    user_id: int
    role: Role

    @classmethod
    def from_session(cls, session) -> Optional["Principal"]:
        user_id = session.get("user_id")
        role = session.get("role")
        if not user_id or not role:
            return None
        try:
            return cls(user_id=int(user_id), role=Role(role))
        except ValueError:
            return None
