from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional

from ..core.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    """Falsy payload values count as missing, except the number zero."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return False
    return not str(value).strip()


def missing_fields(payload: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    return [field for field in required if is_blank(payload.get(field))]


def parse_record_id(value: Any) -> Optional[int]:
    """Return a positive integer id, or None if the value is not one."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    # str.isdigit also accepts superscripts and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        return None
    record_id = int(text)
    return record_id if record_id > 0 else None


def require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(result):
        raise ValidationError(f"{field_name} must be a number")
    return result
