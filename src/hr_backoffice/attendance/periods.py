from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import start_of_day
from ..core.constants import HOURS_PER_WORKING_DAY, WORKING_DAYS_PER_PERIOD
from ..core.enums import Period
from .model import DateWindow


def parse_period(value: Optional[str]) -> Period:
    """Unknown or missing values fall back to today (matching is case-sensitive)."""
    for period in Period:
        if period.value == value:
            return period
    return Period.TODAY


def resolve_window(period: Period, now: datetime) -> DateWindow:
    midnight = start_of_day(now)
    if period == Period.WEEKLY:
        # Weeks start on Sunday; Python's weekday() has Monday=0.
        days_since_sunday = (now.weekday() + 1) % 7
        start = midnight - timedelta(days=days_since_sunday)
    elif period == Period.MONTHLY:
        start = midnight.replace(day=1)
    elif period == Period.YEARLY:
        start = midnight.replace(month=1, day=1)
    else:
        start = midnight
    return DateWindow(start=start, end=now)


def expected_hours(period: Period) -> int:
    return WORKING_DAYS_PER_PERIOD[period] * HOURS_PER_WORKING_DAY
