from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Period


@dataclass(frozen=True)
class AttendanceEntry:
    attendance_id: int
    employee_id: int
    date: datetime
    duration: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.employee_id,
            "date": self.date.isoformat(),
            "duration": self.duration,
        }


@dataclass(frozen=True)
class DateWindow:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AttendanceSummary:
    period: Period
    window: DateWindow
    entries: Sequence[AttendanceEntry]
    worked_hours: float
    total_working_hours: int

    def to_dict(self) -> dict:
        return {
            "period": self.period.value,
            "startDate": self.window.start.isoformat(),
            "endDate": self.window.end.isoformat(),
            "attendanceData": [e.to_dict() for e in self.entries],
            "workedHours": self.worked_hours,
            "totalWorkingHours": self.total_working_hours,
        }
