from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEntry
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee_between(self, employee_id: int, *, start: datetime, end: datetime) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, date, duration
                FROM attendance
                WHERE employee_id=%s AND date BETWEEN %s AND %s
                ORDER BY date ASC
                """,
                (int(employee_id), start, end),
            )
            return [
                AttendanceEntry(
                    attendance_id=int(r["attendance_id"]),
                    employee_id=int(r["employee_id"]),
                    date=r["date"],
                    duration=float(r["duration"]) if r.get("duration") is not None else None,
                )
                for r in fetchall(cur)
            ]
