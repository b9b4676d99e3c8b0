from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LeaveStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..employees.model import Employee
from .model import LeaveApplication, LeaveApplicationView
from .repository import LeaveRepository

_LEAVE_COLUMNS = """
    l.leave_id, l.employee_id, l.leave_type, l.start_date, l.end_date,
    l.reason, l.status, l.hr_comments, l.created_at
"""


def _to_leave(r: dict) -> LeaveApplication:
    return LeaveApplication(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        status=LeaveStatus(r["status"]),
        hr_comments=r.get("hr_comments") or "",
        leave_type=r.get("leave_type"),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
        reason=r.get("reason"),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_employee(self) -> Sequence[LeaveApplicationView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_LEAVE_COLUMNS},
                       e.employee_id AS e_id, e.first_name, e.last_name, e.email,
                       e.position, e.joining_date, e.role, e.total_performance
                FROM leave_applications l
                LEFT JOIN employees e ON e.employee_id = l.employee_id
                ORDER BY l.created_at DESC, l.leave_id DESC
                """
            )
            out: list[LeaveApplicationView] = []
            for r in fetchall(cur):
                employee = None
                if r.get("e_id") is not None:
                    employee = Employee(
                        employee_id=int(r["e_id"]),
                        first_name=r["first_name"],
                        last_name=r["last_name"],
                        email=r["email"],
                        password_hash="",
                        position=r["position"],
                        joining_date=r.get("joining_date"),
                        role=Role(r["role"]),
                        total_performance=float(r.get("total_performance") or 0),
                    )
                out.append(LeaveApplicationView(application=_to_leave(r), employee=employee))
            return out

    def get_by_id(self, leave_id: int) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_LEAVE_COLUMNS} FROM leave_applications l WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def save_decision(self, *, leave_id: int, status: LeaveStatus, hr_comments: str) -> Optional[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_applications SET status=%s, hr_comments=%s WHERE leave_id=%s",
                (status.value, hr_comments, int(leave_id)),
            )
            cur.execute(f"SELECT {_LEAVE_COLUMNS} FROM leave_applications l WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None
