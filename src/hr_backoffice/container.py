from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .compensation.mysql_compensation_repository import MySQLCompensationRepository
from .compensation.repository import CompensationRepository
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .security.policy import AccessPolicy


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    compensation_repo: CompensationRepository
    leaves_repo: LeaveRepository
    attendance_repo: AttendanceRepository

    employee_service: EmployeeService
    leave_service: LeaveService
    attendance_service: AttendanceService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    employees_repo: EmployeeRepository,
    compensation_repo: CompensationRepository,
    leaves_repo: LeaveRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
    today: Callable[[], date] = date.today,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build the services on top of any set of repositories."""
    policy = AccessPolicy()
    return Container(
        conn=conn,
        employees_repo=employees_repo,
        compensation_repo=compensation_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        employee_service=EmployeeService(employees_repo, compensation_repo, policy=policy, today=today),
        leave_service=LeaveService(leaves_repo, policy=policy),
        attendance_service=AttendanceService(attendance_repo, policy=policy, clock=clock),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    return wire(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        compensation_repo=MySQLCompensationRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
