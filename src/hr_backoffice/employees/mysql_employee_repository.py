from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, escape_like, fetchall, fetchone
from .model import Employee, EmployeeProfile
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, first_name, last_name, email, password_hash,
    position, joining_date, role, total_performance
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        password_hash=row.get("password_hash") or "",
        position=row["position"],
        joining_date=row.get("joining_date"),
        role=Role(row["role"]),
        total_performance=float(row.get("total_performance") or 0),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def count_by_role(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees WHERE role=%s", (role.value,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE role=%s
                ORDER BY total_performance DESC, employee_id ASC
                """,
                (role.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def search(self, text: str, *, role: Role) -> Sequence[Employee]:
        pattern = f"%{escape_like(text.lower())}%"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE role=%s
                  AND (LOWER(first_name) LIKE %s
                       OR LOWER(last_name) LIKE %s
                       OR LOWER(email) LIKE %s)
                ORDER BY employee_id ASC
                """,
                (role.value, pattern, pattern, pattern),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def create(self, profile: EmployeeProfile, *, password_hash: str) -> Employee:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(first_name, last_name, email, password_hash, position, joining_date, role)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    profile.first_name,
                    profile.last_name,
                    profile.email,
                    password_hash,
                    profile.position,
                    profile.joining_date,
                    profile.role.value,
                ),
            )
            employee_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            return _to_employee(fetchone(cur))

    def update(self, employee_id: int, profile: EmployeeProfile) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            # rowcount reports changed rows only, so check existence explicitly.
            cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
            if not fetchone(cur):
                return None
            cur.execute(
                """
                UPDATE employees
                SET first_name=%s, last_name=%s, email=%s, role=%s, position=%s, joining_date=%s
                WHERE employee_id=%s
                """,
                (
                    profile.first_name,
                    profile.last_name,
                    profile.email,
                    profile.role.value,
                    profile.position,
                    profile.joining_date,
                    int(employee_id),
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            return _to_employee(fetchone(cur))

    def delete_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s FOR UPDATE", (int(employee_id),))
            row = fetchone(cur)
            if not row:
                return None
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return _to_employee(row)
