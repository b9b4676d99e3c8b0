from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from hr_backoffice.attendance.model import AttendanceEntry
from hr_backoffice.compensation.model import CompensationRecord
from hr_backoffice.container import wire
from hr_backoffice.core.enums import LeaveStatus, Role
from hr_backoffice.employees.model import Employee, EmployeeProfile
from hr_backoffice.leaves.model import LeaveApplication, LeaveApplicationView
from hr_backoffice.main import create_app
from hr_backoffice.security.principal import Principal

# Wednesday
FIXED_NOW = datetime(2026, 10, 14, 15, 30, 0)


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[int, Employee] = {}
        self._next_id = 1

    def add(self, *, first_name="Jane", last_name="Doe", email=None, role=Role.EMPLOYEE, performance=0.0, position="Engineer"):
        employee_id = self._next_id
        self._next_id += 1
        self.by_id[employee_id] = Employee(
            employee_id=employee_id,
            first_name=first_name,
            last_name=last_name,
            email=email or f"{first_name.lower()}.{last_name.lower()}@corp.test",
            password_hash="hash",
            position=position,
            joining_date=date(2024, 1, 15),
            role=role,
            total_performance=performance,
        )
        return self.by_id[employee_id]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self.by_id.values() if e.email == email), None)

    def count_by_role(self, role: Role) -> int:
        return sum(1 for e in self.by_id.values() if e.role == role)

    def list_by_role(self, role: Role):
        items = [e for e in self.by_id.values() if e.role == role]
        return sorted(items, key=lambda e: (-e.total_performance, e.employee_id))

    def search(self, text: str, *, role: Role):
        needle = text.lower()
        return [
            e
            for e in self.by_id.values()
            if e.role == role
            and (needle in e.first_name.lower() or needle in e.last_name.lower() or needle in e.email.lower())
        ]

    def create(self, profile: EmployeeProfile, *, password_hash: str) -> Employee:
        employee_id = self._next_id
        self._next_id += 1
        self.by_id[employee_id] = Employee(
            employee_id=employee_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            password_hash=password_hash,
            position=profile.position,
            joining_date=profile.joining_date,
            role=profile.role,
        )
        return self.by_id[employee_id]

    def update(self, employee_id: int, profile: EmployeeProfile) -> Optional[Employee]:
        current = self.by_id.get(int(employee_id))
        if not current:
            return None
        self.by_id[int(employee_id)] = replace(
            current,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            position=profile.position,
            joining_date=profile.joining_date,
            role=profile.role,
        )
        return self.by_id[int(employee_id)]

    def delete_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.pop(int(employee_id), None)


class InMemoryCompensation:
    def __init__(self):
        self.by_employee: dict[int, CompensationRecord] = {}
        self.fail_writes = False

    def get_for_employee(self, employee_id: int):
        return self.by_employee.get(int(employee_id))

    def create(self, *, employee_id, breakdown, effective_date):
        if self.fail_writes:
            raise RuntimeError("ledger unavailable")
        record = CompensationRecord(employee_id=employee_id, effective_date=effective_date, breakdown=breakdown)
        self.by_employee[employee_id] = record
        return record

    def upsert_for_employee(self, *, employee_id, breakdown):
        if self.fail_writes:
            raise RuntimeError("ledger unavailable")
        current = self.by_employee.get(employee_id)
        record = CompensationRecord(
            employee_id=employee_id,
            effective_date=current.effective_date if current else None,
            breakdown=breakdown,
        )
        self.by_employee[employee_id] = record
        return record


class InMemoryLeaves:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.by_id: dict[int, LeaveApplication] = {}
        self._next_id = 1

    def add(self, employee_id: int, *, status=LeaveStatus.PENDING, reason="Family event"):
        leave_id = self._next_id
        self._next_id += 1
        self.by_id[leave_id] = LeaveApplication(
            leave_id=leave_id,
            employee_id=employee_id,
            status=status,
            leave_type="Casual",
            start_date=date(2026, 10, 20),
            end_date=date(2026, 10, 21),
            reason=reason,
            created_at=datetime(2026, 10, 1, 9, 0),
        )
        return self.by_id[leave_id]

    def list_with_employee(self):
        return [
            LeaveApplicationView(application=a, employee=self._employees.get_by_id(a.employee_id))
            for a in self.by_id.values()
        ]

    def get_by_id(self, leave_id: int):
        return self.by_id.get(int(leave_id))

    def save_decision(self, *, leave_id, status, hr_comments):
        current = self.by_id.get(int(leave_id))
        if not current:
            return None
        self.by_id[int(leave_id)] = replace(current, status=status, hr_comments=hr_comments)
        return self.by_id[int(leave_id)]


class InMemoryAttendance:
    def __init__(self):
        self.entries: list[AttendanceEntry] = []
        self.fail = False

    def add(self, employee_id: int, when: datetime, duration: Optional[float]):
        self.entries.append(
            AttendanceEntry(attendance_id=len(self.entries) + 1, employee_id=employee_id, date=when, duration=duration)
        )

    def list_for_employee_between(self, employee_id, *, start, end):
        if self.fail:
            raise ConnectionError("store down: secret-host:3306")
        return sorted(
            (e for e in self.entries if e.employee_id == employee_id and start <= e.date <= end),
            key=lambda e: e.date,
        )


class Store:
    def __init__(self):
        self.employees = InMemoryEmployees()
        self.compensation = InMemoryCompensation()
        self.leaves = InMemoryLeaves(self.employees)
        self.attendance = InMemoryAttendance()


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def container(store):
    return wire(
        employees_repo=store.employees,
        compensation_repo=store.compensation,
        leaves_repo=store.leaves,
        attendance_repo=store.attendance,
        today=lambda: FIXED_NOW.date(),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(role: str, user_id: int = 99):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role
        return client

    return _login


@pytest.fixture
def hr():
    return Principal(user_id=99, role=Role.HR)


@pytest.fixture
def admin():
    return Principal(user_id=98, role=Role.ADMIN)


@pytest.fixture
def staff():
    return Principal(user_id=1, role=Role.EMPLOYEE)


@pytest.fixture
def new_employee_payload():
    return {
        "firstName": "Asha",
        "lastName": "Rao",
        "email": "asha.rao@corp.test",
        "password": "s3cret-pass",
        "position": "Analyst",
        "joiningDate": "2026-09-01",
        "annualCTC": 1200000,
        "monthlyInHand": 85000,
        "housingAllowance": 10000,
        "transportAllowance": 3000,
        "mealAllowance": 2000,
        "performanceBonus": 50000,
        "yearEndBonus": 25000,
        "tax": 90000,
        "healthInsurance": 12000,
        "providentFund": 21600,
    }
