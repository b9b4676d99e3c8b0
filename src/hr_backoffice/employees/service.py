from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Mapping, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_iso_date
from ..common.validators import missing_fields, parse_record_id, require_number
from ..compensation.model import Allowances, Bonuses, CompensationBreakdown, CompensationRecord, Deductions
from ..compensation.repository import CompensationRepository
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..security.policy import AccessPolicy
from ..security.principal import Principal
from .model import Employee, EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("firstName", "lastName", "email", "position")

CTC_FIELDS = (
    "annualCTC",
    "monthlyInHand",
    "housingAllowance",
    "transportAllowance",
    "mealAllowance",
    "performanceBonus",
    "yearEndBonus",
    "tax",
    "healthInsurance",
    "providentFund",
)

ADD_REQUIRED_FIELDS = PROFILE_FIELDS + CTC_FIELDS
EDIT_REQUIRED_FIELDS = PROFILE_FIELDS + ("role",) + CTC_FIELDS


@dataclass(frozen=True)
class EmployeeDirectory:
    total_employees: int
    employees: Sequence[Employee]


@dataclass(frozen=True)
class EmployeeWithCompensation:
    employee: Employee
    compensation: CompensationRecord


def parse_breakdown(payload: Mapping[str, Any]) -> CompensationBreakdown:
    n = {field: require_number(payload.get(field), field) for field in CTC_FIELDS}
    return CompensationBreakdown(
        annual_ctc=n["annualCTC"],
        monthly_in_hand=n["monthlyInHand"],
        allowances=Allowances(
            housing=n["housingAllowance"],
            transport=n["transportAllowance"],
            meal=n["mealAllowance"],
        ),
        bonuses=Bonuses(performance=n["performanceBonus"], year_end=n["yearEndBonus"]),
        deductions=Deductions(
            tax=n["tax"],
            health_insurance=n["healthInsurance"],
            provident_fund=n["providentFund"],
        ),
    )


def _parse_joining_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        # Accept full ISO timestamps as sent by date pickers.
        return parse_iso_date(str(value)[:10])
    except ValueError:
        raise ValidationError("joiningDate must be a date (YYYY-MM-DD)")


def _parse_role(value: Any) -> Role:
    try:
        return Role(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid role '{value}'")


class EmployeeService:
    """Use cases of the employee directory and its compensation ledger."""

    def __init__(
        self,
        employees: EmployeeRepository,
        compensation: CompensationRepository,
        *,
        policy: Optional[AccessPolicy] = None,
        today: Callable[[], date] = date.today,
    ):
        self._employees = employees
        self._compensation = compensation
        self._policy = policy or AccessPolicy()
        self._today = today

    def list_employees(self, *, principal: Optional[Principal]) -> EmployeeDirectory:
        self._policy.require(principal, message="You are not allowed to access this API.")
        return EmployeeDirectory(
            total_employees=self._employees.count_by_role(Role.EMPLOYEE),
            employees=list(self._employees.list_by_role(Role.EMPLOYEE)),
        )

    def get_employee(self, *, principal: Optional[Principal], employee_id: Any) -> Employee:
        self._policy.require(principal, message="Access denied.")
        if employee_id in (None, ""):
            raise ValidationError("Employee ID is required.")
        record_id = parse_record_id(employee_id)
        if record_id is None:
            raise ValidationError("Invalid Employee ID.")

        employee = self._employees.get_by_id(record_id)
        if not employee:
            raise NotFoundError("Employee not found.")
        return employee

    def get_compensation(self, *, principal: Optional[Principal], employee_id: Any) -> CompensationRecord:
        employee = self.get_employee(principal=principal, employee_id=employee_id)
        record = self._compensation.get_for_employee(employee.employee_id)
        if not record:
            raise NotFoundError("Compensation record not found.")
        return record

    def search(self, *, principal: Optional[Principal], query: Optional[str]) -> Sequence[Employee]:
        self._policy.require(principal)
        text = (query or "").strip()
        if not text:
            raise ValidationError("Query parameter is required")
        return list(self._employees.search(text, role=Role.EMPLOYEE))

    def add_employee(self, *, principal: Optional[Principal], payload: Mapping[str, Any]) -> EmployeeWithCompensation:
        self._policy.require(principal, message="You do not have permission to access this API")

        missing = missing_fields(payload, ADD_REQUIRED_FIELDS)
        if missing:
            raise ValidationError(
                f"All fields are required! Missing fields: {', '.join(missing)}",
                detail={"missingFields": missing},
            )

        breakdown = parse_breakdown(payload)
        profile = EmployeeProfile(
            first_name=str(payload["firstName"]).strip(),
            last_name=str(payload["lastName"]).strip(),
            email=str(payload["email"]).strip(),
            position=str(payload["position"]).strip(),
            joining_date=_parse_joining_date(payload.get("joiningDate")) or self._today(),
        )
        if self._employees.get_by_email(profile.email):
            raise ValidationError("Email already exists.")

        password = payload.get("password")
        password_hash = generate_password_hash(str(password)) if password else ""

        employee = self._employees.create(profile, password_hash=password_hash)
        try:
            compensation = self._compensation.create(
                employee_id=employee.employee_id,
                breakdown=breakdown,
                effective_date=profile.joining_date,
            )
        except Exception:
            logger.warning("CTC write failed, removing employee %s", employee.employee_id)
            try:
                self._employees.delete_by_id(employee.employee_id)
            except Exception:
                logger.exception("Employee %s has no CTC record and needs reconciliation", employee.employee_id)
            raise

        logger.info("Employee %s added by %s", employee.employee_id, principal.user_id)
        return EmployeeWithCompensation(employee=employee, compensation=compensation)

    def edit_employee(
        self,
        *,
        principal: Optional[Principal],
        employee_id: Any,
        payload: Mapping[str, Any],
    ) -> EmployeeWithCompensation:
        self._policy.require(principal, message="Unauthorized access")

        record_id = parse_record_id(employee_id)
        if record_id is None:
            raise ValidationError("Invalid User ID")

        missing = missing_fields(payload, EDIT_REQUIRED_FIELDS)
        if missing:
            raise ValidationError(f"Missing fields: {', '.join(missing)}", detail={"missingFields": missing})

        breakdown = parse_breakdown(payload)
        profile = EmployeeProfile(
            first_name=str(payload["firstName"]).strip(),
            last_name=str(payload["lastName"]).strip(),
            email=str(payload["email"]).strip(),
            position=str(payload["position"]).strip(),
            joining_date=_parse_joining_date(payload.get("joiningDate")),
            role=_parse_role(payload["role"]),
        )

        previous = self._employees.get_by_id(record_id)
        if not previous:
            raise NotFoundError("Employee not found")
        if profile.joining_date is None:
            profile = replace(profile, joining_date=previous.joining_date)

        owner = self._employees.get_by_email(profile.email)
        if owner and owner.employee_id != record_id:
            raise ValidationError("Email already exists.")

        updated = self._employees.update(record_id, profile)
        if not updated:
            raise NotFoundError("Employee not found")
        try:
            compensation = self._compensation.upsert_for_employee(employee_id=record_id, breakdown=breakdown)
        except Exception:
            logger.warning("CTC write failed, restoring employee %s", record_id)
            try:
                self._employees.update(record_id, _profile_of(previous))
            except Exception:
                logger.exception("Employee %s profile and CTC record are out of sync", record_id)
            raise

        logger.info("Employee %s updated by %s", record_id, principal.user_id)
        return EmployeeWithCompensation(employee=updated, compensation=compensation)

    def delete_employee(self, *, principal: Optional[Principal], employee_id: Any) -> Employee:
        self._policy.require(principal)

        record_id = parse_record_id(employee_id)
        if record_id is None:
            raise ValidationError("A valid Employee ID is required.")

        employee = self._employees.delete_by_id(record_id)
        if not employee:
            raise NotFoundError("Employee does not exist or may have already been deleted.")

        # TODO: remove the employee's CTC and leave rows once HR confirms retention rules.
        logger.info("Employee %s deleted by %s", record_id, principal.user_id)
        return employee


def _profile_of(employee: Employee) -> EmployeeProfile:
    return EmployeeProfile(
        first_name=employee.first_name,
        last_name=employee.last_name,
        email=employee.email,
        position=employee.position,
        joining_date=employee.joining_date,
        role=employee.role,
    )
