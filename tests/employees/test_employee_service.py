from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import check_password_hash

from hr_backoffice.core.enums import Role
from hr_backoffice.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from hr_backoffice.employees.service import ADD_REQUIRED_FIELDS, EDIT_REQUIRED_FIELDS


def test_list_employees_sorted_by_performance_without_non_employees(container, store, hr):
    store.employees.add(first_name="Low", last_name="A", performance=2)
    store.employees.add(first_name="High", last_name="B", performance=9)
    store.employees.add(first_name="Boss", last_name="C", role=Role.HR, performance=10)

    directory = container.employee_service.list_employees(principal=hr)

    assert directory.total_employees == 2
    assert [e.first_name for e in directory.employees] == ["High", "Low"]


def test_list_employees_forbidden_for_employee_role(container, staff):
    with pytest.raises(AuthorizationError):
        container.employee_service.list_employees(principal=staff)


def test_get_employee_validates_identifier(container, hr):
    svc = container.employee_service
    with pytest.raises(ValidationError, match="required"):
        svc.get_employee(principal=hr, employee_id="")
    with pytest.raises(ValidationError, match="Invalid"):
        svc.get_employee(principal=hr, employee_id="abc")
    with pytest.raises(NotFoundError):
        svc.get_employee(principal=hr, employee_id="404")


def test_required_field_sets():
    assert len(ADD_REQUIRED_FIELDS) == 14
    assert len(EDIT_REQUIRED_FIELDS) == 15
    assert "role" in EDIT_REQUIRED_FIELDS and "role" not in ADD_REQUIRED_FIELDS


def test_add_employee_creates_record_and_ctc(container, store, hr, new_employee_payload):
    result = container.employee_service.add_employee(principal=hr, payload=new_employee_payload)

    employee = result.employee
    assert employee.role == Role.EMPLOYEE
    assert employee.joining_date == date(2026, 9, 1)
    assert check_password_hash(employee.password_hash, "s3cret-pass")
    assert "s3cret-pass" not in employee.password_hash

    ctc = store.compensation.get_for_employee(employee.employee_id)
    assert ctc == result.compensation
    assert ctc.effective_date == date(2026, 9, 1)
    assert ctc.breakdown.allowances.housing == 10000
    assert ctc.breakdown.deductions.provident_fund == 21600


def test_add_employee_names_missing_fields_and_writes_nothing(container, store, hr, new_employee_payload):
    del new_employee_payload["tax"]
    new_employee_payload["position"] = "  "

    with pytest.raises(ValidationError) as exc:
        container.employee_service.add_employee(principal=hr, payload=new_employee_payload)

    assert exc.value.message == "All fields are required! Missing fields: position, tax"
    assert exc.value.detail == {"missingFields": ["position", "tax"]}
    assert store.employees.by_id == {}
    assert store.compensation.by_employee == {}


def test_add_employee_forbidden_writes_nothing(container, store, staff, new_employee_payload):
    with pytest.raises(AuthorizationError):
        container.employee_service.add_employee(principal=staff, payload=new_employee_payload)
    assert store.employees.by_id == {}


def test_add_employee_rejects_duplicate_email(container, store, hr, new_employee_payload):
    store.employees.add(email="asha.rao@corp.test")
    with pytest.raises(ValidationError, match="Email already exists"):
        container.employee_service.add_employee(principal=hr, payload=new_employee_payload)


def test_add_employee_rejects_non_numeric_ctc(container, hr, new_employee_payload):
    new_employee_payload["annualCTC"] = "a lot"
    with pytest.raises(ValidationError, match="annualCTC"):
        container.employee_service.add_employee(principal=hr, payload=new_employee_payload)


def test_add_employee_rolls_back_employee_when_ctc_write_fails(container, store, hr, new_employee_payload):
    store.compensation.fail_writes = True

    with pytest.raises(RuntimeError):
        container.employee_service.add_employee(principal=hr, payload=new_employee_payload)

    assert store.employees.by_id == {}


def test_add_employee_keeps_ctc_error_when_removal_also_fails(container, store, hr, new_employee_payload, monkeypatch):
    store.compensation.fail_writes = True

    def store_down(employee_id):
        raise ConnectionError("store down")

    monkeypatch.setattr(store.employees, "delete_by_id", store_down)

    with pytest.raises(RuntimeError, match="ledger unavailable"):
        container.employee_service.add_employee(principal=hr, payload=new_employee_payload)

    assert list(store.employees.by_id) == [1]


def _edit_payload(base: dict, **overrides) -> dict:
    payload = {k: v for k, v in base.items() if k not in ("password",)}
    payload["role"] = "employee"
    payload.update(overrides)
    return payload


def test_edit_employee_updates_profile_and_upserts_ctc(container, store, admin, new_employee_payload):
    existing = store.employees.add(first_name="Old", last_name="Name")
    payload = _edit_payload(new_employee_payload, role="hr", annualCTC=1500000)

    result = container.employee_service.edit_employee(
        principal=admin, employee_id=str(existing.employee_id), payload=payload
    )

    assert result.employee.first_name == "Asha"
    assert result.employee.role == Role.HR
    assert store.compensation.get_for_employee(existing.employee_id).breakdown.annual_ctc == 1500000


def test_edit_employee_keeps_joining_date_when_omitted(container, store, hr, new_employee_payload):
    existing = store.employees.add()
    payload = _edit_payload(new_employee_payload)
    del payload["joiningDate"]

    result = container.employee_service.edit_employee(principal=hr, employee_id=existing.employee_id, payload=payload)

    assert result.employee.joining_date == existing.joining_date


def test_edit_employee_unknown_id_is_not_found_and_ledger_untouched(container, store, hr, new_employee_payload):
    with pytest.raises(NotFoundError):
        container.employee_service.edit_employee(
            principal=hr, employee_id="77", payload=_edit_payload(new_employee_payload)
        )
    assert store.compensation.by_employee == {}


def test_edit_employee_validation(container, store, hr, new_employee_payload):
    svc = container.employee_service
    existing = store.employees.add()

    with pytest.raises(ValidationError, match="Invalid User ID"):
        svc.edit_employee(principal=hr, employee_id="x1", payload=_edit_payload(new_employee_payload))

    payload = _edit_payload(new_employee_payload)
    del payload["role"]
    with pytest.raises(ValidationError, match="Missing fields: role"):
        svc.edit_employee(principal=hr, employee_id=existing.employee_id, payload=payload)

    with pytest.raises(ValidationError, match="Invalid role"):
        svc.edit_employee(
            principal=hr, employee_id=existing.employee_id, payload=_edit_payload(new_employee_payload, role="ceo")
        )


def test_edit_employee_restores_profile_when_ctc_write_fails(container, store, hr, new_employee_payload):
    existing = store.employees.add(first_name="Keep", last_name="Me")
    store.compensation.fail_writes = True

    with pytest.raises(RuntimeError):
        container.employee_service.edit_employee(
            principal=hr, employee_id=existing.employee_id, payload=_edit_payload(new_employee_payload)
        )

    assert store.employees.get_by_id(existing.employee_id).first_name == "Keep"


def test_edit_employee_keeps_ctc_error_when_restore_also_fails(container, store, hr, new_employee_payload, monkeypatch):
    existing = store.employees.add(first_name="Keep", last_name="Me")
    store.compensation.fail_writes = True
    real_update = store.employees.update
    calls = []

    def update_once(employee_id, profile):
        calls.append(profile.first_name)
        if len(calls) > 1:
            raise ConnectionError("store down")
        return real_update(employee_id, profile)

    monkeypatch.setattr(store.employees, "update", update_once)

    with pytest.raises(RuntimeError, match="ledger unavailable"):
        container.employee_service.edit_employee(
            principal=hr, employee_id=existing.employee_id, payload=_edit_payload(new_employee_payload)
        )

    assert calls == ["Asha", "Keep"]


def test_search_is_case_insensitive_and_limited_to_employees(container, store, hr):
    store.employees.add(first_name="Priya", last_name="Shah")
    store.employees.add(first_name="Ravi", last_name="Kumar", email="ravi@PRIYA.example")
    store.employees.add(first_name="Priyanka", last_name="Hr", role=Role.HR)

    found = container.employee_service.search(principal=hr, query="pRiYa")

    assert sorted(e.first_name for e in found) == ["Priya", "Ravi"]


def test_search_requires_query_and_allows_empty_result(container, hr):
    svc = container.employee_service
    with pytest.raises(ValidationError, match="Query parameter is required"):
        svc.search(principal=hr, query="")
    assert svc.search(principal=hr, query="nobody") == []


def test_delete_employee(container, store, hr):
    existing = store.employees.add(first_name="Gone", last_name="Soon")

    deleted = container.employee_service.delete_employee(principal=hr, employee_id=str(existing.employee_id))

    assert deleted.full_name == "Gone Soon"
    with pytest.raises(NotFoundError):
        container.employee_service.get_employee(principal=hr, employee_id=existing.employee_id)
    with pytest.raises(NotFoundError):
        container.employee_service.delete_employee(principal=hr, employee_id=existing.employee_id)
