from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/hr/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        directory = service.list_employees(principal=g.principal)
        return jsonify({
            "totalEmployees": directory.total_employees,
            "employees": [e.to_public_dict() for e in directory.employees],
        }), 200

    @app.route("/api/hr/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: str):
        employee = service.get_employee(principal=g.principal, employee_id=employee_id)
        return jsonify(employee.to_public_dict()), 200

    @app.route("/api/hr/employees/<employee_id>/ctc", methods=["GET"], endpoint="get_employee_ctc")
    @login_required
    def get_employee_ctc(employee_id: str):
        record = service.get_compensation(principal=g.principal, employee_id=employee_id)
        return jsonify(record.to_dict()), 200

    @app.route("/api/hr/search", methods=["GET"], endpoint="search_employees")
    @login_required
    def search_employees():
        employees = service.search(principal=g.principal, query=request.args.get("query"))
        return jsonify([e.to_public_dict() for e in employees]), 200

    @app.route("/api/hr/employees", methods=["POST"], endpoint="add_employee")
    @login_required
    def add_employee():
        result = service.add_employee(principal=g.principal, payload=json_body())
        employee = result.employee
        return jsonify({
            "message": "Employee added successfully!",
            "user": {
                "id": employee.employee_id,
                "firstName": employee.first_name,
                "lastName": employee.last_name,
                "email": employee.email,
                "role": employee.role.value,
                "position": employee.position,
            },
            "employeeCTC": result.compensation.to_dict(),
        }), 201

    @app.route("/api/hr/employees", methods=["PUT"], endpoint="edit_employee")
    @login_required
    def edit_employee():
        result = service.edit_employee(
            principal=g.principal,
            employee_id=request.args.get("userId"),
            payload=json_body(),
        )
        return jsonify({
            "message": "Employee data updated successfully",
            "data": {"user": result.employee.to_public_dict(), "ctc": result.compensation.to_dict()},
        }), 200

    @app.route("/api/hr/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @login_required
    def delete_employee(employee_id: str):
        employee = service.delete_employee(principal=g.principal, employee_id=employee_id)
        return jsonify({
            "success": True,
            "message": f"Employee {employee.full_name} deleted successfully!",
        }), 200
