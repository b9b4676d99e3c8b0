from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/hr/leave-applications", methods=["GET"], endpoint="list_leave_applications")
    @login_required
    def list_leave_applications():
        views = service.list_applications(principal=g.principal)
        return jsonify([v.to_dict() for v in views]), 200

    @app.route("/api/hr/leave-applications/<leave_id>", methods=["PUT"], endpoint="update_leave_status")
    @login_required
    def update_leave_status(leave_id: str):
        data = json_body()
        application = service.decide(
            principal=g.principal,
            leave_id=leave_id,
            status=data.get("status"),
            hr_comments=data.get("hrComments"),
        )
        return jsonify({
            "message": f"Leave application {application.status.value.lower()} successfully.",
            "leaveApplication": application.to_dict(),
        }), 200
