from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/hr/attendance", methods=["GET"], endpoint="get_attendance")
    @login_required
    def get_attendance():
        summary = container.attendance_service.summarize(
            principal=g.principal,
            user_id=request.args.get("userId"),
            period=request.args.get("period"),
        )
        return jsonify(summary.to_dict()), 200
