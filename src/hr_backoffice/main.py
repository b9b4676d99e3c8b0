from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_account, list_tables
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("Starting with settings=%s", settings_module)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(db_config=db_config)
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(container.conn)
            logger.info("Schema ready (tables=%d)", len(list_tables(container.conn)))
            admin_email = getattr(settings, "ADMIN_EMAIL", "")
            admin_password = getattr(settings, "ADMIN_PASSWORD", "")
            if admin_email and admin_password:
                ensure_admin_account(container.conn, email=admin_email, password=admin_password)

    register_error_handlers(app)
    register_employees(app, container)
    register_leaves(app, container)
    register_attendance(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
