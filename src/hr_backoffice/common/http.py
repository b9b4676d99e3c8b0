from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.constants import INTERNAL_ERROR_MESSAGE
from ..core.exceptions import AuthenticationError, DomainError
from ..security.principal import Principal

logger = logging.getLogger(__name__)


def login_required(view):
    """Resolve the session principal into `g.principal`, 401 when absent."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        principal = Principal.from_session(session)
        if principal is None:
            raise AuthenticationError("Login required")
        g.principal = principal
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def register_error_handlers(app: Flask) -> None:
    """Single translation point from exceptions to JSON error responses."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"statusCode": e.code, "message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"statusCode": 500, "message": INTERNAL_ERROR_MESSAGE}), 500
