from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    """Render every failure as ``{"error": message}`` with a matching status."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if isinstance(e, StoreUnavailableError):
            logger.error("Store failure on %s %s", request.method, request.path, exc_info=e)
            return jsonify({"error": "Internal server error"}), e.status_code
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=e)
        return jsonify({"error": "Internal server error"}), 500
