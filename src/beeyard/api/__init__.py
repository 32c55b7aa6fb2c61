"""
HTTP API

Flask blueprints over DataService. Every endpoint maps the single Result of
the operation it calls onto one response:

    success     -> 200 (201 when something was created)
    empty       -> 404
    unavailable -> 503
    failure     -> 500

Malformed requests are rejected with 400 before any operation runs.
"""

from dataclasses import is_dataclass
from datetime import date, datetime

from flask import current_app, g, jsonify

from beeyard.db import Database
from beeyard.result import Result, Status
from beeyard.services import DataService

STATUS_CODES = {
    Status.EMPTY: 404,
    Status.UNAVAILABLE: 503,
    Status.FAILURE: 500,
}


class BadRequest(ValueError):
    """Request body or arguments could not be parsed."""


def data_service() -> DataService:
    """
    The DataService of the current request.

    Opened on first use and closed by the app's teardown handler.
    """
    if "beeyard" not in g:
        g.beeyard = DataService(Database(current_app.config["DATABASE_URL"])).open()
    return g.beeyard


def to_json(value):
    """Convert entities, dates and containers into JSON-friendly values."""
    if is_dataclass(value):
        return to_json(value.to_dict())
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def respond(result: Result, payload=None, success_code: int = 200):
    """Build the response for an operation result."""
    if result.is_success:
        body = to_json(result.value if payload is None else payload)
        return jsonify({"status": result.status.value, "data": body}), success_code
    code = STATUS_CODES[result.status]
    message = result.error or "not found"
    return jsonify({"status": result.status.value, "error": message}), code


def bad_request(error: Exception):
    return jsonify({"status": "invalid", "error": str(error)}), 400
