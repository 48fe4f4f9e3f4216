from __future__ import annotations

from flask import jsonify

from ..core.app_logger import get_logger
from ..core.exceptions import DomainError, NotFoundError, PersistenceError, ValidationError

log = get_logger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(exc: DomainError):
    """Map a domain exception to the JSON error body and HTTP status."""
    if isinstance(exc, ValidationError):
        return json_error(str(exc), 400)
    if isinstance(exc, NotFoundError):
        return json_error(str(exc), 404)
    if isinstance(exc, PersistenceError):
        return json_error("Database error, please try again", 503)
    return json_error(str(exc), 400)


def unexpected_error_response(exc: Exception, *, action: str):
    log.exception("unexpected error while %s", action)
    return json_error(f"System error while {action}", 500)
