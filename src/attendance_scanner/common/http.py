from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import (
    CollaboratorTimeoutError,
    CollaboratorUnavailableError,
    DomainError,
    DuplicateScanError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

# Most specific first.
STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (DuplicateScanError, 409),
    (CollaboratorUnavailableError, 503),
    (CollaboratorTimeoutError, 504),
)


def status_for(error: DomainError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def error_response(error: DomainError, **extra):
    body = {
        "success": False,
        "reason": error.reason,
        "retryable": error.retryable,
        "message": str(error),
    }
    body.update(extra)
    return jsonify(body), status_for(error)


def api_errors(view):
    """Map domain errors of a JSON view to error responses.

    Unexpected errors are logged with their traceback and answered with 500.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"success": False, "reason": "internal_error", "message": "Internal server error"}), 500

    return wrapper
