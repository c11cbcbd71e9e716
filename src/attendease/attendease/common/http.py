"""JSON response helpers shared by the API controllers."""
from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def ok(data=None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, code: str, status: int):
    return jsonify({"success": False, "error": {"message": message, "code": code}}), status


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Authentication required", "UNAUTHORIZED", 401)
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Translate DomainError into the error envelope; anything else is a logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return fail(str(e), e.code, e.status_code)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return fail("Internal server error", "INTERNAL_ERROR", 500)

    return wrapper
