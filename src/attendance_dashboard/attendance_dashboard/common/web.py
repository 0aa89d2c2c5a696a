from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..auth.model import SessionToken
from ..core.constants import UNKNOWN_ERROR_MESSAGE
from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    DuplicateAttendanceError,
    RecordStoreError,
    ReportGenerationError,
    ValidationError,
)
from ..store.connection import bind_session_token, reset_session_token
from .datetime_utils import now_local

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "auth"


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def error_status(e: DomainError) -> int:
    if isinstance(e, DuplicateAttendanceError):
        return 409
    if isinstance(e, ValidationError):
        return 400
    if isinstance(e, AuthenticationError):
        return 401
    if isinstance(e, (RecordStoreError, ReportGenerationError)):
        return 502
    return 400


def api_view(view):
    """Translate domain errors into ``{"success": false, "message": ...}`` responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return json_error(str(e) or UNKNOWN_ERROR_MESSAGE, error_status(e))
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return json_error(UNKNOWN_ERROR_MESSAGE, 500)

    return wrapper


def login_required(view):
    """Require a live session token and bind it to Record Store calls made by the view."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        token = SessionToken.from_session(session.get(SESSION_TOKEN_KEY))
        if token is None or token.is_expired(now_local()):
            session.pop(SESSION_TOKEN_KEY, None)
            return json_error("Please log in to continue", 401)

        handle = bind_session_token(token.access_token)
        try:
            return view(*args, **kwargs)
        finally:
            reset_session_token(handle)

    return wrapper
