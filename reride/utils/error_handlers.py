from flask import request

from .json_response import prepared_response
from .errors import UnavailableError
from .logger import Log
from ..constants.service_code import ERROR_MESSAGES


def _first_message(messages):
    """Pick the first human readable message out of marshmallow's nested error dict."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, (list, tuple)):
        for item in messages:
            found = _first_message(item)
            if found:
                return found
        return None
    if isinstance(messages, dict):
        for value in messages.values():
            found = _first_message(value)
            if found:
                return found
    return None


# Handle marshmallow ValidationError
def handle_validation_error(error):
    Log.info(f"[error_handlers.py][{request.method} {request.path}] validation failed: {error.messages}")
    return prepared_response(
        status=False,
        status_code="BAD_REQUEST",
        message=_first_message(error.messages) or ERROR_MESSAGES["VALIDATION_FAILED"],
        error="ValidationError",
        errors=error.messages,
    )


# Handle NotFound / Forbidden / Conflict / LimitExceeded / InvalidState / Unavailable
def handle_service_error(error):
    log = Log.error if isinstance(error, UnavailableError) else Log.info
    log(f"[error_handlers.py][{request.method} {request.path}] {error.kind}: {error.message}")

    errors = [error.details["cause"]] if error.details.get("cause") else None
    return prepared_response(
        status=False,
        status_code=error.status_code,
        message=error.message,
        error=error.kind,
        errors=errors,
    )


def handle_rate_limit(e):
    # e.description contains whatever was passed as error_message=
    return prepared_response(
        status=False,
        status_code="TOO_MANY_REQUESTS",
        message=e.description or "Too many requests, please try again later.",
        error="Too Many Requests",
    )
