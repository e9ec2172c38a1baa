# reride/utils/errors.py

from functools import wraps

from pymongo.errors import PyMongoError

from .logger import Log


class ServiceError(Exception):
    """
    Base class for errors raised by the plan and payment services.

    `kind` is echoed to clients next to the message, `status_code` is the key
    into HTTP_STATUS_CODES used by the HTTP layer.
    """
    kind = "ServiceError"
    status_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(ServiceError):
    kind = "NotFound"
    status_code = "NOT_FOUND"


class ForbiddenError(ServiceError):
    kind = "Forbidden"
    status_code = "FORBIDDEN"


class ConflictError(ServiceError):
    kind = "Conflict"
    status_code = "CONFLICT"


class LimitExceededError(ConflictError):
    kind = "LimitExceeded"


class PendingRequestExistsError(ConflictError):
    """The seller already has a pending payment request. Answered with 400."""
    status_code = "BAD_REQUEST"


class InvalidStateError(ServiceError):
    """Request is no longer pending. Answered with 400."""
    kind = "InvalidState"
    status_code = "BAD_REQUEST"


class UnavailableError(ServiceError):
    """Backing store failed or timed out. Retryable by the client."""
    kind = "Unavailable"
    status_code = "SERVICE_UNAVAILABLE"


class ConfigurationError(RuntimeError):
    """Fatal misconfiguration detected while building the app."""


def translate_store_errors(func):
    """
    Turn any driver error raised by a store call into UnavailableError,
    keeping the driver message for operators.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PyMongoError as e:
            Log.error(f"[errors.py][translate_store_errors][{func.__qualname__}] store error: {e}")
            raise UnavailableError(
                "The data store is currently unavailable. Please try again.",
                cause=str(e),
            ) from e

    return wrapper
