# reride/utils/extensions.py

from flask import request, has_request_context
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .logger import Log


def _get_client_ip():
    """Safely get client IP, returns 'unknown' if outside request context."""
    if has_request_context():
        return get_remote_address() or "unknown"
    return "unknown"


def seller_key_func():
    """
    Rate-limit per seller email where the body carries one, else per IP.
    """
    data = request.get_json(silent=True) or {}
    seller_email = data.get("sellerEmail") if isinstance(data, dict) else None
    if seller_email:
        return f"seller:{str(seller_email).lower()[:100]}"
    return get_remote_address()


def log_rate_limit_breach(request_limit):
    """
    Called by Flask-Limiter whenever a rate limit is exceeded.
    """
    client_ip = _get_client_ip()
    limit_key = getattr(request_limit, "key", "unknown")

    Log.warning(
        f"[RATE_LIMIT_BREACH][{client_ip}] "
        f"limit={getattr(request_limit, 'limit', 'unknown')}, key={limit_key}, "
        f"method={request.method}, path={request.path}, endpoint={request.endpoint or 'unknown'}"
    )


limiter = Limiter(
    key_func=get_remote_address,
    on_breach=log_rate_limit_breach,
)
