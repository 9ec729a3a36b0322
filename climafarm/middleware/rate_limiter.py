"""
Per-client rate limiting.

A general limit applies to every route; data modification routes are
decorated with the stricter limit.
"""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from climafarm.config import settings

logger = logging.getLogger(__name__)

GENERAL_LIMIT = f"{settings.rate_limit_requests}/minute"
STRICT_LIMIT = f"{settings.strict_rate_limit_requests}/minute"

limiter = Limiter(key_func=get_remote_address, default_limits=[GENERAL_LIMIT])


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 in the API's error envelope."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        message = "Too many data modification requests, please try again later."
    else:
        message = "Too many requests from this IP, please try again later."
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"success": False, "error": message},
    )
