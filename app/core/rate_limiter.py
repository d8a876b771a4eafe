"""
Rate limiting with slowapi, keyed by client address.

Every route shares the default window; login routes carry their own,
stricter limit.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.core.config import settings
from app.utils.logger import logger

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    enabled=settings.RATE_LIMIT_ENABLED,
    strategy="fixed-window",
)


def login_rate_limit():
    return limiter.limit(settings.RATE_LIMIT_LOGIN)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(
        "[RateLimit] Exceeded for %s on %s: %s",
        get_remote_address(request),
        request.url.path,
        exc.detail,
    )
    return JSONResponse(
        status_code=429,
        content={
            "message": "Too many requests from this IP, please try again after 15 minutes",
            "detail": str(exc.detail),
        },
    )
