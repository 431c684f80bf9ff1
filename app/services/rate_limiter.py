"""
Request Throttling

Every client address gets two fixed-window budgets:

    Tier     Routes                                        Setting
    -------  --------------------------------------------  -------------------
    read     GET /books, GET /books/{id}, utility routes   RATE_LIMIT_DEFAULT
    write    PUT /books, PATCH /books, DELETE /books/{id}  RATE_LIMIT_WRITE

The books router decorates its endpoints with `read_limit` or
`write_limit`; routes without a decorator fall under the read tier through
the middleware default.

Counters live in process memory, like the books. A restart clears them
and separate replicas do not share them.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


def client_key(request: Request) -> str:
    """
    Bucket key for a request: the address of the originating client.

    Behind a proxy the first X-Forwarded-For hop (or X-Real-IP) names the
    client; otherwise the socket peer does.
    """
    first_hop = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    if first_hop:
        return first_hop
    real_ip = request.headers.get("X-Real-IP", "").strip()
    return real_ip or get_remote_address(request)


def build_limiter(settings: Settings) -> Limiter:
    """Create the limiter for the given settings (read tier as the default)."""
    return Limiter(
        key_func=client_key,
        default_limits=[settings.rate_limit_default],
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=settings.rate_limit_enabled,
    )


settings = get_settings()
limiter = build_limiter(settings)

read_limit = limiter.limit(settings.rate_limit_default)
write_limit = limiter.limit(settings.rate_limit_write)

logger.info(
    f"Throttling {'on' if settings.rate_limit_enabled else 'off'}: "
    f"reads {settings.rate_limit_default}, writes {settings.rate_limit_write}"
)


def retry_after_seconds(exc: RateLimitExceeded) -> int:
    """Length in seconds of the window belonging to the exceeded limit."""
    return exc.limit.limit.get_expiry()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429, telling the client how long the exceeded window lasts."""
    retry_after = retry_after_seconds(exc)
    logger.warning(
        f"{client_key(request)} exceeded {exc.detail} on {request.method} {request.url.path}"
    )
    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": f"Too many requests. Retry in {retry_after} seconds.",
            "detail": str(exc.detail),
        },
        headers={"Retry-After": str(retry_after)},
    )
