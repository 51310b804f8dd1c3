# app/managers/rate_limiter.py

"""Rate limiter configuration using slowapi."""

from collections.abc import Callable
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.configs import LimiterConfig
from app.errors.base import error_body
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Uses API key from header if available, otherwise falls back to IP address.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"apikey:{api_key}"

    remote_address = get_remote_address(request)
    return f"ip:{remote_address}"


def tiered(identified: str, anonymous: str) -> Callable[[str], str]:
    """
    Build a limit callable granting API-key callers a higher allowance.

    Args:
        identified: Limit for callers sending ``X-API-Key``.
        anonymous: Limit for everyone else.

    Returns:
        Callable mapping the rate-limit key to a limit string.
    """

    def limit_for(key: str) -> str:
        return identified if key.startswith("apikey:") else anonymous

    return limit_for


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response with error details.
    """
    http_exc = cast(RateLimitExceeded, exc)
    response = _rate_limit_exceeded_handler(request, http_exc)
    retry_after = response.headers.get("retry-after")
    logger.warning(f"Rate limit exceeded for ip: {host(request)} at endpoint {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content=error_body(
            "Rate limit exceeded",
            allowed_requests=http_exc.detail,
            retry_after=f"{retry_after} seconds" if retry_after else None,
        ),
        headers={"Retry-After": retry_after} if retry_after else None,
    )
