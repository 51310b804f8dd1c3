from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def error_body(message: str, **extra: object) -> dict[str, object]:
    """Build the ``{"success": false, "message": ...}`` error envelope."""
    return {"success": False, "message": message, **extra}


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", DEFAULT_ERROR_MESSAGE)

        log = logger.error if status_code >= HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
        log(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        # Extra attributes set by subclasses travel with the response
        extra = {k: v for k, v in exc.__dict__.items() if k not in ("status_code", "detail")}

        return ORJSONResponse(content=error_body(detail, **extra), status_code=status_code)

    return handler


app_exception_handler = create_exception_handler(logger)


async def http_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Render framework HTTP errors (unknown routes, bad methods) in the error envelope."""
    http_exc = cast(StarletteHTTPException, exc)
    logger.warning(
        f"{http_exc.detail} for ip: {host(request)} for endpoint {request.url.path}",
    )
    return ORJSONResponse(
        content=error_body(str(http_exc.detail)),
        status_code=http_exc.status_code,
        headers=http_exc.headers,
    )


async def internal_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Log unexpected failures with traceback and hide the details from the client."""
    logger.exception(
        f"Unhandled {type(exc).__name__} for ip: {host(request)} for endpoint {request.url.path}",
    )
    return ORJSONResponse(
        content=error_body(DEFAULT_ERROR_MESSAGE),
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
    )
