"""Custom validation error handling for FastAPI."""

from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import BaseAppError, create_exception_handler, error_body
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


class ValidationError(BaseAppError):
    """Custom validation error class."""

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: list[dict] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []


app_validation_exception_handler = create_exception_handler(logger)


def format_errors(exc: RequestValidationError) -> list[dict]:
    """
    Flatten pydantic error entries into ``field``/``message``/``type`` dicts.

    Args:
        exc: The RequestValidationError raised by FastAPI.

    Returns:
        List of formatted field errors.
    """
    formatted_errors = []
    for error in exc.errors():
        # Skip the location prefix ('body', 'query', 'path')
        formatted_error = {
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if "ctx" in error:
            formatted_error["context"] = {
                key: str(value) if isinstance(value, Exception) else value
                for key, value in error["ctx"].items()
            }
        formatted_errors.append(formatted_error)
    return formatted_errors


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic validation errors with cleaner response format.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    formatted_errors = format_errors(cast(RequestValidationError, exc))

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", errors=formatted_errors),
    )
