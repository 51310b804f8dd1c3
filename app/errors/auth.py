"""Authentication and authorization errors."""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
)

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class MissingTokenError(UserAuthenticationError):
    """Raised when a protected route is called without a bearer token."""

    def __init__(self) -> None:
        super().__init__("Access denied. No token provided.")


class InvalidTokenError(UserAuthenticationError):
    """Raised when a token has a bad signature, format or claims."""

    def __init__(self) -> None:
        super().__init__("Invalid token.")


class TokenExpiredError(UserAuthenticationError):
    """Raised when a token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Token expired.")


class UserNotFoundError(UserAuthenticationError):
    """Raised when a valid token references a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("Invalid token. User not found.")


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid. Does not reveal which part was wrong."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password", HTTP_400_BAD_REQUEST)


class DuplicateEmailError(UserAuthenticationError):
    """Raised on signup with an email that is already registered."""

    def __init__(self) -> None:
        super().__init__("User with this email already exists", HTTP_400_BAD_REQUEST)


class ForbiddenError(BaseAppError):
    """Raised when the caller does not own the resource or lacks the role."""

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
