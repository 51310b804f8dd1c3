from app.errors.auth import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    TokenExpiredError,
    UserAuthenticationError,
    UserNotFoundError,
    auth_exception_handler,
)
from app.errors.base import (
    BaseAppError,
    app_exception_handler,
    create_exception_handler,
    error_body,
    http_exception_handler,
    internal_error_handler,
)
from app.errors.blog import BlogNotFoundError, CommentNotFoundError, blog_exception_handler
from app.errors.database import DatabaseError, DuplicateEntryError, database_exception_handler
from app.errors.password_hasher import (
    PasswordHashingError,
    PasswordRehashError,
    password_hashing_exception_handler,
)
from app.errors.validation import (
    ValidationError,
    app_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BaseAppError",
    "BlogNotFoundError",
    "CommentNotFoundError",
    "DatabaseError",
    "DuplicateEmailError",
    "DuplicateEntryError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "PasswordHashingError",
    "PasswordRehashError",
    "TokenExpiredError",
    "UserAuthenticationError",
    "UserNotFoundError",
    "ValidationError",
    "app_exception_handler",
    "app_validation_exception_handler",
    "auth_exception_handler",
    "blog_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "error_body",
    "http_exception_handler",
    "internal_error_handler",
    "password_hashing_exception_handler",
    "validation_exception_handler",
]
