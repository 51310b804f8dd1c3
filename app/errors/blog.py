"""Blog aggregate errors."""

from starlette.status import HTTP_404_NOT_FOUND

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class BlogNotFoundError(BaseAppError):
    """Raised when a blog does not exist or its identifier is malformed."""

    def __init__(self, detail: str = "Blog not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class CommentNotFoundError(BaseAppError):
    """Raised when a comment does not exist on the given blog."""

    def __init__(self, detail: str = "Comment not found") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


blog_exception_handler = create_exception_handler(logger)
