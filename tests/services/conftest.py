# tests/services/conftest.py
"""Pytest fixtures for service tests."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from pytest import fixture

from app.models import BlogCommentDB, BlogDB
from app.repositories import BlogRepository


@fixture
def mock_blog_repo() -> MagicMock:
    """Create a mock blog repository."""
    mock = MagicMock(spec=BlogRepository)
    mock.get_by_id = AsyncMock(return_value=None)
    mock.exists = AsyncMock(return_value=True)
    mock.create = AsyncMock()
    mock.update = AsyncMock()
    mock.delete = AsyncMock()
    mock.increment_view_count = AsyncMock(return_value=True)
    mock.toggle_like = AsyncMock(return_value=(1, True))
    mock.add_comment = AsyncMock()
    mock.get_comment = AsyncMock(return_value=None)
    mock.delete_comment = AsyncMock(return_value=True)
    mock.count_comments = AsyncMock(return_value=0)
    mock.find = AsyncMock(return_value=([], 0))
    mock.author_stats = AsyncMock()
    return mock


@fixture
def sample_blog() -> BlogDB:
    """Create a sample blog owned by a random author."""
    return BlogDB(
        id=uuid4(),
        author_id=uuid4(),
        title="Getting Started with FastAPI",
        content="FastAPI is a modern web framework",
        category="Technology",
    )


@fixture
def sample_comment(sample_blog: BlogDB) -> BlogCommentDB:
    """Create a comment on the sample blog by another user."""
    return BlogCommentDB(id=uuid4(), blog_id=sample_blog.id, user_id=uuid4(), content="Nice")
