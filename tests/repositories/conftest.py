# tests/repositories/conftest.py
"""Pytest fixtures for repository tests."""

from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID

from pytest import fixture
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import BlogDB
from app.repositories import BlogRepository
from app.schemas import BlogCreate


@fixture
def blog_repo(session: AsyncSession) -> BlogRepository:
    return BlogRepository(session)


@fixture
def make_blog(blog_repo: BlogRepository) -> Callable[..., Awaitable[BlogDB]]:
    """Create a blog for an author; keyword arguments override the payload."""

    async def factory(author_id: UUID, **fields: Any) -> BlogDB:
        payload = {"title": "A post", "content": "Some content", "category": "Technology"}
        payload.update(fields)
        return await blog_repo.create(author_id, BlogCreate.model_validate(payload))

    return factory
