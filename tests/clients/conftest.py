# tests/clients/conftest.py
"""Pytest fixtures for client tests."""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from httpx import ASGITransport, AsyncClient, MockTransport, Request, Response
from pytest import fixture

from app.clients import BlogApiClient, SessionStore
from app.main import app
from app.schemas import BlogPage, BlogResponse, PaginationResponse, UserResponse


@fixture
def session_store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


@fixture
def sample_user_response() -> UserResponse:
    return UserResponse(
        uuid=uuid4(),
        full_name="Alice Smith",
        email="alice@example.com",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


@fixture
async def api(
    client: AsyncClient,
    session_store: SessionStore,
) -> AsyncGenerator[BlogApiClient]:
    """API client wired to the app in-process, sharing the test database."""
    async with BlogApiClient(
        session_store,
        base_url="http://test/api",
        transport=ASGITransport(app=app),
    ) as api_client:
        yield api_client


@fixture
def mock_api(session_store: SessionStore) -> Callable[[Callable[[Request], Response]], BlogApiClient]:
    """Build an API client whose requests are answered by ``handler``."""

    def build(handler: Callable[[Request], Response]) -> BlogApiClient:
        return BlogApiClient(
            session_store,
            base_url="http://test/api",
            transport=MockTransport(handler),
        )

    return build


def make_blog_response(title: str = "A post", likes: list | None = None) -> BlogResponse:
    now = datetime(2025, 1, 1, tzinfo=UTC)
    return BlogResponse.model_validate(
        {
            "id": str(uuid4()),
            "title": title,
            "content": "Some content",
            "author": {"id": str(uuid4()), "fullName": "Alice Smith", "email": "a@example.com"},
            "category": "Technology",
            "status": "published",
            "likes": likes or [],
            "createdAt": now.isoformat(),
            "updatedAt": now.isoformat(),
        },
    )


def make_page(blogs: list[BlogResponse], page: int, total_pages: int) -> BlogPage:
    return BlogPage(
        blogs=blogs,
        pagination=PaginationResponse(
            current_page=page,
            total_pages=total_pages,
            total_blogs=total_pages * max(len(blogs), 1),
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
    )


@fixture
def blog_factory() -> Callable[..., BlogResponse]:
    return make_blog_response


@fixture
def page_factory() -> Callable[..., BlogPage]:
    return make_page
