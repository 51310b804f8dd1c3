# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import Awaitable, Callable
from typing import Any

from httpx import AsyncClient
from pytest import fixture
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.models import UserDB
from app.repositories import UserRepository

FAKE_HASH = "$argon2id$v=19$m=8192,t=1,p=1$c29tZXNhbHQ$somehash"


@fixture
def create_user(session_maker: async_sessionmaker) -> Callable[..., Awaitable[UserDB]]:
    """Create and commit a user so requests in the same test can see it."""

    async def factory(
        email: str = "alice@example.com",
        full_name: str = "Alice Smith",
        role: str = "USER",
    ) -> UserDB:
        async with session_maker() as db_session:
            user = await UserRepository(db_session).create(
                full_name=full_name,
                email=email,
                password_hash=FAKE_HASH,
                role=role,
            )
            await db_session.commit()
            return user

    return factory


@fixture
def create_blog(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Create a blog through the API and return its JSON representation."""

    async def factory(headers: dict[str, str], **fields: Any) -> dict[str, Any]:
        payload = {"title": "A post", "content": "Some content", "category": "Technology"}
        payload.update(fields)
        response = await client.post("/api/blogs", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["blog"]

    return factory


@fixture
async def alice(create_user: Callable[..., Awaitable[UserDB]]) -> UserDB:
    return await create_user()


@fixture
async def bob(create_user: Callable[..., Awaitable[UserDB]]) -> UserDB:
    return await create_user(email="bob@example.com", full_name="Bob Jones")


@fixture
def alice_headers(alice: UserDB, auth_headers: Callable[[UserDB], dict[str, str]]) -> dict[str, str]:
    return auth_headers(alice)


@fixture
def bob_headers(bob: UserDB, auth_headers: Callable[[UserDB], dict[str, str]]) -> dict[str, str]:
    return auth_headers(bob)
