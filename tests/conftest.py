# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read when the app package is first imported,
# so the test environment must be in place before that
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-blog-platform"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LIMITER_ENABLED"] = "false"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession  # noqa: E402

from app.db import create_engine, get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.managers.token_manager import create_access_token  # noqa: E402
from app.models import BlogCommentDB, BlogDB, BlogLikeDB, UserDB  # noqa: E402, F401
from app.repositories import UserRepository  # noqa: E402

FAKE_HASH = "$argon2id$v=19$m=8192,t=1,p=1$c29tZXNhbHQ$somehash"

UserFactory = Callable[..., Awaitable[UserDB]]
HeadersFactory = Callable[[UserDB], dict[str, str]]


@fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with every table created."""
    test_engine = create_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@fixture
async def session(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for repository and service tests."""
    async with session_maker() as db_session:
        yield db_session


@fixture
def make_user(session: AsyncSession) -> UserFactory:
    """Create users directly through the repository, without hashing a password."""

    async def factory(
        email: str = "alice@example.com",
        full_name: str = "Alice Smith",
        role: str = "USER",
    ) -> UserDB:
        return await UserRepository(session).create(
            full_name=full_name,
            email=email,
            password_hash=FAKE_HASH,
            role=role,
        )

    return factory


@fixture
async def client(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """
    HTTP client against the app, backed by the in-memory database.

    Each request gets its own session that commits on success and rolls
    back on error, like the production dependency.
    """

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@fixture
def auth_headers() -> HeadersFactory:
    """Build bearer headers for a user."""

    def build(user: UserDB) -> dict[str, str]:
        token = create_access_token(user_id=user.uuid, email=user.email, role=user.role)
        return {"Authorization": f"Bearer {token}"}

    return build
