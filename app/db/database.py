"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from orjson import dumps as orjson_dumps
from sqlalchemy import event, text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from app.configs import pool_kwargs, settings
from app.decorators.with_retry import with_retry
from app.monitoring import get_logger

logger = get_logger(__name__)

STATEMENT_TIMEOUT_MS = 30000


def _json_serializer(value: object) -> str:
    # orjson keeps non-ASCII tags readable and returns bytes
    return orjson_dumps(value).decode()


def _connect_args() -> dict[str, object]:
    if settings.DATABASE_URL.startswith("postgresql+asyncpg"):
        return {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        }
    return {}


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def create_engine(url: str | None = None, **kwargs: object) -> AsyncEngine:
    """
    Create an async engine with the application's JSON serializer.

    Args:
        url: Database URL, defaults to ``settings.DATABASE_URL``
        **kwargs: Extra engine options (tests pass ``poolclass``)

    Returns:
        AsyncEngine: The configured engine
    """
    if url is not None:
        return create_async_engine(url, json_serializer=_json_serializer, **kwargs)
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        json_serializer=_json_serializer,
        connect_args=_connect_args(),
        **pool_kwargs(),
        **kwargs,
    )


engine: AsyncEngine = create_engine()

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    The session commits when the request handler returns and rolls back
    when it raises.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction() as session:
            session.add(UserDB(full_name="Alice", ...))
            # Commits on successful exit, rolls back on exception
        ```
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.debug("Transaction rolled back")
            raise


@with_retry(max_retries=5, base_delay=1, max_delay=10, exec_retry=(OSError, OperationalError))
async def init_db() -> None:
    """
    Initialize database tables.

    Creates every table registered on ``SQLModel.metadata``. Production
    databases are managed with Alembic instead.
    """
    # Models must be imported so their tables are registered
    from app.models import BlogCommentDB, BlogDB, BlogLikeDB, UserDB  # noqa: F401, PLC0415

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database initialized successfully!")


async def ping_db() -> bool:
    """Return True when the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, DBAPIError):
        logger.warning("Database ping failed")
        return False
    return True


async def close_db() -> None:
    """Dispose of the engine's connection pool on shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
