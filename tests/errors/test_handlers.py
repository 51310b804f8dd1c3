# tests/errors/test_handlers.py
"""Tests for the app/errors package."""

from collections.abc import AsyncGenerator
from unittest.mock import MagicMock

import pytest
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient
from orjson import loads as orjson_loads

from app.errors import (
    BaseAppError,
    BlogNotFoundError,
    DatabaseError,
    ValidationError,
    create_exception_handler,
    error_body,
)
from app.main import app

failing_router = APIRouter(prefix="/_test")


@failing_router.get("/boom")
async def boom() -> None:
    msg = "kaboom"
    raise RuntimeError(msg)


@failing_router.get("/database")
async def database_down() -> None:
    raise DatabaseError


app.include_router(failing_router)


@pytest.fixture
async def raw_client() -> AsyncGenerator[AsyncClient]:
    """Client that turns unhandled errors into responses instead of raising."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app, raise_app_exceptions=False),
    ) as ac:
        yield ac


def mock_request(path: str = "/api/test") -> MagicMock:
    request = MagicMock()
    request.client.host = "192.168.1.1"
    request.url.path = path
    return request


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_str_representation(self) -> None:
        assert str(BlogNotFoundError()) == "Blog not found"


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    @pytest.mark.asyncio
    async def test_client_error_is_logged_as_warning(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request(), BlogNotFoundError())

        assert response.status_code == 404
        assert orjson_loads(response.body) == {"success": False, "message": "Blog not found"}
        logger.warning.assert_called_once_with(
            "Blog not found for ip: 192.168.1.1 for endpoint /api/test",
        )
        logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_server_error_is_logged_as_error(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request(), DatabaseError())

        assert response.status_code == 500
        logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_extra_attributes_travel_with_response(self) -> None:
        handler = create_exception_handler(MagicMock())
        errors = [{"field": "author", "message": "Invalid author id", "type": "uuid_parsing"}]

        response = await handler(mock_request(), ValidationError(errors=errors))

        assert response.status_code == 400
        assert orjson_loads(response.body) == {
            "success": False,
            "message": "Validation failed",
            "errors": errors,
        }


def test_error_body() -> None:
    assert error_body("Nope", code=1) == {"success": False, "message": "Nope", "code": 1}


class TestAppHandlers:
    """Handlers registered on the application."""

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, raw_client: AsyncClient) -> None:
        response = await raw_client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}

    @pytest.mark.asyncio
    async def test_unhandled_error_hides_details(self, raw_client: AsyncClient) -> None:
        response = await raw_client.get("/_test/boom")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal server error"}
        assert "kaboom" not in response.text

    @pytest.mark.asyncio
    async def test_database_error(self, raw_client: AsyncClient) -> None:
        response = await raw_client.get("/_test/database")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Database Error"}
