"""Async HTTP client for the blog platform API."""

from types import TracebackType
from typing import Any, Self
from uuid import UUID

from httpx import AsyncBaseTransport, AsyncClient, HTTPError, Response
from orjson import loads as orjson_loads

from app.clients.session import SessionStore, StoredSession
from app.configs import settings
from app.monitoring import get_logger
from app.schemas import (
    BlogCreate,
    BlogPage,
    BlogResponse,
    BlogUpdate,
    CommentDeleteResponse,
    CommentEnvelope,
    DashboardStats,
    LikeToggleResponse,
    UserResponse,
)

logger = get_logger(__name__)

FETCH_FAILED = "Failed to fetch"


class ApiClientError(Exception):
    """
    A failed API call.

    ``message`` is the server's own message when it sent one, otherwise a
    default describing the operation.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _query(**params: object) -> dict[str, str]:
    """Drop unset and empty values, as the API treats them as absent."""
    return {key: str(value) for key, value in params.items() if value is not None and value != ""}


class BlogApiClient:
    """
    Client for the ``/api`` endpoints.

    Signing in stores the user and token in the injected ``SessionStore``;
    later calls send that token as a bearer credential.

    Examples
    --------
    >>> async with BlogApiClient(SessionStore("session.json")) as api:
    ...     await api.signin("alice@example.com", "secret123")
    ...     page = await api.get_all_blogs(limit=9)
    """

    def __init__(
        self,
        session_store: SessionStore | None = None,
        base_url: str | None = None,
        *,
        transport: AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        self.session_store = session_store or SessionStore()
        self._client = AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            transport=transport,
            timeout=timeout or settings.CLIENT_TIMEOUT,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def current_user(self) -> UserResponse | None:
        session = self.session_store.load()
        return session.current_user if session else None

    def _auth_headers(self) -> dict[str, str]:
        token = self.session_store.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _request(
        self,
        method: str,
        path: str,
        default_message: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        auth: bool = True,
    ) -> dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            default_message: Error message used when the server sent none
            json: Request body
            params: Query parameters
            auth: Attach the stored bearer token when there is one

        Returns:
            dict[str, Any]: The response envelope

        Raises:
            ApiClientError: On transport failures and non-2xx responses
        """
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=params,
                headers=self._auth_headers() if auth else None,
            )
        except HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiClientError(FETCH_FAILED) from e

        data = self._decode(response)
        if response.is_error or data is None:
            message = data.get("message") if data else None
            raise ApiClientError(message or default_message, response.status_code)
        return data

    @staticmethod
    def _decode(response: Response) -> dict[str, Any] | None:
        try:
            data = orjson_loads(response.content)
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    async def signup(
        self,
        full_name: str,
        email: str,
        password: str,
        profile_image_url: str | None = None,
    ) -> StoredSession:
        """Create an account, then sign in with it."""
        body: dict[str, Any] = {"fullName": full_name, "email": email, "password": password}
        if profile_image_url:
            body["profileImageUrl"] = profile_image_url
        await self._request("POST", "/users/signup", "Registration failed", json=body, auth=False)
        return await self.signin(email, password)

    async def signin(self, email: str, password: str) -> StoredSession:
        """Sign in and persist the session."""
        data = await self._request(
            "POST",
            "/users/signin",
            "Login failed",
            json={"email": email, "password": password},
            auth=False,
        )
        user = UserResponse.model_validate(data["user"])
        return self.session_store.save(user, data["token"])

    def signout(self) -> None:
        self.session_store.clear()

    async def get_profile(self) -> UserResponse:
        if not self.session_store.token:
            raise ApiClientError("No token found")
        data = await self._request("GET", "/users/profile", "Failed to get user")
        return UserResponse.model_validate(data["user"])

    async def create_blog(self, blog: BlogCreate) -> BlogResponse:
        data = await self._request(
            "POST",
            "/blogs",
            "Failed to create blog",
            json=blog.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return BlogResponse.model_validate(data["blog"])

    async def get_all_blogs(
        self,
        page: int | None = None,
        limit: int | None = None,
        category: str | None = None,
        author: str | UUID | None = None,
        search: str | None = None,
        status: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> BlogPage:
        """Fetch one page of public blogs; ``search`` narrows by whitespace separated terms."""
        data = await self._request(
            "GET",
            "/blogs",
            "Failed to fetch blogs",
            params=_query(
                page=page,
                limit=limit,
                category=category,
                author=author,
                search=search,
                status=status,
                sortBy=sort_by,
                sortOrder=sort_order,
            ),
            auth=False,
        )
        return BlogPage.model_validate(data["data"])

    async def get_my_blogs(
        self,
        page: int | None = None,
        limit: int | None = None,
        status: str | None = None,
    ) -> BlogPage:
        data = await self._request(
            "GET",
            "/blogs/user/my-blogs",
            "Failed to fetch your blogs",
            params=_query(page=page, limit=limit, status=status),
        )
        return BlogPage.model_validate(data["data"])

    async def get_blog(self, blog_id: str | UUID) -> BlogResponse:
        """Fetch a blog; counts a view, and reports ``is_liked`` when signed in."""
        data = await self._request("GET", f"/blogs/{blog_id}", "Failed to fetch blog")
        return BlogResponse.model_validate(data["blog"])

    async def update_blog(self, blog_id: str | UUID, changes: BlogUpdate) -> BlogResponse:
        data = await self._request(
            "PUT",
            f"/blogs/{blog_id}",
            "Failed to update blog",
            json=changes.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
        return BlogResponse.model_validate(data["blog"])

    async def delete_blog(self, blog_id: str | UUID) -> str:
        data = await self._request("DELETE", f"/blogs/{blog_id}", "Failed to delete blog")
        return data.get("message", "")

    async def toggle_like(self, blog_id: str | UUID) -> LikeToggleResponse:
        data = await self._request("POST", f"/blogs/{blog_id}/like", "Failed to toggle like")
        return LikeToggleResponse.model_validate(data)

    async def add_comment(self, blog_id: str | UUID, content: str) -> CommentEnvelope:
        data = await self._request(
            "POST",
            f"/blogs/{blog_id}/comments",
            "Failed to add comment",
            json={"content": content},
        )
        return CommentEnvelope.model_validate(data)

    async def delete_comment(
        self,
        blog_id: str | UUID,
        comment_id: str | UUID,
    ) -> CommentDeleteResponse:
        data = await self._request(
            "DELETE",
            f"/blogs/{blog_id}/comments/{comment_id}",
            "Failed to delete comment",
        )
        return CommentDeleteResponse.model_validate(data)

    async def get_dashboard_stats(self) -> DashboardStats:
        data = await self._request("GET", "/blogs/stats", "Failed to fetch dashboard stats")
        return DashboardStats.model_validate(data["data"]["stats"])
