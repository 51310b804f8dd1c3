# app/dependencies/dependencies.py

"""Application dependencies: sessions, services and bearer authentication."""

from collections.abc import Awaitable, Callable
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session
from app.errors import (
    BlogNotFoundError,
    CommentNotFoundError,
    MissingTokenError,
    UserAuthenticationError,
)
from app.models import UserDB
from app.repositories import BlogRepository, UserRepository
from app.services import AuthService, BlogQueryService, BlogService, DashboardService
from app.utils.helpers import parse_uuid

bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by /api/users/signin")

SessionDep = Annotated[AsyncSession, Depends(get_session)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository bound to the request session.
    """
    return UserRepository(session)


def get_blog_repository(session: SessionDep) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository bound to the request session.
    """
    return BlogRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


def get_auth_service(repo: UserRepoDep) -> AuthService:
    return AuthService(repo)


def get_blog_service(repo: BlogRepoDep) -> BlogService:
    return BlogService(repo)


def get_query_service(repo: BlogRepoDep) -> BlogQueryService:
    return BlogQueryService(repo)


def get_dashboard_service(repo: BlogRepoDep) -> DashboardService:
    return DashboardService(repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
QueryServiceDep = Annotated[BlogQueryService, Depends(get_query_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]


async def get_current_user(credentials: CredentialsDep, auth: AuthServiceDep) -> UserDB:
    """
    Get current authenticated user from the bearer token.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Parsed ``Authorization: Bearer`` header.
    auth : AuthService
        Authentication service.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    MissingTokenError
        If no bearer token was sent.
    InvalidTokenError, TokenExpiredError, UserNotFoundError
        If the token cannot be resolved to a user.
    """
    if not credentials or not credentials.credentials:
        raise MissingTokenError
    return await auth.verify_token(credentials.credentials)


async def get_optional_user(credentials: CredentialsDep, auth: AuthServiceDep) -> UserDB | None:
    """
    Get the authenticated user if a usable token was sent.

    Missing, invalid and expired tokens all yield an anonymous caller.
    """
    if not credentials or not credentials.credentials:
        return None
    try:
        return await auth.verify_token(credentials.credentials)
    except UserAuthenticationError:
        return None


UserDBDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]


def require_role(role: str) -> Callable[[UserDB], Awaitable[UserDB]]:
    """
    Build a dependency that admits only users holding ``role``.

    Parameters
    ----------
    role : str
        Required role, e.g. ``"ADMIN"``.

    Returns
    -------
    Callable
        Dependency returning the current user or raising ``ForbiddenError``.
    """

    async def role_checker(user: UserDBDep) -> UserDB:
        return AuthService.require_role(user, role)

    return role_checker


require_admin = require_role("ADMIN")


def get_blog_id(blog_id: Annotated[str, Path(description="Blog ID")]) -> UUID:
    """Parse the blog id path parameter; malformed ids are reported as not found."""
    parsed = parse_uuid(blog_id)
    if parsed is None:
        raise BlogNotFoundError
    return parsed


def get_comment_id(comment_id: Annotated[str, Path(description="Comment ID")]) -> UUID:
    """Parse the comment id path parameter; malformed ids are reported as not found."""
    parsed = parse_uuid(comment_id)
    if parsed is None:
        raise CommentNotFoundError
    return parsed


BlogIdDep = Annotated[UUID, Depends(get_blog_id)]
CommentIdDep = Annotated[UUID, Depends(get_comment_id)]
