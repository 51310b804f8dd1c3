# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    BlogIdDep,
    BlogRepoDep,
    BlogServiceDep,
    CommentIdDep,
    DashboardServiceDep,
    OptionalUserDep,
    QueryServiceDep,
    SessionDep,
    UserDBDep,
    UserRepoDep,
    bearer_scheme,
    get_auth_service,
    get_blog_repository,
    get_blog_service,
    get_current_user,
    get_dashboard_service,
    get_optional_user,
    get_query_service,
    get_user_repository,
    require_admin,
    require_role,
)

__all__ = [
    "AuthServiceDep",
    "BlogIdDep",
    "BlogRepoDep",
    "BlogServiceDep",
    "CommentIdDep",
    "DashboardServiceDep",
    "OptionalUserDep",
    "QueryServiceDep",
    "SessionDep",
    "UserDBDep",
    "UserRepoDep",
    "bearer_scheme",
    "get_auth_service",
    "get_blog_repository",
    "get_blog_service",
    "get_current_user",
    "get_dashboard_service",
    "get_optional_user",
    "get_query_service",
    "get_user_repository",
    "require_admin",
    "require_role",
]
