from app.schemas.auth import SigninRequest, SigninResponse, SignupRequest, TokenData
from app.schemas.blog import (
    BlogCreate,
    BlogEnvelope,
    BlogPage,
    BlogPageResponse,
    BlogResponse,
    BlogUpdate,
    CommentCreate,
    CommentDeleteResponse,
    CommentEnvelope,
    CommentResponse,
    DashboardStats,
    LikeToggleResponse,
    PaginationResponse,
    StatsData,
    StatsResponse,
    parse_tags,
)
from app.schemas.common import HealthCheckResponse, MessageResponse
from app.schemas.user import AuthorResponse, CommenterResponse, UserEnvelope, UserResponse

__all__ = [
    "AuthorResponse",
    "BlogCreate",
    "BlogEnvelope",
    "BlogPage",
    "BlogPageResponse",
    "BlogResponse",
    "BlogUpdate",
    "CommentCreate",
    "CommentDeleteResponse",
    "CommentEnvelope",
    "CommentResponse",
    "CommenterResponse",
    "DashboardStats",
    "HealthCheckResponse",
    "LikeToggleResponse",
    "MessageResponse",
    "PaginationResponse",
    "SigninRequest",
    "SigninResponse",
    "SignupRequest",
    "StatsData",
    "StatsResponse",
    "TokenData",
    "UserEnvelope",
    "UserResponse",
    "parse_tags",
]
