"""Blog request and response schemas."""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    computed_field,
    field_validator,
)

from app.configs.settings import (
    MAX_COMMENT_LENGTH,
    MAX_EXCERPT_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
)
from app.schemas.user import AuthorResponse, CommenterResponse
from app.utils.pagination import PageParams

Category = Literal[
    "Technology",
    "Lifestyle",
    "Travel",
    "Food",
    "Health",
    "Education",
    "Business",
    "Others",
]
BlogStatus = Literal["draft", "published", "archived"]


def parse_tags(value: object) -> object:
    """
    Normalize tags given as a list or as a comma-separated string.

    Entries are trimmed and empty entries dropped.

    Examples
    --------
    >>> parse_tags(" python, fastapi ,, ")
    ['python', 'fastapi']
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, list | tuple):
        return [tag.strip() for tag in value if isinstance(tag, str) and tag.strip()]
    return value


def _blank_to_none(value: object) -> object:
    # Empty strings fall back to the field default
    if isinstance(value, str) and not value.strip():
        return None
    return value


Title = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_TITLE_LENGTH),
]
Tags = Annotated[list[str], BeforeValidator(parse_tags)]


class BlogCreate(BaseModel):
    """Blog creation payload. Title and content are required."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Title = Field(..., description="Blog title", examples=["Getting Started with FastAPI"])
    content: str = Field(..., min_length=1, description="Blog content")
    category: Category = Field(default="Others", description="Blog category")
    cover_image: str = Field(
        default="",
        alias="coverImage",
        max_length=MAX_URL_LENGTH,
        description="Cover image URL",
    )
    excerpt: Annotated[str | None, BeforeValidator(_blank_to_none)] = Field(
        default=None,
        max_length=MAX_EXCERPT_LENGTH,
        description="Short preview; derived from content when omitted",
    )
    tags: Tags = Field(default_factory=list, description="Tags as a list or comma-separated string")
    status: BlogStatus = Field(default="published", description="Blog status")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            mssg = "Content is required"
            raise ValueError(mssg)
        return value

    @field_validator("cover_image", mode="before")
    @classmethod
    def cover_image_default(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("category", "status", mode="before")
    @classmethod
    def blank_to_default(cls, value: object, info: ValidationInfo) -> object:
        if _blank_to_none(value) is None:
            return cls.model_fields[info.field_name].default
        return value


class BlogUpdate(BaseModel):
    """
    Partial blog update. Only supplied fields change.

    The author is not part of this schema, so ownership cannot be transferred.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Title | None = None
    content: str | None = Field(default=None, min_length=1)
    category: Category | None = None
    cover_image: str | None = Field(default=None, alias="coverImage", max_length=MAX_URL_LENGTH)
    excerpt: str | None = Field(default=None, max_length=MAX_EXCERPT_LENGTH)
    tags: Tags | None = None
    status: BlogStatus | None = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            mssg = "Content cannot be empty"
            raise ValueError(mssg)
        return value


class CommentCreate(BaseModel):
    """Comment payload. Blank content is rejected by the service."""

    content: Annotated[
        str,
        StringConstraints(strip_whitespace=True, max_length=MAX_COMMENT_LENGTH),
    ] = Field(default="", description="Comment text, trimmed before the length check")


class LikeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    user_id: UUID = Field(..., alias="user")
    created_at: datetime = Field(..., alias="createdAt")


class CommentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    user: CommenterResponse
    content: str
    created_at: datetime = Field(..., alias="createdAt")


class BlogResponse(BaseModel):
    """Full blog representation with author, likes and comments."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID = Field(..., description="Blog ID")
    title: str
    content: str
    author: AuthorResponse
    category: str
    cover_image: str = Field(default="", alias="coverImage")
    excerpt: str | None = None
    tags: list[str] = Field(default_factory=list)
    status: str
    view_count: int = Field(default=0, alias="views")
    read_time: int = Field(default=1, alias="readTime")
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    is_liked: bool | None = Field(
        default=None,
        alias="isLiked",
        description="Whether the authenticated viewer likes this blog",
    )
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @computed_field(alias="likesCount")  # type: ignore[prop-decorator]
    @property
    def likes_count(self) -> int:
        return len(self.likes)

    @computed_field(alias="commentsCount")  # type: ignore[prop-decorator]
    @property
    def comments_count(self) -> int:
        return len(self.comments)


class PaginationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_blogs: int = Field(..., alias="totalBlogs")
    has_next: bool = Field(..., alias="hasNext")
    has_prev: bool = Field(..., alias="hasPrev")

    @classmethod
    def from_page(cls, total: int, params: PageParams) -> "PaginationResponse":
        return cls(
            current_page=params.page,
            total_pages=params.total_pages(total),
            total_blogs=total,
            has_next=params.has_next(total),
            has_prev=params.has_prev,
        )


class BlogPage(BaseModel):
    blogs: list[BlogResponse]
    pagination: PaginationResponse


class BlogPageResponse(BaseModel):
    """``{success, data: {blogs, pagination}}`` envelope."""

    success: bool = True
    data: BlogPage


class BlogEnvelope(BaseModel):
    """``{success, message?, blog}`` envelope."""

    success: bool = True
    message: str | None = None
    blog: BlogResponse


class LikeToggleResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    likes_count: int = Field(..., alias="likesCount")
    is_liked: bool = Field(..., alias="isLiked")


class CommentEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Comment added successfully"
    comment: CommentResponse
    comments_count: int = Field(..., alias="commentsCount")


class CommentDeleteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Comment deleted successfully"
    comments_count: int = Field(..., alias="commentsCount")


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_blogs: int = Field(default=0, alias="totalBlogs")
    total_likes: int = Field(default=0, alias="totalLikes")
    total_comments: int = Field(default=0, alias="totalComments")
    total_views: int = Field(default=0, alias="totalViews")
    blogs_this_month: int = Field(default=0, alias="blogsThisMonth")


class StatsData(BaseModel):
    stats: DashboardStats


class StatsResponse(BaseModel):
    """``{success, data: {stats}}`` envelope."""

    success: bool = True
    data: StatsData
