"""Blog aggregate database models using SQLModel.

A blog exclusively owns its likes and comments. They live in child tables,
are loaded together with the blog and are deleted with it.
"""

from datetime import datetime
from typing import TYPE_CHECKING, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, DateTime, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String

from app.configs.settings import (
    MAX_COMMENT_LENGTH,
    MAX_EXCERPT_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
)
from app.utils.helpers import utc_now

if TYPE_CHECKING:
    from app.models.user import UserDB


class BlogLikeDB(SQLModel, table=True):
    """One user's like on one blog."""

    __tablename__ = cast("declared_attr[str]", "blog_likes")

    __table_args__ = (UniqueConstraint("blog_id", "user_id", name="uq_blog_likes_blog_user"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            Uuid,
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            Uuid,
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class BlogCommentDB(SQLModel, table=True):
    """A comment on a blog, addressable only through its parent blog."""

    __tablename__ = cast("declared_attr[str]", "blog_comments")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            Uuid,
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            Uuid,
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    content: str = Field(
        sa_column=Column(String(MAX_COMMENT_LENGTH), nullable=False),
        description="Comment text, trimmed and non-empty",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    user: "UserDB" = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    ``author_id`` is fixed at creation. ``excerpt`` and ``read_time`` are
    derived from ``content`` by the repository whenever content changes.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_author_created", "author_id", "created_at"),
        Index("ix_blogs_category_created", "category", "created_at"),
        Index("ix_blogs_status_created", "status", "created_at"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    # Foreign key to User
    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            Uuid,
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
        ),
        description="Author ID (foreign key to users.uuid)",
    )

    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Blog title",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content",
    )
    category: str = Field(
        default="Others",
        sa_column=Column(String(20), nullable=False, server_default="Others"),
        description="Blog category",
    )
    cover_image: str = Field(
        default="",
        sa_column=Column(String(MAX_URL_LENGTH), nullable=False, server_default=""),
        description="Cover image URL",
    )
    excerpt: str | None = Field(
        default=None,
        sa_column=Column(String(MAX_EXCERPT_LENGTH)),
        description="Short preview, derived from content when not supplied",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Blog tags",
    )
    status: str = Field(
        default="published",
        sa_column=Column(String(20), nullable=False, server_default="published"),
        description="Blog status (draft, published, archived)",
    )

    # Metadata fields
    view_count: int = Field(default=0, nullable=False, description="View count")
    read_time: int = Field(default=1, nullable=False, description="Read time in minutes")

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    author: "UserDB" = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    likes: list[BlogLikeDB] = Relationship(
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "BlogLikeDB.created_at",
        },
    )
    comments: list[BlogCommentDB] = Relationship(
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "BlogCommentDB.created_at",
        },
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "author_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Getting Started with FastAPI",
                "content": "FastAPI is a modern web framework...",
                "category": "Technology",
                "excerpt": "FastAPI is a modern web framework...",
                "tags": ["python", "fastapi"],
                "status": "published",
                "view_count": 0,
                "read_time": 1,
            },
        },
    )
