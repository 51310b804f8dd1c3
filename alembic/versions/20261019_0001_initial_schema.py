"""
Initial schema: users, blogs, blog likes and blog comments.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

This migration creates the complete initial schema for the blog platform:
- users: Accounts with email credentials and role
- blogs: Blog posts owned by an author
- blog_likes: One row per (blog, user) like
- blog_comments: Comments owned by their blog
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# Revision identifiers, used by Alembic
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Apply schema changes for this revision."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("profile_image_url", sa.String(length=500), nullable=True),
        sa.Column("role", sa.String(length=20), server_default="USER", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create blogs table
    op.create_table(
        "blogs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=20), server_default="Others", nullable=False),
        sa.Column("cover_image", sa.String(length=500), server_default="", nullable=False),
        sa.Column("excerpt", sa.String(length=300), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=20), server_default="published", nullable=False),
        sa.Column("view_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column("read_time", sa.Integer(), server_default="1", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_blogs_author_created", "blogs", ["author_id", "created_at"])
    op.create_index("ix_blogs_category_created", "blogs", ["category", "created_at"])
    op.create_index("ix_blogs_status_created", "blogs", ["status", "created_at"])

    # Create blog_likes table
    op.create_table(
        "blog_likes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("blog_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["blog_id"], ["blogs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("blog_id", "user_id", name="uq_blog_likes_blog_user"),
    )
    op.create_index("ix_blog_likes_blog_id", "blog_likes", ["blog_id"])
    op.create_index("ix_blog_likes_user_id", "blog_likes", ["user_id"])

    # Create blog_comments table
    op.create_table(
        "blog_comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("blog_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.String(length=500), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["blog_id"], ["blogs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.uuid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_blog_comments_blog_id", "blog_comments", ["blog_id"])

    # Trigram indexes serve the ILIKE substring search on PostgreSQL
    if op.get_bind().dialect.name == "postgresql":
        op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")
        op.create_index(
            "ix_blogs_title_trgm",
            "blogs",
            ["title"],
            postgresql_using="gin",
            postgresql_ops={"title": "gin_trgm_ops"},
        )
        op.create_index(
            "ix_blogs_content_trgm",
            "blogs",
            ["content"],
            postgresql_using="gin",
            postgresql_ops={"content": "gin_trgm_ops"},
        )


def downgrade() -> None:
    """Revert schema changes for this revision."""
    if op.get_bind().dialect.name == "postgresql":
        op.drop_index("ix_blogs_content_trgm", table_name="blogs")
        op.drop_index("ix_blogs_title_trgm", table_name="blogs")

    op.drop_index("ix_blog_comments_blog_id", table_name="blog_comments")
    op.drop_table("blog_comments")

    op.drop_index("ix_blog_likes_user_id", table_name="blog_likes")
    op.drop_index("ix_blog_likes_blog_id", table_name="blog_likes")
    op.drop_table("blog_likes")

    op.drop_index("ix_blogs_status_created", table_name="blogs")
    op.drop_index("ix_blogs_category_created", table_name="blogs")
    op.drop_index("ix_blogs_author_created", table_name="blogs")
    op.drop_table("blogs")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
