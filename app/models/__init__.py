"""Database models for the application."""

from app.models.blog import BlogCommentDB, BlogDB, BlogLikeDB
from app.models.user import UserDB

__all__ = ["BlogCommentDB", "BlogDB", "BlogLikeDB", "UserDB"]
