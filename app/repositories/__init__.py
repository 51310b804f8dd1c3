"""Repository layer for database operations."""

from app.repositories.blog import (
    SORT_COLUMNS,
    BlogFilter,
    BlogRepository,
    BlogSort,
    derive_excerpt,
    estimate_read_time,
)
from app.repositories.user import UserRepository

__all__ = [
    "SORT_COLUMNS",
    "BlogFilter",
    "BlogRepository",
    "BlogSort",
    "UserRepository",
    "derive_excerpt",
    "estimate_read_time",
]
