"""Blog repository for database operations."""

from dataclasses import dataclass, field
from datetime import datetime
from math import ceil
from typing import Any, cast
from uuid import UUID

from sqlalchemy import and_, case, delete, func, literal, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.expression import ColumnElement

from app.configs.settings import EXCERPT_CUT_LENGTH, EXCERPT_SOURCE_LENGTH, WORDS_PER_MINUTE
from app.models.blog import BlogCommentDB, BlogDB, BlogLikeDB
from app.models.user import UserDB
from app.monitoring import get_logger
from app.schemas.blog import BlogCreate
from app.utils.helpers import utc_now
from app.utils.pagination import PageParams

logger = get_logger(__name__)


def derive_excerpt(content: str) -> str:
    """
    Derive a preview from blog content.

    Args:
        content: Blog content

    Returns:
        str: The full content when it is at most 150 characters, otherwise
        the first 147 characters followed by an ellipsis
    """
    if len(content) <= EXCERPT_SOURCE_LENGTH:
        return content
    return content[:EXCERPT_CUT_LENGTH] + "..."


def estimate_read_time(content: str) -> int:
    """
    Estimate reading time in minutes.

    Assumes a reading speed of 150 words per minute.

    Args:
        content: Blog content

    Returns:
        int: Reading time in minutes (minimum 1)
    """
    return max(1, ceil(len(content.split()) / WORDS_PER_MINUTE))


SORT_COLUMNS: dict[str, InstrumentedAttribute] = {
    "createdAt": cast(InstrumentedAttribute, BlogDB.created_at),
    "updatedAt": cast(InstrumentedAttribute, BlogDB.updated_at),
    "title": cast(InstrumentedAttribute, BlogDB.title),
    "views": cast(InstrumentedAttribute, BlogDB.view_count),
    "readTime": cast(InstrumentedAttribute, BlogDB.read_time),
    "category": cast(InstrumentedAttribute, BlogDB.category),
}


@dataclass(frozen=True)
class BlogFilter:
    """
    Filters shared by listing, searching and the author's own blogs.

    Attributes
    ----------
    status : str | None
        Exact status, or None for any status.
    category : str | None
        Exact category, or None for any category.
    author_id : UUID | None
        Restrict to one author.
    terms : tuple[str, ...]
        Search terms. Every term must match at least one searchable field.
    """

    status: str | None = "published"
    category: str | None = None
    author_id: UUID | None = None
    terms: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BlogSort:
    """Sort key from ``SORT_COLUMNS`` and direction."""

    sort_by: str = "createdAt"
    descending: bool = True

    @classmethod
    def from_raw(cls, sort_by: str | None, sort_order: str | None) -> "BlogSort":
        key = sort_by if sort_by in SORT_COLUMNS else "createdAt"
        return cls(sort_by=key, descending=(sort_order or "desc").lower() == "desc")

    @property
    def clause(self) -> ColumnElement:
        column = SORT_COLUMNS[self.sort_by]
        return column.desc() if self.descending else column.asc()


def _filter_conditions(filters: BlogFilter) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if filters.status:
        conditions.append(cast(ColumnElement[bool], BlogDB.status == filters.status))
    if filters.category:
        conditions.append(cast(ColumnElement[bool], BlogDB.category == filters.category))
    if filters.author_id:
        conditions.append(cast(ColumnElement[bool], BlogDB.author_id == filters.author_id))
    return conditions


def _tag_condition(term: str, dialect: str) -> ColumnElement[bool]:
    """Match a term against each tag on its own, never across the stored JSON text."""
    if dialect == "postgresql":
        tag = func.json_array_elements_text(BlogDB.tags).table_valued("value").render_derived(
            name="tag",
        )
    else:
        tag = func.json_each(BlogDB.tags).table_valued("value").alias("tag")
    return (
        select(literal(1))
        .select_from(tag)
        .where(tag.c.value.icontains(term, autoescape=True))
        .correlate(BlogDB)
        .exists()
    )


def _term_condition(term: str, dialect: str) -> ColumnElement[bool]:
    """Match one term, case-insensitively and with LIKE wildcards escaped, against any field."""
    fields = (
        BlogDB.title,
        BlogDB.content,
        BlogDB.category,
        BlogDB.excerpt,
        UserDB.full_name,
    )
    # pyrefly: ignore [missing-attribute]
    matches = [column.icontains(term, autoescape=True) for column in fields]
    return or_(*matches, _tag_condition(term, dialect))


class BlogRepository:
    """
    Repository for Blog database operations.

    Likes and comments are only reached through their parent blog.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def create(self, author_id: UUID, blog: BlogCreate) -> BlogDB:
        """
        Create a new blog post.

        Args:
            author_id: Owner of the blog
            blog: Validated creation payload

        Returns:
            BlogDB: Created blog with author, likes and comments loaded
        """
        now = utc_now()
        db_blog = BlogDB(
            author_id=author_id,
            title=blog.title,
            content=blog.content,
            category=blog.category,
            cover_image=blog.cover_image,
            excerpt=blog.excerpt or derive_excerpt(blog.content),
            tags=blog.tags,
            status=blog.status,
            read_time=estimate_read_time(blog.content),
            created_at=now,
            updated_at=now,
        )
        self.session.add(db_blog)
        await self.session.flush()
        logger.info(f"Blog {db_blog.id} created by {author_id}")
        return cast(BlogDB, await self.get_by_id(db_blog.id))

    async def get_by_id(self, blog_id: UUID) -> BlogDB | None:
        """
        Get blog by ID with fresh author, likes and comments.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogDB | None: Blog if found, None otherwise
        """
        result = await self.session.execute(
            select(BlogDB)
            .where(cast(ColumnElement[bool], BlogDB.id == blog_id))
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def exists(self, blog_id: UUID) -> bool:
        result = await self.session.execute(
            select(BlogDB.id).where(cast(ColumnElement[bool], BlogDB.id == blog_id)),
        )
        return result.scalar_one_or_none() is not None

    async def increment_view_count(self, blog_id: UUID) -> bool:
        """
        Atomically add one view.

        Args:
            blog_id: Blog UUID

        Returns:
            bool: False when the blog does not exist
        """
        result = await self.session.execute(
            update(BlogDB)
            .where(cast(ColumnElement[bool], BlogDB.id == blog_id))
            .values(view_count=BlogDB.view_count + 1),
        )
        # pyrefly: ignore [missing-attribute]
        return result.rowcount > 0

    async def update(self, blog: BlogDB, changes: dict[str, Any]) -> BlogDB:
        """
        Apply a partial update.

        Read time is recomputed when content changes, and so is the excerpt
        unless the same update supplies one.

        Args:
            blog: Blog to update
            changes: Field names mapped to new values

        Returns:
            BlogDB: Updated blog
        """
        if "content" in changes:
            changes["read_time"] = estimate_read_time(changes["content"])
            if not changes.get("excerpt"):
                changes["excerpt"] = derive_excerpt(changes["content"])

        for key, value in changes.items():
            setattr(blog, key, value)
        blog.updated_at = utc_now()

        self.session.add(blog)
        await self.session.flush()
        return cast(BlogDB, await self.get_by_id(blog.id))

    async def delete(self, blog: BlogDB) -> None:
        """Delete a blog together with its likes and comments."""
        await self.session.delete(blog)
        await self.session.flush()
        logger.info(f"Blog {blog.id} deleted")

    async def count_likes(self, blog_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(BlogLikeDB)
            .where(cast(ColumnElement[bool], BlogLikeDB.blog_id == blog_id)),
        )
        return result.scalar_one()

    async def count_comments(self, blog_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(BlogCommentDB)
            .where(cast(ColumnElement[bool], BlogCommentDB.blog_id == blog_id)),
        )
        return result.scalar_one()

    async def toggle_like(self, blog_id: UUID, user_id: UUID) -> tuple[int, bool]:
        """
        Flip the user's like on a blog.

        The conditional delete decides the direction in one statement, so two
        concurrent toggles cannot both observe "not liked" and insert twice.
        The unique constraint rejects a concurrent duplicate insert.

        Args:
            blog_id: Blog UUID
            user_id: Acting user

        Returns:
            tuple[int, bool]: Resulting like count and whether the user now likes the blog
        """
        result = await self.session.execute(
            delete(BlogLikeDB).where(
                cast(ColumnElement[bool], BlogLikeDB.blog_id == blog_id),
                cast(ColumnElement[bool], BlogLikeDB.user_id == user_id),
            ),
        )
        # pyrefly: ignore [missing-attribute]
        is_liked = result.rowcount == 0

        if is_liked:
            try:
                # A duplicate only discards this savepoint
                async with self.session.begin_nested():
                    self.session.add(BlogLikeDB(blog_id=blog_id, user_id=user_id))
            except IntegrityError:
                # A concurrent request inserted the same like first
                logger.info(f"Like on blog {blog_id} by {user_id} already recorded")

        return await self.count_likes(blog_id), is_liked

    async def add_comment(self, blog_id: UUID, user_id: UUID, content: str) -> BlogCommentDB:
        """
        Append a comment to a blog.

        Args:
            blog_id: Parent blog
            user_id: Commenting user
            content: Trimmed, non-empty comment text

        Returns:
            BlogCommentDB: The new comment with its user loaded
        """
        comment = BlogCommentDB(blog_id=blog_id, user_id=user_id, content=content)
        self.session.add(comment)
        await self.session.flush()
        return cast(BlogCommentDB, await self.get_comment(blog_id, comment.id))

    async def get_comment(self, blog_id: UUID, comment_id: UUID) -> BlogCommentDB | None:
        result = await self.session.execute(
            select(BlogCommentDB)
            .where(
                cast(ColumnElement[bool], BlogCommentDB.id == comment_id),
                cast(ColumnElement[bool], BlogCommentDB.blog_id == blog_id),
            )
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def delete_comment(self, blog_id: UUID, comment_id: UUID) -> bool:
        """Remove one comment from a blog, leaving its siblings untouched."""
        result = await self.session.execute(
            delete(BlogCommentDB).where(
                cast(ColumnElement[bool], BlogCommentDB.id == comment_id),
                cast(ColumnElement[bool], BlogCommentDB.blog_id == blog_id),
            ),
        )
        # pyrefly: ignore [missing-attribute]
        return result.rowcount > 0

    async def find(
        self,
        filters: BlogFilter,
        page: PageParams,
        sort: BlogSort | None = None,
    ) -> tuple[list[BlogDB], int]:
        """
        Find one page of blogs and the total number of matches.

        Plain listing filters ``blogs`` directly. Searching joins the author
        so the author's name is searchable; every term must match at least
        one field.

        Args:
            filters: Status, category, author and search terms
            page: Page number and size
            sort: Sort key and direction, newest first by default

        Returns:
            tuple[list[BlogDB], int]: Blogs on the page and the total match count
        """
        sort = sort or BlogSort()
        conditions = _filter_conditions(filters)

        stmt = select(BlogDB)
        count_stmt = select(func.count()).select_from(BlogDB)
        if filters.terms:
            join_on = cast(ColumnElement[bool], BlogDB.author_id == UserDB.uuid)
            stmt = stmt.join(UserDB, join_on)
            count_stmt = count_stmt.join(UserDB, join_on)
            dialect = self.session.get_bind().dialect.name
            conditions.extend(_term_condition(term, dialect) for term in filters.terms)

        total = (await self.session.execute(count_stmt.where(*conditions))).scalar_one()

        result = await self.session.execute(
            stmt.where(*conditions)
            # Tie-break on id so pages never overlap
            .order_by(sort.clause, cast(InstrumentedAttribute, BlogDB.id))
            .offset(page.offset)
            .limit(page.limit),
        )
        return list(result.scalars().all()), total

    async def author_stats(
        self,
        author_id: UUID,
        month_start: datetime,
        month_end: datetime,
    ) -> dict[str, int]:
        """
        Aggregate an author's blogs regardless of status.

        Args:
            author_id: Author UUID
            month_start: First instant of the current month
            month_end: Last instant of the current month

        Returns:
            dict[str, int]: total_blogs, total_views, blogs_this_month,
            total_likes and total_comments, all zero for an author without blogs
        """
        by_author = cast(ColumnElement[bool], BlogDB.author_id == author_id)
        created_this_month = and_(
            cast(ColumnElement[bool], BlogDB.created_at >= month_start),
            cast(ColumnElement[bool], BlogDB.created_at <= month_end),
        )

        blog_row = (
            await self.session.execute(
                select(
                    func.count(),
                    func.coalesce(func.sum(BlogDB.view_count), 0),
                    func.coalesce(func.sum(case((created_this_month, 1), else_=0)), 0),
                )
                .select_from(BlogDB)
                .where(by_author),
            )
        ).one()

        total_likes = (
            await self.session.execute(
                select(func.count())
                .select_from(BlogLikeDB)
                .join(BlogDB, cast(ColumnElement[bool], BlogLikeDB.blog_id == BlogDB.id))
                .where(by_author),
            )
        ).scalar_one()

        total_comments = (
            await self.session.execute(
                select(func.count())
                .select_from(BlogCommentDB)
                .join(BlogDB, cast(ColumnElement[bool], BlogCommentDB.blog_id == BlogDB.id))
                .where(by_author),
            )
        ).scalar_one()

        return {
            "total_blogs": int(blog_row[0]),
            "total_views": int(blog_row[1]),
            "blogs_this_month": int(blog_row[2]),
            "total_likes": int(total_likes),
            "total_comments": int(total_comments),
        }
