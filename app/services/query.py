"""Read-side blog queries: listing, search and the author's own blogs."""

from uuid import UUID

from app.errors import ValidationError
from app.models import BlogDB
from app.repositories import BlogFilter, BlogRepository, BlogSort
from app.utils.helpers import parse_uuid
from app.utils.pagination import PageParams

ALL_CATEGORIES = "all"


def split_terms(query: str | None) -> tuple[str, ...]:
    """
    Split a search query on whitespace.

    Examples
    --------
    >>> split_terms("  alice   tech ")
    ('alice', 'tech')
    """
    return tuple(query.split()) if query else ()


class BlogQueryService:
    """Paginated blog reads shared by the list, search and my-blogs endpoints."""

    def __init__(self, blog_repo: BlogRepository) -> None:
        self.blog_repo = blog_repo

    @staticmethod
    def build_filter(
        status: str | None = "published",
        category: str | None = None,
        author: str | None = None,
    ) -> BlogFilter:
        """
        Turn raw query parameters into a ``BlogFilter``.

        Args:
            status: Exact status; blank means the published default
            category: Exact category; "all" or blank means any
            author: Author id as sent by the client

        Returns:
            BlogFilter: Filter for the repository

        Raises:
            ValidationError: If ``author`` is not a valid id
        """
        author_id: UUID | None = None
        if author:
            author_id = parse_uuid(author)
            if author_id is None:
                raise ValidationError(
                    errors=[{"field": "author", "message": "Invalid author id", "type": "uuid_parsing"}],
                )

        return BlogFilter(
            status=status or "published",
            category=None if not category or category == ALL_CATEGORIES else category,
            author_id=author_id,
        )

    async def list_blogs(
        self,
        filters: BlogFilter,
        page: PageParams,
        sort: BlogSort | None = None,
    ) -> tuple[list[BlogDB], int]:
        """
        List blogs matching ``filters``.

        Returns:
            tuple[list[BlogDB], int]: Blogs on the page and the total match count
        """
        return await self.blog_repo.find(filters, page, sort)

    async def search(
        self,
        query: str,
        filters: BlogFilter,
        page: PageParams,
        sort: BlogSort | None = None,
    ) -> tuple[list[BlogDB], int]:
        """
        Search blogs; every whitespace separated term must match.

        Terms are matched against title, content, category, tags, excerpt
        and the author's full name.
        """
        terms = split_terms(query)
        return await self.blog_repo.find(
            BlogFilter(
                status=filters.status,
                category=filters.category,
                author_id=filters.author_id,
                terms=terms,
            ),
            page,
            sort,
        )

    async def my_blogs(
        self,
        author_id: UUID,
        page: PageParams,
        status: str | None = None,
    ) -> tuple[list[BlogDB], int]:
        """
        List the author's blogs newest first.

        Unlike the public listing, no status is applied unless one is asked for.
        """
        return await self.blog_repo.find(
            BlogFilter(status=status or None, author_id=author_id),
            page,
            BlogSort(),
        )
