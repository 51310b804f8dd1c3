"""Client-side view state: load-more paging and optimistic like toggling."""

from dataclasses import dataclass, field
from uuid import UUID

from app.clients.blog_api import ApiClientError, BlogApiClient
from app.schemas import BlogResponse, PaginationResponse

FEED_PAGE_SIZE = 9


@dataclass
class BlogFeed:
    """
    Accumulating blog list for a "load more" view.

    Loading page 1 replaces the list, later pages append to it.

    Attributes
    ----------
    client : BlogApiClient
        API client used to fetch pages.
    limit : int
        Page size, 9 to fill a three column grid.
    category, search : str | None
        Filters forwarded to ``get_all_blogs``.
    """

    client: BlogApiClient
    limit: int = FEED_PAGE_SIZE
    category: str | None = None
    search: str | None = None
    blogs: list[BlogResponse] = field(default_factory=list)
    pagination: PaginationResponse | None = None

    @property
    def has_more(self) -> bool:
        return self.pagination is None or self.pagination.has_next

    async def load(self, page: int = 1) -> list[BlogResponse]:
        result = await self.client.get_all_blogs(
            page=page,
            limit=self.limit,
            category=self.category,
            search=self.search,
        )
        if page == 1:
            self.blogs = list(result.blogs)
        else:
            self.blogs.extend(result.blogs)
        self.pagination = result.pagination
        return self.blogs

    async def load_more(self) -> list[BlogResponse]:
        """Fetch the next page, or do nothing once the last page is loaded."""
        if self.pagination is None:
            return await self.load(1)
        if not self.pagination.has_next:
            return self.blogs
        return await self.load(self.pagination.current_page + 1)


@dataclass
class LikeState:
    """Like button state for one blog, flipped before the server answers."""

    is_liked: bool = False
    likes_count: int = 0

    @classmethod
    def from_blog(cls, blog: BlogResponse, user_id: UUID | None = None) -> "LikeState":
        if blog.is_liked is not None:
            is_liked = blog.is_liked
        else:
            is_liked = user_id is not None and any(like.user_id == user_id for like in blog.likes)
        return cls(is_liked=is_liked, likes_count=blog.likes_count)

    async def toggle(self, client: BlogApiClient, blog_id: str | UUID) -> "LikeState":
        """
        Flip the like locally, then settle on the server's answer.

        Raises:
            ApiClientError: After restoring the previous state when the request fails
        """
        previous = (self.is_liked, self.likes_count)
        self.is_liked = not self.is_liked
        self.likes_count = max(0, self.likes_count + (1 if self.is_liked else -1))

        try:
            result = await client.toggle_like(blog_id)
        except ApiClientError:
            self.is_liked, self.likes_count = previous
            raise

        self.is_liked = result.is_liked
        self.likes_count = result.likes_count
        return self
