"""Blog service enforcing ownership rules over the blog repository."""

from uuid import UUID

from app.errors import (
    BlogNotFoundError,
    CommentNotFoundError,
    ForbiddenError,
    ValidationError,
)
from app.models import BlogCommentDB, BlogDB
from app.monitoring import get_logger
from app.repositories import BlogRepository
from app.schemas.blog import BlogCreate, BlogUpdate

logger = get_logger(__name__)


class BlogService:
    """
    Service for blog mutations: create, update, delete, likes and comments.

    Every operation that names a blog raises ``BlogNotFoundError`` when it
    does not exist.
    """

    def __init__(self, blog_repo: BlogRepository) -> None:
        self.blog_repo = blog_repo

    async def _get_or_404(self, blog_id: UUID) -> BlogDB:
        blog = await self.blog_repo.get_by_id(blog_id)
        if not blog:
            raise BlogNotFoundError
        return blog

    async def _ensure_exists(self, blog_id: UUID) -> None:
        if not await self.blog_repo.exists(blog_id):
            raise BlogNotFoundError

    async def create(self, author_id: UUID, payload: BlogCreate) -> BlogDB:
        """
        Create a blog owned by ``author_id``.

        Args:
            author_id: Authenticated author
            payload: Validated creation payload

        Returns:
            BlogDB: The stored blog with its author populated
        """
        return await self.blog_repo.create(author_id, payload)

    async def get_and_increment_view(self, blog_id: UUID) -> BlogDB:
        """
        Count one view and return the fresh blog.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogDB: Blog including the new view

        Raises:
            BlogNotFoundError: If the blog does not exist
        """
        if not await self.blog_repo.increment_view_count(blog_id):
            raise BlogNotFoundError
        return await self._get_or_404(blog_id)

    async def update(self, blog_id: UUID, requestor_id: UUID, payload: BlogUpdate) -> BlogDB:
        """
        Apply a partial update on behalf of the blog's author.

        Args:
            blog_id: Blog UUID
            requestor_id: Authenticated user
            payload: Fields to change; unset fields are left alone

        Returns:
            BlogDB: The updated blog

        Raises:
            BlogNotFoundError: If the blog does not exist
            ForbiddenError: If the requestor is not the author
        """
        blog = await self._get_or_404(blog_id)
        if blog.author_id != requestor_id:
            raise ForbiddenError("You can only update your own blog posts")

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        return await self.blog_repo.update(blog, changes)

    async def delete(self, blog_id: UUID, requestor_id: UUID) -> None:
        """
        Delete a blog with its likes and comments.

        Raises:
            BlogNotFoundError: If the blog does not exist
            ForbiddenError: If the requestor is not the author
        """
        blog = await self._get_or_404(blog_id)
        if blog.author_id != requestor_id:
            raise ForbiddenError("You can only delete your own blog posts")
        await self.blog_repo.delete(blog)

    async def toggle_like(self, blog_id: UUID, user_id: UUID) -> tuple[int, bool]:
        """
        Like the blog if the user has not, unlike it otherwise.

        Returns:
            tuple[int, bool]: New like count and whether the user now likes it
        """
        await self._ensure_exists(blog_id)
        return await self.blog_repo.toggle_like(blog_id, user_id)

    async def add_comment(
        self,
        blog_id: UUID,
        user_id: UUID,
        content: str,
    ) -> tuple[BlogCommentDB, int]:
        """
        Append a comment.

        Args:
            blog_id: Blog UUID
            user_id: Commenting user
            content: Raw comment text, trimmed before storing

        Returns:
            tuple[BlogCommentDB, int]: The comment and the new comment count

        Raises:
            BlogNotFoundError: If the blog does not exist
            ValidationError: If the content is empty after trimming
        """
        await self._ensure_exists(blog_id)

        text = content.strip()
        if not text:
            raise ValidationError("Comment content is required")

        comment = await self.blog_repo.add_comment(blog_id, user_id, text)
        return comment, await self.blog_repo.count_comments(blog_id)

    async def delete_comment(self, blog_id: UUID, comment_id: UUID, requestor_id: UUID) -> int:
        """
        Remove one comment.

        The comment's author and the blog's author may both remove it.

        Returns:
            int: The remaining comment count

        Raises:
            BlogNotFoundError: If the blog does not exist
            CommentNotFoundError: If the comment is not on this blog
            ForbiddenError: If the requestor owns neither the comment nor the blog
        """
        blog = await self._get_or_404(blog_id)
        comment = await self.blog_repo.get_comment(blog_id, comment_id)
        if not comment:
            raise CommentNotFoundError

        if requestor_id not in (comment.user_id, blog.author_id):
            raise ForbiddenError("You can only delete your own comments or comments on your blog")

        if not await self.blog_repo.delete_comment(blog_id, comment_id):
            # Removed by a concurrent request
            raise CommentNotFoundError
        logger.info(f"Comment {comment_id} removed from blog {blog_id} by {requestor_id}")
        return await self.blog_repo.count_comments(blog_id)
