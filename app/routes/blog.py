# app/routes/blog.py

"""
Blog Routes.

Endpoints for publishing, reading, liking and commenting on blogs.

Summary
-------
Endpoints include:
  - List and search blogs
  - Dashboard statistics
  - My blogs
  - Get blog by id (counts a view)
  - Create, update and delete a blog
  - Toggle like
  - Add and delete comments

Dependencies
------------
  - `QueryServiceDep`: Paginated reads and search.
  - `BlogServiceDep`: Mutations with ownership checks.
  - `UserDBDep` / `OptionalUserDep`: Required or optional bearer authentication.

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples. Tiered
limits apply when `X-API-Key` is present, offering higher throughput for
identified clients.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Query, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.dependencies import (
    BlogIdDep,
    BlogServiceDep,
    CommentIdDep,
    DashboardServiceDep,
    OptionalUserDep,
    QueryServiceDep,
    UserDBDep,
)
from app.managers.rate_limiter import limiter, tiered
from app.models import BlogDB, UserDB
from app.monitoring import get_logger
from app.repositories import BlogSort
from app.schemas import (
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
    LikeToggleResponse,
    MessageResponse,
    PaginationResponse,
    StatsData,
    StatsResponse,
)
from app.utils.pagination import PageParams

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])

logger = get_logger(__name__)

BLOG_EXAMPLE = {
    "id": "6f1c2b9e-8a43-4d0e-9a55-0c6f7e1a2b3c",
    "title": "Getting Started with FastAPI",
    "content": "FastAPI is a modern web framework...",
    "author": {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "fullName": "Alice Smith",
        "email": "alice@example.com",
        "profileImageUrl": None,
    },
    "category": "Technology",
    "coverImage": "",
    "excerpt": "FastAPI is a modern web framework...",
    "tags": ["python", "fastapi"],
    "status": "published",
    "views": 42,
    "readTime": 3,
    "likes": [],
    "comments": [],
    "likesCount": 0,
    "commentsCount": 0,
    "isLiked": None,
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-01T00:00:00Z",
}

PAGINATION_EXAMPLE = {
    "currentPage": 1,
    "totalPages": 1,
    "totalBlogs": 1,
    "hasNext": False,
    "hasPrev": False,
}

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {
        "application/json": {"example": {"success": False, "message": "Rate limit exceeded"}},
    },
}

UNAUTHORIZED = {
    "description": "Missing or invalid token",
    "content": {
        "application/json": {
            "example": {"success": False, "message": "Access denied. No token provided."},
        },
    },
}

NOT_FOUND = {
    "description": "Blog not found",
    "content": {"application/json": {"example": {"success": False, "message": "Blog not found"}}},
}


def blog_to_response(blog: BlogDB, viewer: UserDB | None = None) -> BlogResponse:
    """
    Convert a `BlogDB` instance to `BlogResponse`.

    Parameters
    ----------
    blog : BlogDB
        Blog with author, likes and comments loaded.
    viewer : UserDB | None
        Authenticated caller; when given, ``isLiked`` reflects their like.

    Returns
    -------
    BlogResponse
        Validated response model.
    """
    response = BlogResponse.model_validate(blog)
    if viewer is not None:
        response.is_liked = any(like.user_id == viewer.uuid for like in blog.likes)
    return response


def page_to_response(blogs: list[BlogDB], total: int, params: PageParams) -> BlogPageResponse:
    return BlogPageResponse(
        data=BlogPage(
            blogs=[blog_to_response(blog) for blog in blogs],
            pagination=PaginationResponse.from_page(total, params),
        ),
    )


@router.get(
    "/health",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Blog routes health",
    operation_id="blogs_health",
)
async def blogs_health() -> MessageResponse:
    return MessageResponse(message="Blog routes are working")


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogPageResponse,
    summary="List blogs",
    description=(
        "List blogs newest first, optionally filtered by category, author and status "
        "(published by default) and narrowed by a whitespace separated search query."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {"blogs": [BLOG_EXAMPLE], "pagination": PAGINATION_EXAMPLE},
                    },
                },
            },
        },
        400: {
            "description": "Invalid author id",
            "content": {
                "application/json": {"example": {"success": False, "message": "Validation failed"}},
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="blogs_list",
)
@limiter.limit(tiered("300/minute", "60/minute"))
async def get_blogs(
    request: Request,
    response: Response,
    query: QueryServiceDep,
    page: Annotated[str | None, Query(description="Page number, 1 when invalid")] = None,
    limit: Annotated[str | None, Query(description="Page size, at most 100")] = None,
    category: Annotated[str | None, Query(description="Category, or 'all'")] = None,
    author: Annotated[str | None, Query(description="Author id")] = None,
    status: Annotated[str | None, Query(description="Status, published by default")] = None,
    search: Annotated[str | None, Query(description="Search terms")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> BlogPageResponse:
    """
    List or search blogs.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    query : BlogQueryService
        Read-side service.
    page, limit : str | None
        Loose pagination values; invalid values fall back to defaults.
    category, author, status : str | None
        Filters.
    search : str | None
        Search query; every term must match.
    sort_by, sort_order : str | None
        Sort key and direction.

    Returns
    -------
    BlogPageResponse
        One page of blogs with pagination metadata.
    """
    params = PageParams.from_raw(page, limit)
    filters = query.build_filter(status=status, category=category, author=author)
    sort = BlogSort.from_raw(sort_by, sort_order)

    if search and search.strip():
        blogs, total = await query.search(search, filters, params, sort)
    else:
        blogs, total = await query.list_blogs(filters, params, sort)
    return page_to_response(blogs, total, params)


@router.get(
    "/stats",
    response_class=ORJSONResponse,
    response_model=StatsResponse,
    summary="Dashboard statistics",
    description="Totals over all of the caller's blogs, whatever their status.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "stats": {
                                "totalBlogs": 3,
                                "totalLikes": 10,
                                "totalComments": 4,
                                "totalViews": 120,
                                "blogsThisMonth": 1,
                            },
                        },
                    },
                },
            },
        },
        401: UNAUTHORIZED,
        429: RATE_LIMITED,
    },
    operation_id="blogs_stats",
)
@limiter.limit(tiered("120/minute", "30/minute"))
async def get_dashboard_stats(
    request: Request,
    response: Response,
    current_user: UserDBDep,
    dashboard: DashboardServiceDep,
) -> StatsResponse:
    """
    Get dashboard statistics for the current user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    current_user : UserDB
        Authenticated author.
    dashboard : DashboardService
        Aggregation service.

    Returns
    -------
    StatsResponse
        Blog, like, comment, view and this-month totals.
    """
    stats = await dashboard.stats(current_user.uuid)
    return StatsResponse(data=StatsData(stats=stats))


@router.get(
    "/user/my-blogs",
    response_class=ORJSONResponse,
    response_model=BlogPageResponse,
    summary="My blogs",
    description="The caller's blogs newest first, in any status unless one is given.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {"blogs": [BLOG_EXAMPLE], "pagination": PAGINATION_EXAMPLE},
                    },
                },
            },
        },
        401: UNAUTHORIZED,
        429: RATE_LIMITED,
    },
    operation_id="blogs_my_blogs",
)
@limiter.limit(tiered("120/minute", "30/minute"))
async def get_my_blogs(
    request: Request,
    response: Response,
    current_user: UserDBDep,
    query: QueryServiceDep,
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    status: Annotated[str | None, Query()] = None,
) -> BlogPageResponse:
    """
    List the current user's blogs.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    current_user : UserDB
        Authenticated author.
    query : BlogQueryService
        Read-side service.
    page, limit : str | None
        Loose pagination values.
    status : str | None
        Optional status filter.

    Returns
    -------
    BlogPageResponse
        One page of the author's blogs.
    """
    params = PageParams.from_raw(page, limit)
    blogs, total = await query.my_blogs(current_user.uuid, params, status)
    return page_to_response(blogs, total, params)


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    summary="Get blog",
    description=(
        "Return one blog and count a view. With a valid bearer token, "
        "`isLiked` tells whether the caller likes it."
    ),
    responses={
        200: {"content": {"application/json": {"example": {"success": True, "blog": BLOG_EXAMPLE}}}},
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_get",
)
@limiter.limit(tiered("300/minute", "60/minute"))
async def get_blog(
    request: Request,
    response: Response,
    blog_id: BlogIdDep,
    blogs: BlogServiceDep,
    viewer: OptionalUserDep,
) -> BlogEnvelope:
    """
    Get a blog by id.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog id; malformed ids are reported as not found.
    blogs : BlogService
        Blog service.
    viewer : UserDB | None
        Caller, when a valid token was sent.

    Returns
    -------
    BlogEnvelope
        The blog including the new view.
    """
    blog = await blogs.get_and_increment_view(blog_id)
    return BlogEnvelope(blog=blog_to_response(blog, viewer))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    status_code=HTTP_201_CREATED,
    summary="Create blog",
    description="Publish a blog as the current user. Title and content are required.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Blog created successfully",
                        "blog": BLOG_EXAMPLE,
                    },
                },
            },
        },
        400: {
            "description": "Validation failed",
            "content": {
                "application/json": {"example": {"success": False, "message": "Validation failed"}},
            },
        },
        401: UNAUTHORIZED,
        429: RATE_LIMITED,
    },
    operation_id="blogs_create",
)
@limiter.limit(tiered("60/minute", "10/minute"))
async def create_blog(
    request: Request,
    response: Response,
    payload: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "Getting Started with FastAPI",
                    "content": "FastAPI is a modern web framework...",
                    "category": "Technology",
                    "tags": "python, fastapi",
                },
            ],
        ),
    ],
    current_user: UserDBDep,
    blogs: BlogServiceDep,
) -> BlogEnvelope:
    """
    Create a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    payload : BlogCreate
        Blog fields; tags may be a list or a comma-separated string.
    current_user : UserDB
        Authenticated author.
    blogs : BlogService
        Blog service.

    Returns
    -------
    BlogEnvelope
        The created blog with its author.
    """
    blog = await blogs.create(current_user.uuid, payload)
    return BlogEnvelope(message="Blog created successfully", blog=blog_to_response(blog))


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogEnvelope,
    summary="Update blog",
    description="Change any subset of the blog's fields. Only the author may update.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Blog updated successfully",
                        "blog": BLOG_EXAMPLE,
                    },
                },
            },
        },
        401: UNAUTHORIZED,
        403: {
            "description": "Not the author",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "You can only update your own blog posts",
                    },
                },
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_update",
)
@limiter.limit(tiered("60/minute", "20/minute"))
async def update_blog(
    request: Request,
    response: Response,
    blog_id: BlogIdDep,
    payload: BlogUpdate,
    current_user: UserDBDep,
    blogs: BlogServiceDep,
) -> BlogEnvelope:
    """
    Update a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog id.
    payload : BlogUpdate
        Fields to change.
    current_user : UserDB
        Authenticated user; must be the author.
    blogs : BlogService
        Blog service.

    Returns
    -------
    BlogEnvelope
        The updated blog.
    """
    blog = await blogs.update(blog_id, current_user.uuid, payload)
    return BlogEnvelope(message="Blog updated successfully", blog=blog_to_response(blog))


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete blog",
    description="Delete a blog with its likes and comments. Only the author may delete.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"success": True, "message": "Blog deleted successfully"},
                },
            },
        },
        401: UNAUTHORIZED,
        403: {
            "description": "Not the author",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "You can only delete your own blog posts",
                    },
                },
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_delete",
)
@limiter.limit(tiered("60/minute", "20/minute"))
async def delete_blog(
    request: Request,
    response: Response,
    blog_id: BlogIdDep,
    current_user: UserDBDep,
    blogs: BlogServiceDep,
) -> MessageResponse:
    """
    Delete a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog id.
    current_user : UserDB
        Authenticated user; must be the author.
    blogs : BlogService
        Blog service.

    Returns
    -------
    MessageResponse
        Confirmation message.
    """
    await blogs.delete(blog_id, current_user.uuid)
    return MessageResponse(message="Blog deleted successfully")


@router.post(
    "/{blog_id}/like",
    response_class=ORJSONResponse,
    response_model=LikeToggleResponse,
    summary="Toggle like",
    description="Like the blog, or remove the like if the caller already likes it.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Blog liked successfully",
                        "likesCount": 1,
                        "isLiked": True,
                    },
                },
            },
        },
        401: UNAUTHORIZED,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_toggle_like",
)
@limiter.limit(tiered("120/minute", "30/minute"))
async def toggle_like(
    request: Request,
    response: Response,
    blog_id: BlogIdDep,
    current_user: UserDBDep,
    blogs: BlogServiceDep,
) -> LikeToggleResponse:
    """
    Toggle the caller's like.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog id.
    current_user : UserDB
        Authenticated user.
    blogs : BlogService
        Blog service.

    Returns
    -------
    LikeToggleResponse
        New like count and like state.
    """
    likes_count, is_liked = await blogs.toggle_like(blog_id, current_user.uuid)
    return LikeToggleResponse(
        message="Blog liked successfully" if is_liked else "Blog unliked successfully",
        likes_count=likes_count,
        is_liked=is_liked,
    )


@router.post(
    "/{blog_id}/comments",
    response_class=ORJSONResponse,
    response_model=CommentEnvelope,
    status_code=HTTP_201_CREATED,
    summary="Add comment",
    description="Comment on a blog. Content is trimmed and limited to 500 characters.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Comment added successfully",
                        "comment": {
                            "id": "0b7e4d2a-3f1c-4e6b-8a9d-1c2b3a4d5e6f",
                            "user": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "fullName": "Alice Smith",
                                "profileImageUrl": None,
                            },
                            "content": "Great post!",
                            "createdAt": "2025-01-01T00:00:00Z",
                        },
                        "commentsCount": 1,
                    },
                },
            },
        },
        400: {
            "description": "Empty comment",
            "content": {
                "application/json": {
                    "example": {"success": False, "message": "Comment content is required"},
                },
            },
        },
        401: UNAUTHORIZED,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_add_comment",
)
@limiter.limit(tiered("60/minute", "20/minute"))
async def add_comment(
    request: Request,
    response: Response,
    blog_id: BlogIdDep,
    current_user: UserDBDep,
    blogs: BlogServiceDep,
    payload: Annotated[CommentCreate | None, Body(examples=[{"content": "Great post!"}])] = None,
) -> CommentEnvelope:
    """
    Add a comment.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog id.
    current_user : UserDB
        Commenting user.
    blogs : BlogService
        Blog service.
    payload : CommentCreate | None
        Comment text; a missing body is treated as empty content.

    Returns
    -------
    CommentEnvelope
        The comment with its author and the new comment count.
    """
    content = payload.content if payload else ""
    comment, comments_count = await blogs.add_comment(blog_id, current_user.uuid, content)
    return CommentEnvelope(
        comment=CommentResponse.model_validate(comment),
        comments_count=comments_count,
    )


@router.delete(
    "/{blog_id}/comments/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentDeleteResponse,
    summary="Delete comment",
    description="Remove a comment. Allowed for the comment's author and the blog's author.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Comment deleted successfully",
                        "commentsCount": 0,
                    },
                },
            },
        },
        401: UNAUTHORIZED,
        403: {
            "description": "Neither comment nor blog author",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "message": "You can only delete your own comments or comments on your blog",
                    },
                },
            },
        },
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="blogs_delete_comment",
)
@limiter.limit(tiered("60/minute", "20/minute"))
async def delete_comment(
    request: Request,
    response: Response,
    blog_id: BlogIdDep,
    comment_id: CommentIdDep,
    current_user: UserDBDep,
    blogs: BlogServiceDep,
) -> CommentDeleteResponse:
    """
    Delete a comment.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : UUID
        Blog id.
    comment_id : UUID
        Comment id.
    current_user : UserDB
        Authenticated user.
    blogs : BlogService
        Blog service.

    Returns
    -------
    CommentDeleteResponse
        The remaining comment count.
    """
    comments_count = await blogs.delete_comment(blog_id, comment_id, current_user.uuid)
    return CommentDeleteResponse(comments_count=comments_count)
