from app.clients.blog_api import ApiClientError, BlogApiClient
from app.clients.session import SessionStore, StoredSession
from app.clients.state import FEED_PAGE_SIZE, BlogFeed, LikeState

__all__ = [
    "FEED_PAGE_SIZE",
    "ApiClientError",
    "BlogApiClient",
    "BlogFeed",
    "LikeState",
    "SessionStore",
    "StoredSession",
]
