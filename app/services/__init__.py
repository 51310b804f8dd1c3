from app.services.auth import AuthService
from app.services.blog import BlogService
from app.services.dashboard import DashboardService, current_month_bounds
from app.services.query import BlogQueryService, split_terms

__all__ = [
    "AuthService",
    "BlogQueryService",
    "BlogService",
    "DashboardService",
    "current_month_bounds",
    "split_terms",
]
