"""Dashboard statistics for an author."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from app.repositories import BlogRepository
from app.schemas.blog import DashboardStats
from app.utils.helpers import utc_now


def current_month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """
    First and last instant of the UTC calendar month containing ``now``.

    Args:
        now: Reference time; naive values are taken as UTC

    Returns:
        tuple[datetime, datetime]: Inclusive start and end of the month

    Examples
    --------
    >>> current_month_bounds(datetime(2024, 2, 10, tzinfo=UTC))[1].day
    29
    """
    now = now.replace(tzinfo=UTC) if now.tzinfo is None else now.astimezone(UTC)
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        next_start = start.replace(year=start.year + 1, month=1)
    else:
        next_start = start.replace(month=start.month + 1)
    return start, next_start - timedelta(microseconds=1)


class DashboardService:
    def __init__(self, blog_repo: BlogRepository) -> None:
        self.blog_repo = blog_repo

    async def stats(self, user_id: UUID, now: datetime | None = None) -> DashboardStats:
        """
        Aggregate totals over all of the user's blogs, whatever their status.

        Args:
            user_id: Author UUID
            now: Reference time for "this month", defaults to the current time

        Returns:
            DashboardStats: All zeros for a user without blogs
        """
        month_start, month_end = current_month_bounds(now or utc_now())
        totals = await self.blog_repo.author_stats(user_id, month_start, month_end)
        return DashboardStats(**totals)
