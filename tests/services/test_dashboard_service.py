# tests/services/test_dashboard_service.py
"""Tests for app/services/dashboard.py module."""

from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from app.schemas import DashboardStats
from app.services import DashboardService, current_month_bounds


class TestCurrentMonthBounds:
    """Tests for current_month_bounds function."""

    def test_mid_month(self) -> None:
        start, end = current_month_bounds(datetime(2025, 6, 15, 12, 30, tzinfo=UTC))

        assert start == datetime(2025, 6, 1, tzinfo=UTC)
        assert end == datetime(2025, 6, 30, 23, 59, 59, 999999, tzinfo=UTC)

    def test_december_rolls_into_next_year(self) -> None:
        start, end = current_month_bounds(datetime(2025, 12, 31, 23, 0, tzinfo=UTC))

        assert start == datetime(2025, 12, 1, tzinfo=UTC)
        assert end == datetime(2025, 12, 31, 23, 59, 59, 999999, tzinfo=UTC)

    def test_leap_february(self) -> None:
        _, end = current_month_bounds(datetime(2024, 2, 10, tzinfo=UTC))
        assert end.day == 29

    def test_naive_time_is_utc(self) -> None:
        start, _ = current_month_bounds(datetime(2025, 3, 1, 0, 0))
        assert start == datetime(2025, 3, 1, tzinfo=UTC)

    def test_other_offsets_are_converted(self) -> None:
        # 1 April 01:00 at UTC+2 is still March in UTC
        start, _ = current_month_bounds(
            datetime(2025, 4, 1, 1, 0, tzinfo=timezone(timedelta(hours=2))),
        )
        assert start == datetime(2025, 3, 1, tzinfo=UTC)


class TestStats:
    """Tests for DashboardService.stats."""

    @pytest.mark.asyncio
    async def test_passes_month_bounds_and_maps_totals(self, mock_blog_repo: MagicMock) -> None:
        mock_blog_repo.author_stats.return_value = {
            "total_blogs": 3,
            "total_views": 42,
            "blogs_this_month": 1,
            "total_likes": 5,
            "total_comments": 2,
        }
        user_id = uuid4()
        now = datetime(2025, 6, 15, tzinfo=UTC)

        stats = await DashboardService(mock_blog_repo).stats(user_id, now)

        assert stats == DashboardStats(
            total_blogs=3,
            total_views=42,
            blogs_this_month=1,
            total_likes=5,
            total_comments=2,
        )
        mock_blog_repo.author_stats.assert_awaited_once_with(
            user_id,
            *current_month_bounds(now),
        )

    def test_serializes_with_camel_case_keys(self) -> None:
        assert DashboardStats().model_dump(by_alias=True) == {
            "totalBlogs": 0,
            "totalLikes": 0,
            "totalComments": 0,
            "totalViews": 0,
            "blogsThisMonth": 0,
        }
