# tests/services/test_query_service.py
"""Tests for app/services/query.py module."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from app.errors import ValidationError
from app.repositories import BlogFilter, BlogSort
from app.services import BlogQueryService, split_terms
from app.utils.pagination import PageParams


class TestSplitTerms:
    """Tests for split_terms function."""

    def test_splits_on_any_whitespace(self) -> None:
        assert split_terms("  alice \t tech\n") == ("alice", "tech")

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_blank_query(self, query: str | None) -> None:
        assert split_terms(query) == ()


class TestBuildFilter:
    """Tests for BlogQueryService.build_filter."""

    def test_defaults_to_published(self) -> None:
        assert BlogQueryService.build_filter() == BlogFilter(status="published")

    def test_blank_status_means_published(self) -> None:
        assert BlogQueryService.build_filter(status="").status == "published"

    @pytest.mark.parametrize("category", [None, "", "all"])
    def test_any_category(self, category: str | None) -> None:
        assert BlogQueryService.build_filter(category=category).category is None

    def test_exact_category_and_status(self) -> None:
        filters = BlogQueryService.build_filter(status="draft", category="Food")
        assert filters.status == "draft"
        assert filters.category == "Food"

    def test_author_id_is_parsed(self) -> None:
        author_id = uuid4()
        assert BlogQueryService.build_filter(author=str(author_id)).author_id == author_id

    def test_malformed_author_id(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            BlogQueryService.build_filter(author="not-a-uuid")

        assert exc_info.value.status_code == 400
        assert exc_info.value.errors[0]["field"] == "author"


class TestQueries:
    """Tests for the repository calls made by BlogQueryService."""

    @pytest.mark.asyncio
    async def test_search_adds_terms_to_filters(self, mock_blog_repo: MagicMock) -> None:
        service = BlogQueryService(mock_blog_repo)
        filters = BlogFilter(category="Technology")
        page = PageParams()

        await service.search("alice  tech", filters, page)

        mock_blog_repo.find.assert_awaited_once_with(
            BlogFilter(category="Technology", terms=("alice", "tech")),
            page,
            None,
        )

    @pytest.mark.asyncio
    async def test_my_blogs_has_no_status_by_default(self, mock_blog_repo: MagicMock) -> None:
        service = BlogQueryService(mock_blog_repo)
        author_id = uuid4()
        page = PageParams(page=2, limit=5)

        await service.my_blogs(author_id, page)

        mock_blog_repo.find.assert_awaited_once_with(
            BlogFilter(status=None, author_id=author_id),
            page,
            BlogSort(),
        )

    @pytest.mark.asyncio
    async def test_my_blogs_status_filter(self, mock_blog_repo: MagicMock) -> None:
        service = BlogQueryService(mock_blog_repo)

        await service.my_blogs(uuid4(), PageParams(), "draft")

        filters = mock_blog_repo.find.await_args.args[0]
        assert filters.status == "draft"
