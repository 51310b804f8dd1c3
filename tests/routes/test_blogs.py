# tests/routes/test_blogs.py
"""Tests for app/routes/blog.py module."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.models import UserDB


class TestCreateBlog:
    """Tests for POST /api/blogs."""

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.post("/api/blogs", json={"title": "T", "content": "C"})

        assert response.status_code == 401
        assert response.json()["message"] == "Access denied. No token provided."

    @pytest.mark.asyncio
    async def test_creates_with_derived_fields(
        self,
        client: AsyncClient,
        alice: UserDB,
        alice_headers: dict[str, str],
    ) -> None:
        response = await client.post(
            "/api/blogs",
            json={"title": "  Hello  ", "content": "word " * 151, "tags": "python, fastapi"},
            headers=alice_headers,
        )

        assert response.status_code == 201, response.text
        body = response.json()
        assert body["message"] == "Blog created successfully"
        blog = body["blog"]
        assert blog["title"] == "Hello"
        assert blog["author"]["id"] == str(alice.uuid)
        assert blog["author"]["fullName"] == "Alice Smith"
        assert blog["category"] == "Others"
        assert blog["status"] == "published"
        assert blog["tags"] == ["python", "fastapi"]
        assert blog["readTime"] == 2
        assert blog["excerpt"].endswith("...")
        assert blog["views"] == 0
        assert blog["likesCount"] == 0
        assert blog["commentsCount"] == 0

    @pytest.mark.asyncio
    async def test_author_in_body_is_ignored(
        self,
        client: AsyncClient,
        alice: UserDB,
        bob: UserDB,
        alice_headers: dict[str, str],
    ) -> None:
        response = await client.post(
            "/api/blogs",
            json={"title": "T", "content": "C", "author": str(bob.uuid)},
            headers=alice_headers,
        )

        assert response.json()["blog"]["author"]["id"] == str(alice.uuid)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("payload", "field"),
        [
            ({"content": "C"}, "title"),
            ({"title": "T"}, "content"),
            ({"title": "   ", "content": "C"}, "title"),
            ({"title": "T", "content": "C", "category": "Gossip"}, "category"),
            ({"title": "T" * 201, "content": "C"}, "title"),
        ],
    )
    async def test_validation(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        payload: dict,
        field: str,
    ) -> None:
        response = await client.post("/api/blogs", json=payload, headers=alice_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert field in [error["field"] for error in body["errors"]]


class TestListBlogs:
    """Tests for GET /api/blogs."""

    @pytest.mark.asyncio
    async def test_published_only_newest_first(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        await create_blog(alice_headers, title="First")
        await create_blog(alice_headers, title="Draft", status="draft")
        await create_blog(alice_headers, title="Second")

        response = await client.get("/api/blogs")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [blog["title"] for blog in data["blogs"]] == ["Second", "First"]
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalBlogs": 2,
            "hasNext": False,
            "hasPrev": False,
        }

    @pytest.mark.asyncio
    async def test_second_page(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        for i in range(12):
            await create_blog(alice_headers, title=f"Post {i}")

        response = await client.get("/api/blogs", params={"page": 2, "limit": 5})

        data = response.json()["data"]
        assert len(data["blogs"]) == 5
        assert data["pagination"] == {
            "currentPage": 2,
            "totalPages": 3,
            "totalBlogs": 12,
            "hasNext": True,
            "hasPrev": True,
        }

    @pytest.mark.asyncio
    async def test_invalid_paging_values_fall_back(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        await create_blog(alice_headers)

        response = await client.get("/api/blogs", params={"page": "abc", "limit": "-3"})

        assert response.status_code == 200
        pagination = response.json()["data"]["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["totalBlogs"] == 1

    @pytest.mark.asyncio
    async def test_empty_result(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs")

        data = response.json()["data"]
        assert data["blogs"] == []
        assert data["pagination"]["totalPages"] == 0
        assert data["pagination"]["hasNext"] is False

    @pytest.mark.asyncio
    async def test_category_filter_and_all(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        await create_blog(alice_headers, category="Food")
        await create_blog(alice_headers, category="Travel")

        food = await client.get("/api/blogs", params={"category": "Food"})
        every = await client.get("/api/blogs", params={"category": "all"})

        assert food.json()["data"]["pagination"]["totalBlogs"] == 1
        assert every.json()["data"]["pagination"]["totalBlogs"] == 2

    @pytest.mark.asyncio
    async def test_author_filter(
        self,
        client: AsyncClient,
        bob: UserDB,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        await create_blog(alice_headers)
        await create_blog(bob_headers)

        response = await client.get("/api/blogs", params={"author": str(bob.uuid)})

        blogs = response.json()["data"]["blogs"]
        assert [blog["author"]["id"] for blog in blogs] == [str(bob.uuid)]

    @pytest.mark.asyncio
    async def test_malformed_author(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs", params={"author": "nope"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "author"

    @pytest.mark.asyncio
    async def test_search_requires_every_term(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        await create_blog(alice_headers, title="Gardening", category="Technology")
        await create_blog(alice_headers, title="Cooking", category="Food")
        await create_blog(bob_headers, title="Tech news", category="Technology")

        response = await client.get("/api/blogs", params={"search": "alice tech"})

        blogs = response.json()["data"]["blogs"]
        assert [blog["title"] for blog in blogs] == ["Gardening"]

    @pytest.mark.asyncio
    async def test_blank_search_lists_everything(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        await create_blog(alice_headers)

        response = await client.get("/api/blogs", params={"search": "   "})

        assert response.json()["data"]["pagination"]["totalBlogs"] == 1

    @pytest.mark.asyncio
    async def test_sort_by_title(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        for title in ("Bravo", "Alpha", "Charlie"):
            await create_blog(alice_headers, title=title)

        response = await client.get("/api/blogs", params={"sortBy": "title", "sortOrder": "asc"})

        titles = [blog["title"] for blog in response.json()["data"]["blogs"]]
        assert titles == ["Alpha", "Bravo", "Charlie"]


class TestGetBlog:
    """Tests for GET /api/blogs/{blog_id}."""

    @pytest.mark.asyncio
    async def test_each_read_counts_a_view(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        first = await client.get(f"/api/blogs/{blog['id']}")
        second = await client.get(f"/api/blogs/{blog['id']}")

        assert first.json()["blog"]["views"] == 1
        assert second.json()["blog"]["views"] == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("blog_id", ["not-a-uuid", "123", str(uuid4())])
    async def test_unknown_or_malformed_id(self, client: AsyncClient, blog_id: str) -> None:
        response = await client.get(f"/api/blogs/{blog_id}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Blog not found"}

    @pytest.mark.asyncio
    async def test_is_liked_for_signed_in_viewer(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)
        await client.post(f"/api/blogs/{blog['id']}/like", headers=bob_headers)

        as_bob = await client.get(f"/api/blogs/{blog['id']}", headers=bob_headers)
        as_alice = await client.get(f"/api/blogs/{blog['id']}", headers=alice_headers)
        anonymous = await client.get(f"/api/blogs/{blog['id']}")
        bad_token = await client.get(
            f"/api/blogs/{blog['id']}",
            headers={"Authorization": "Bearer garbage"},
        )

        assert as_bob.json()["blog"]["isLiked"] is True
        assert as_alice.json()["blog"]["isLiked"] is False
        assert anonymous.json()["blog"]["isLiked"] is None
        assert bad_token.status_code == 200
        assert bad_token.json()["blog"]["likesCount"] == 1


class TestUpdateBlog:
    """Tests for PUT /api/blogs/{blog_id}."""

    @pytest.mark.asyncio
    async def test_author_updates(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers, tags=["keep"])

        response = await client.put(
            f"/api/blogs/{blog['id']}",
            json={"title": "Renamed", "status": "archived"},
            headers=alice_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Blog updated successfully"
        assert body["blog"]["title"] == "Renamed"
        assert body["blog"]["status"] == "archived"
        assert body["blog"]["tags"] == ["keep"]
        assert body["blog"]["createdAt"] == blog["createdAt"]

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        response = await client.put(
            f"/api/blogs/{blog['id']}",
            json={"title": "Mine now"},
            headers=bob_headers,
        )

        assert response.status_code == 403
        assert response.json()["message"] == "You can only update your own blog posts"

    @pytest.mark.asyncio
    async def test_unknown_blog(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.put(
            f"/api/blogs/{uuid4()}",
            json={"title": "x"},
            headers=alice_headers,
        )

        assert response.status_code == 404


class TestDeleteBlog:
    """Tests for DELETE /api/blogs/{blog_id}."""

    @pytest.mark.asyncio
    async def test_author_deletes(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)
        await client.post(f"/api/blogs/{blog['id']}/like", headers=bob_headers)
        await client.post(
            f"/api/blogs/{blog['id']}/comments",
            json={"content": "hi"},
            headers=bob_headers,
        )

        response = await client.delete(f"/api/blogs/{blog['id']}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Blog deleted successfully"}
        assert (await client.get(f"/api/blogs/{blog['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        response = await client.delete(f"/api/blogs/{blog['id']}", headers=bob_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "You can only delete your own blog posts"
        assert (await client.get(f"/api/blogs/{blog['id']}")).status_code == 200


class TestLikes:
    """Tests for POST /api/blogs/{blog_id}/like."""

    @pytest.mark.asyncio
    async def test_toggle(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        liked = await client.post(f"/api/blogs/{blog['id']}/like", headers=alice_headers)
        unliked = await client.post(f"/api/blogs/{blog['id']}/like", headers=alice_headers)

        assert liked.json() == {
            "success": True,
            "message": "Blog liked successfully",
            "likesCount": 1,
            "isLiked": True,
        }
        assert unliked.json() == {
            "success": True,
            "message": "Blog unliked successfully",
            "likesCount": 0,
            "isLiked": False,
        }

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.post(f"/api/blogs/{uuid4()}/like")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_blog(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.post(f"/api/blogs/{uuid4()}/like", headers=alice_headers)
        assert response.status_code == 404


class TestComments:
    """Tests for the comment endpoints."""

    @pytest.mark.asyncio
    async def test_add_comment(
        self,
        client: AsyncClient,
        bob: UserDB,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        response = await client.post(
            f"/api/blogs/{blog['id']}/comments",
            json={"content": "  Great post!  "},
            headers=bob_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Comment added successfully"
        assert body["commentsCount"] == 1
        assert body["comment"]["content"] == "Great post!"
        assert body["comment"]["user"] == {
            "id": str(bob.uuid),
            "fullName": "Bob Jones",
            "profileImageUrl": None,
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"content": "   "}, {}, None])
    async def test_blank_comment(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
        payload: dict | None,
    ) -> None:
        blog = await create_blog(alice_headers)

        response = await client.post(
            f"/api/blogs/{blog['id']}/comments",
            json=payload,
            headers=alice_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Comment content is required"

    @pytest.mark.asyncio
    async def test_comment_too_long(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        response = await client.post(
            f"/api/blogs/{blog['id']}/comments",
            json={"content": "x" * 501},
            headers=alice_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_length_limit_applies_after_trimming(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        response = await client.post(
            f"/api/blogs/{blog['id']}/comments",
            json={"content": "  " + "x" * 500 + "  "},
            headers=alice_headers,
        )

        assert response.status_code == 201
        assert response.json()["comment"]["content"] == "x" * 500

    @pytest.mark.asyncio
    async def test_delete_permissions(
        self,
        client: AsyncClient,
        create_user,
        auth_headers,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        carol = await create_user(email="carol@example.com", full_name="Carol White")
        carol_headers = auth_headers(carol)
        blog = await create_blog(alice_headers)
        first = await client.post(
            f"/api/blogs/{blog['id']}/comments",
            json={"content": "first"},
            headers=bob_headers,
        )
        second = await client.post(
            f"/api/blogs/{blog['id']}/comments",
            json={"content": "second"},
            headers=bob_headers,
        )
        first_id = first.json()["comment"]["id"]
        second_id = second.json()["comment"]["id"]

        forbidden = await client.delete(
            f"/api/blogs/{blog['id']}/comments/{first_id}",
            headers=carol_headers,
        )
        by_commenter = await client.delete(
            f"/api/blogs/{blog['id']}/comments/{first_id}",
            headers=bob_headers,
        )
        by_blog_author = await client.delete(
            f"/api/blogs/{blog['id']}/comments/{second_id}",
            headers=alice_headers,
        )

        assert forbidden.status_code == 403
        assert forbidden.json()["message"] == (
            "You can only delete your own comments or comments on your blog"
        )
        assert by_commenter.json() == {
            "success": True,
            "message": "Comment deleted successfully",
            "commentsCount": 1,
        }
        assert by_blog_author.json()["commentsCount"] == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_comment(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        create_blog,
    ) -> None:
        blog = await create_blog(alice_headers)

        unknown = await client.delete(
            f"/api/blogs/{blog['id']}/comments/{uuid4()}",
            headers=alice_headers,
        )
        malformed = await client.delete(
            f"/api/blogs/{blog['id']}/comments/oops",
            headers=alice_headers,
        )

        assert unknown.status_code == 404
        assert unknown.json()["message"] == "Comment not found"
        assert malformed.status_code == 404


class TestMyBlogsAndStats:
    """Tests for GET /api/blogs/user/my-blogs and GET /api/blogs/stats."""

    @pytest.mark.asyncio
    async def test_my_blogs_includes_every_status(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        await create_blog(alice_headers, status="draft")
        await create_blog(alice_headers, status="published")
        await create_blog(bob_headers)

        everything = await client.get("/api/blogs/user/my-blogs", headers=alice_headers)
        drafts = await client.get(
            "/api/blogs/user/my-blogs",
            params={"status": "draft"},
            headers=alice_headers,
        )

        assert everything.json()["data"]["pagination"]["totalBlogs"] == 2
        assert drafts.json()["data"]["pagination"]["totalBlogs"] == 1

    @pytest.mark.asyncio
    async def test_my_blogs_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/blogs/user/my-blogs")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_stats_for_new_author(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
    ) -> None:
        response = await client.get("/api/blogs/stats", headers=alice_headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {
                "stats": {
                    "totalBlogs": 0,
                    "totalLikes": 0,
                    "totalComments": 0,
                    "totalViews": 0,
                    "blogsThisMonth": 0,
                },
            },
        }

    @pytest.mark.asyncio
    async def test_stats_totals(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
        create_blog,
    ) -> None:
        published = await create_blog(alice_headers)
        await create_blog(alice_headers, status="draft")
        await client.get(f"/api/blogs/{published['id']}")
        await client.post(f"/api/blogs/{published['id']}/like", headers=bob_headers)
        await client.post(
            f"/api/blogs/{published['id']}/comments",
            json={"content": "hi"},
            headers=bob_headers,
        )

        response = await client.get("/api/blogs/stats", headers=alice_headers)

        assert response.json()["data"]["stats"] == {
            "totalBlogs": 2,
            "totalLikes": 1,
            "totalComments": 1,
            "totalViews": 1,
            "blogsThisMonth": 2,
        }


@pytest.mark.asyncio
async def test_blogs_health(client: AsyncClient) -> None:
    response = await client.get("/api/blogs/health")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Blog routes are working"}
