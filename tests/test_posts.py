"""Post publishing, editing, browsing and slug generation."""

import pytest

from inkwell.modules.posts import slugify

POST = {
    "title": "Hello, World! 2024",
    "content": "First article",
    "category": "pendidikan",
    "image": "https://example.com/cover.png",
}


@pytest.mark.parametrize(
    ("title", "slug"),
    [
        ("Hello, World! 2024", "hello-world-2024"),
        ("  Spaces   everywhere  ", "spaces-everywhere"),
        ("Ünïcode & symbols!!", "ncode-symbols"),
        ("already-hyphenated title", "alreadyhyphenated-title"),
    ],
)
def test_slugify(title, slug):
    assert slugify(title) == slug


async def _create(client, member, **overrides):
    response = await client.post("/api/posts/create", json={**POST, **overrides}, headers=member.headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreate:
    async def test_admin_creates_post_with_slug_and_author(self, client, admin):
        post = await _create(client, admin)
        assert post["slug"] == "hello-world-2024"
        assert post["author_name"] == "chiefadmin"
        assert post["user_id"] == admin.id

    async def test_regular_user_cannot_create(self, client, user):
        response = await client.post("/api/posts/create", json=POST, headers=user.headers)
        assert response.status_code == 403

    async def test_missing_image(self, client, admin):
        response = await client.post("/api/posts/create", json={**POST, "image": None}, headers=admin.headers)
        assert response.status_code == 400

    async def test_unknown_category(self, client, admin):
        response = await client.post("/api/posts/create", json={**POST, "category": "sports"}, headers=admin.headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid category"

    async def test_duplicate_title(self, client, admin):
        await _create(client, admin)
        response = await client.post("/api/posts/create", json=POST, headers=admin.headers)
        assert response.status_code == 409


class TestUpdate:
    async def test_title_change_regenerates_slug(self, client, admin):
        post = await _create(client, admin)
        response = await client.put(
            f"/api/posts/update/{post['id']}",
            json={"title": "A Brand New Title"},
            headers=admin.headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["slug"] == "a-brand-new-title"
        assert body["content"] == POST["content"]

    async def test_owner_check(self, client, admin, user):
        post = await _create(client, admin)
        response = await client.put(f"/api/posts/update/{post['id']}", json={"content": "x"}, headers=user.headers)
        assert response.status_code == 403

    async def test_empty_update(self, client, admin):
        post = await _create(client, admin)
        response = await client.put(f"/api/posts/update/{post['id']}", json={}, headers=admin.headers)
        assert response.status_code == 400

    async def test_invalid_category(self, client, admin):
        post = await _create(client, admin)
        response = await client.put(
            f"/api/posts/update/{post['id']}",
            json={"category": "gossip"},
            headers=admin.headers,
        )
        assert response.status_code == 400

    async def test_missing_post(self, client, admin):
        response = await client.put("/api/posts/update/missing", json={"content": "x"}, headers=admin.headers)
        assert response.status_code == 404


class TestBrowse:
    async def test_list_filters_and_counts(self, client, admin):
        await _create(client, admin)
        await _create(client, admin, title="Poem of the Day", category="puisi", content="roses are red")
        await _create(client, admin, title="Economy Today", category="ekonomi")

        response = await client.get("/api/posts/getposts")
        body = response.json()
        assert body["total_posts"] == 3
        assert body["last_month_posts"] == 3
        assert body["posts"][0]["title"] == "Economy Today"

        response = await client.get("/api/posts/getposts", params={"category": "puisi"})
        assert [post["title"] for post in response.json()["posts"]] == ["Poem of the Day"]

        response = await client.get("/api/posts/getposts", params={"search_term": "ROSES"})
        assert response.json()["total_posts"] == 1

        response = await client.get("/api/posts/getposts", params={"limit": 1, "start_index": 1, "order": "asc"})
        assert [post["title"] for post in response.json()["posts"]] == ["Poem of the Day"]

    async def test_by_slug_with_neighbours(self, client, admin):
        await _create(client, admin, title="First")
        await _create(client, admin, title="Second")
        await _create(client, admin, title="Third")

        response = await client.get("/api/posts/post/second")
        assert response.status_code == 200
        body = response.json()
        assert body["post"]["title"] == "Second"
        assert body["previous"] == {"title": "First", "slug": "first"}
        assert body["next"] == {"title": "Third", "slug": "third"}

        body = (await client.get("/api/posts/post/first")).json()
        assert body["previous"] is None

    async def test_missing_slug(self, client):
        response = await client.get("/api/posts/post/nothing-here")
        assert response.status_code == 404

    async def test_get_by_id(self, client, admin):
        post = await _create(client, admin)
        response = await client.get(f"/api/posts/getpost/{post['id']}")
        assert response.json()["slug"] == "hello-world-2024"


class TestDelete:
    async def test_delete_removes_comments(self, client, admin, user):
        post = await _create(client, admin)
        response = await client.post(
            "/api/comments/create",
            json={"content": "nice", "post_id": post["id"]},
            headers=user.headers,
        )
        assert response.status_code == 201

        response = await client.delete(f"/api/posts/deleteposts/{post['id']}", headers=user.headers)
        assert response.status_code == 403

        response = await client.delete(f"/api/posts/deleteposts/{post['id']}", headers=admin.headers)
        assert response.status_code == 200
        assert (await client.get(f"/api/posts/getpost/{post['id']}")).status_code == 404
        assert (await client.get("/api/comments/comments", headers=admin.headers)).json()["total_comments"] == 0
