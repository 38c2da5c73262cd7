"""
tests.test_admin_api

HTTP-level authoring flows: guard redirects, sign-in, editing, publishing, deletion.
"""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from blog_cms.api.app import create_app
from blog_cms.settings import Settings

ADMIN_EMAIL = "admin@blog.test"
ADMIN_PASSWORD = "s3cret"


@pytest_asyncio.fixture
async def app(tmp_path):
    settings = Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        jwt_secret="api-test-secret-that-is-long-enough-for-hs256",
        bootstrap_admin_email=ADMIN_EMAIL,
        bootstrap_admin_password=ADMIN_PASSWORD,
        bootstrap_admin_username="avinash",
    )
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def _login(client: httpx.AsyncClient, email: str, password: str, **extra) -> httpx.Response:
    r = await client.post("/admin/login", json={"email": email, "password": password, **extra})
    # Tests authenticate explicitly with the bearer header.
    client.cookies.clear()
    return r


@pytest_asyncio.fixture
async def admin_headers(client) -> dict[str, str]:
    r = await _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.mark.asyncio
async def test_anonymous_admin_request_redirects_to_login(client) -> None:
    r = await client.get("/admin/posts")

    assert r.status_code == 303
    assert r.headers["location"] == "/admin/login?next=%2Fadmin%2Fposts"
    assert r.json()["return_to"] == "/admin/posts"


@pytest.mark.asyncio
async def test_login_returns_to_carried_location(client) -> None:
    r = await client.get("/admin/login", params={"next": "/admin/posts"})
    assert r.json() == {"next": "/admin/posts"}

    r = await _login(client, ADMIN_EMAIL, ADMIN_PASSWORD, next="/admin/posts")

    assert r.status_code == 200
    body = r.json()
    assert body["redirect_to"] == "/admin/posts"
    assert body["is_admin"] is True
    assert body["username"] == "avinash"


@pytest.mark.asyncio
@pytest.mark.parametrize("carried", ["https://evil.example/", "//evil.example", "/\\evil.example"])
async def test_login_ignores_offsite_return_location(client, carried: str) -> None:
    r = await _login(client, ADMIN_EMAIL, ADMIN_PASSWORD, next=carried)
    assert r.json()["redirect_to"] == "/admin"


@pytest.mark.asyncio
async def test_bad_credentials_are_unauthorized(client) -> None:
    r = await _login(client, ADMIN_EMAIL, "wrong")
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid login credentials"


@pytest.mark.asyncio
async def test_session_cookie_authenticates(client) -> None:
    r = await client.post(
        "/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert r.status_code == 200

    r = await client.get("/admin/me")
    assert r.status_code == 200
    assert r.json()["email"] == ADMIN_EMAIL


@pytest.mark.asyncio
async def test_non_admin_is_sent_home(app, client) -> None:
    await app.state.auth_backend.create_user(
        email="reader@blog.test", password="reader-pass", username="reader"
    )
    r = await _login(client, "reader@blog.test", "reader-pass")
    headers = {"Authorization": f"Bearer {r.json()['access_token']}"}

    r = await client.get("/admin/posts", headers=headers)
    assert r.status_code == 303
    assert r.headers["location"] == "/"

    r = await client.get("/admin/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["is_admin"] is False


@pytest.mark.asyncio
async def test_create_publish_and_read_publicly(client, admin_headers) -> None:
    r = await client.post(
        "/admin/posts",
        json={"title": "Hello World", "content": "# Hi\n\nSome *text*", "excerpt": " "},
        headers=admin_headers,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["redirect_to"] == "/admin/posts"
    post = body["post"]
    assert post["slug"] == "hello-world"
    assert post["excerpt"] is None
    assert post["published"] is False

    # Drafts are invisible to readers.
    assert (await client.get("/post/hello-world")).status_code == 404
    assert (await client.get("/")).json() == []

    r = await client.post(f"/admin/posts/{post['id']}/toggle-publish", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["changed"] is True
    assert r.json()["post"]["published"] is True

    r = await client.get("/post/hello-world")
    assert r.status_code == 200
    rendered = r.json()["rendered"]
    assert rendered["title"] == "Hello World"
    assert "<em>text</em>" in rendered["content_html"]
    assert [p["slug"] for p in (await client.get("/")).json()] == ["hello-world"]

    r = await client.get("/admin", headers=admin_headers)
    assert r.json() == {
        "username": "avinash",
        "total_posts": 1,
        "published_posts": 1,
        "draft_posts": 0,
    }


@pytest.mark.asyncio
async def test_edit_existing_post(client, admin_headers) -> None:
    r = await client.post(
        "/admin/posts", json={"title": "Original", "content": "v1"}, headers=admin_headers
    )
    post = r.json()["post"]

    r = await client.get(f"/admin/posts/{post['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["is_new"] is False
    assert r.json()["content"] == "v1"

    r = await client.put(
        f"/admin/posts/{post['id']}",
        json={"title": "Renamed", "content": "v2"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    updated = r.json()["post"]
    assert updated["title"] == "Renamed"
    assert updated["slug"] == "original"
    assert updated["created_at"] == post["created_at"]
    assert updated["author_id"] == post["author_id"]


@pytest.mark.asyncio
async def test_editing_unknown_post_is_not_found(client, admin_headers) -> None:
    r = await client.get(
        "/admin/posts/00000000-0000-0000-0000-000000000000", headers=admin_headers
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_slug_and_validation_errors(client, admin_headers) -> None:
    r = await client.post("/admin/posts", json={"title": "Same"}, headers=admin_headers)
    assert r.status_code == 201

    r = await client.post("/admin/posts", json={"title": "Same"}, headers=admin_headers)
    assert r.status_code == 400
    assert "slug" in r.json()["detail"]

    r = await client.post("/admin/posts", json={"title": "   "}, headers=admin_headers)
    assert r.status_code == 422
    assert r.json()["detail"] == "Title is required"

    assert len((await client.get("/admin/posts", headers=admin_headers)).json()) == 1


@pytest.mark.asyncio
async def test_delete_requires_confirmation(client, admin_headers) -> None:
    r = await client.post("/admin/posts", json={"title": "Doomed"}, headers=admin_headers)
    post_id = r.json()["post"]["id"]

    r = await client.delete(f"/admin/posts/{post_id}", headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Delete cancelled"
    assert len((await client.get("/admin/posts", headers=admin_headers)).json()) == 1

    r = await client.delete(
        f"/admin/posts/{post_id}", params={"confirm": "true"}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json() == {"deleted": post_id}
    assert (await client.get("/admin/posts", headers=admin_headers)).json() == []


@pytest.mark.asyncio
async def test_preview_does_not_persist(client, admin_headers) -> None:
    r = await client.post(
        "/admin/posts/preview", json={"content": "**bold**"}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["title"] == "Untitled Post"
    assert "<strong>bold</strong>" in r.json()["content_html"]
    assert (await client.get("/admin/posts", headers=admin_headers)).json() == []


@pytest.mark.asyncio
async def test_logout_navigates_to_login(client) -> None:
    await client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    r = await client.post("/admin/logout")
    assert r.status_code == 200
    assert r.json() == {"redirect_to": "/admin/login"}

    r = await client.get("/admin/posts")
    assert r.status_code == 303
