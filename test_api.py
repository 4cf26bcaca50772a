"""
HTTP-level tests: routing, auth and error mapping.
Run: pytest test_api.py
"""

import inspect
from unittest.mock import MagicMock

from fastapi.routing import APIRoute
from sqlalchemy.exc import OperationalError

from blogcms.api import deps
from blogcms.core.exceptions import StorageError
from blogcms.crud import crud_post, crud_tag
from blogcms.main import app
from blogcms.models.post import PostStatus
from blogcms.schemas import PostUpdate


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    assert client.get("/health").json() == {"status": "healthy"}


def test_login_returns_token(client, admin_user):
    response = client.post(
        "/api/v1/auth/login",
        data={"username": "admin@example.com", "password": "Admin@12345"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "admin@example.com"

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "admin"


def test_login_wrong_password(client, admin_user):
    response = client.post(
        "/api/v1/auth/login/json",
        json={"email": "admin@example.com", "password": "nope-nope"},
    )
    assert response.status_code == 401


def test_admin_requires_token(client):
    assert client.get("/api/v1/admin/posts").status_code == 401


def test_admin_requires_admin_role(client, user_headers):
    assert client.get("/api/v1/admin/posts", headers=user_headers).status_code == 403


def test_admin_creates_post_with_tags(client, admin_headers, make_author, make_category, make_tag):
    author, category = make_author(), make_category()
    tag = make_tag("Python")

    response = client.post(
        "/api/v1/admin/posts",
        headers=admin_headers,
        json={
            "title": "Hello API",
            "content": "Some content here",
            "author_id": author.id,
            "category_id": category.id,
            "tag_ids": [tag.id, tag.id],
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "hello-api"
    assert body["status"] == "DRAFT"
    assert [t["slug"] for t in body["tags"]] == ["python"]
    assert body["author"]["id"] == author.id


def test_duplicate_slug_is_bad_request(client, admin_headers, make_post):
    post = make_post("Taken")
    response = client.post(
        "/api/v1/admin/posts",
        headers=admin_headers,
        json={
            "title": "Taken",
            "content": "again",
            "author_id": post.author_id,
            "category_id": post.category_id,
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "A post with this slug already exists"


def test_unknown_reference_is_bad_request(client, admin_headers, make_category):
    category = make_category()
    response = client.post(
        "/api/v1/admin/posts",
        headers=admin_headers,
        json={"title": "Orphan", "content": "x", "author_id": 999, "category_id": category.id},
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid reference")


def test_admin_sync_tags_endpoint(client, admin_headers, make_post, make_tag):
    a, b = make_tag("A"), make_tag("B")
    post = make_post("Retag", tag_ids=[a.id])

    response = client.put(
        f"/api/v1/admin/posts/{post.id}/tags",
        headers=admin_headers,
        json={"tag_ids": [b.id]},
    )

    assert response.status_code == 200
    assert [t["id"] for t in response.json()["tags"]] == [b.id]


def test_invalid_status_transition_is_bad_request(client, admin_headers, make_post):
    post = make_post("Drafted", status=PostStatus.DRAFT)
    response = client.put(
        f"/api/v1/admin/posts/{post.id}",
        headers=admin_headers,
        json={"status": "CORRECTED"},
    )
    assert response.status_code == 400


def test_missing_post_is_not_found(client, admin_headers):
    assert client.get("/api/v1/posts/does-not-exist").status_code == 404
    assert client.get("/api/v1/admin/posts/999", headers=admin_headers).status_code == 404


def test_public_listing_hides_drafts(client, make_post, db):
    live = make_post("Live post")
    make_post("Draft post", status=PostStatus.DRAFT)

    response = client.get("/api/v1/posts")

    assert response.status_code == 200
    body = response.json()
    assert [p["id"] for p in body["posts"]] == [live.id]
    assert body["total"] == 1
    assert body["has_more"] is False
    assert client.get("/api/v1/posts/draft-post").status_code == 404


def test_public_post_counts_views(client, make_post):
    make_post("Popular")
    assert client.get("/api/v1/posts/popular").json()["views"] == 1
    assert client.get("/api/v1/posts/popular").json()["views"] == 2


def test_unpublished_post_disappears(client, make_post, db):
    post = make_post("Short lived")
    crud_post.update_post(db, post_id=post.id, post_in=PostUpdate(status=PostStatus.UNPUBLISHED))
    assert client.get("/api/v1/posts/short-lived").status_code == 404


def test_public_comment_flow(client, admin_headers, make_post):
    make_post("Chatty")
    created = client.post(
        "/api/v1/posts/chatty/comments",
        json={"content": "Great read", "author_name": "Ann", "author_email": "ann@example.com"},
    )
    assert created.status_code == 201
    comment_id = created.json()["id"]
    assert client.get("/api/v1/posts/chatty/comments").json()["total"] == 0

    approved = client.put(f"/api/v1/admin/comments/{comment_id}/approve", headers=admin_headers)
    assert approved.status_code == 200
    assert client.get("/api/v1/posts/chatty/comments").json()["total"] == 1


def test_delete_category_in_use_is_bad_request(client, admin_headers, make_post):
    post = make_post("Anchored")
    response = client.delete(f"/api/v1/admin/categories/{post.category_id}", headers=admin_headers)
    assert response.status_code == 400


def test_settings_endpoints(client, admin_headers):
    response = client.get("/api/v1/settings", params=[("keys", "site_title"), ("keys", "missing")])
    assert response.status_code == 200
    assert response.json()["settings"] == {"site_title": "Blog Template", "missing": ""}

    updated = client.put(
        "/api/v1/admin/settings",
        headers=admin_headers,
        json={"settings": {"site_title": "Renamed"}},
    )
    assert updated.status_code == 200
    assert client.get("/api/v1/settings").json()["settings"]["site_title"] == "Renamed"

    reset = client.post("/api/v1/admin/settings/reset", headers=admin_headers)
    assert reset.json()["settings"]["site_title"] == "Blog Template"


def test_admin_user_management(client, admin_headers, admin_user):
    created = client.post(
        "/api/v1/admin/users",
        headers=admin_headers,
        json={"name": "New", "email": "new@example.com", "password": "Newbie@1234"},
    )
    assert created.status_code == 201

    duplicate = client.post(
        "/api/v1/admin/users",
        headers=admin_headers,
        json={"name": "Dup", "email": "new@example.com", "password": "Newbie@1234"},
    )
    assert duplicate.status_code == 400

    self_delete = client.delete(f"/api/v1/admin/users/{admin_user.id}", headers=admin_headers)
    assert self_delete.status_code == 400


def test_database_failure_is_internal_error(client):
    broken = MagicMock()
    failure = OperationalError("SELECT categories", {}, Exception("database is locked"))
    broken.execute.side_effect = failure
    broken.scalars.side_effect = failure
    broken.scalar.side_effect = failure
    app.dependency_overrides[deps.get_db] = lambda: broken

    response = client.get("/api/v1/categories")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal database error"}


def test_storage_error_is_internal_error(client, admin_headers, monkeypatch):
    def fail(*args, **kwargs):
        raise StorageError()

    monkeypatch.setattr(crud_tag, "create_tag", fail)
    response = client.post("/api/v1/admin/tags", headers=admin_headers, json={"name": "Broken"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal storage error"}


def test_database_bound_handlers_run_in_threadpool():
    handlers = [route for route in app.routes if isinstance(route, APIRoute)]

    assert handlers
    assert [route.path for route in handlers if inspect.iscoroutinefunction(route.endpoint)] == []
