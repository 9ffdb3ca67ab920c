"""
Pytest tests for the /users endpoints (FastAPI TestClient, fresh store per test).
"""

from __future__ import annotations

import pytest

from user_management.config import Settings

ANN = {"name": "Ann", "email": "ann@x.com"}
BO = {"name": "Bo", "email": "bo@x.com"}


def test_list_empty(client):
    r = client.get("/users")
    assert r.status_code == 200
    assert r.json() == []


def test_create_then_get(client):
    """POST returns 201 and the created user; GET by id returns the same name/email."""
    r = client.post("/users", json=ANN)
    assert r.status_code == 201
    created = r.json()
    assert created == {"id": 0, **ANN}

    r2 = client.get(f"/users/{created['id']}")
    assert r2.status_code == 200
    assert r2.json() == created


def test_successive_creates_increment_ids(client):
    first = client.post("/users", json=ANN).json()
    second = client.post("/users", json=BO).json()
    assert second["id"] == first["id"] + 1
    listed = client.get("/users").json()
    assert [u["name"] for u in listed] == ["Ann", "Bo"]


def test_ids_increase_after_deletes(client):
    ids = [client.post("/users", json=ANN).json()["id"] for _ in range(3)]
    assert client.delete(f"/users/{ids[-1]}").status_code == 204
    new_id = client.post("/users", json=BO).json()["id"]
    assert new_id > max(ids)


def test_get_missing_is_404(client):
    r = client.get("/users/999")
    assert r.status_code == 404
    assert "999" in r.json()["detail"]


def test_get_non_integer_id_is_400(client):
    r = client.get("/users/abc")
    assert r.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Ann", "email": "ann@x.com", "age": 30},
        {"name": "", "email": "ann@x.com"},
        {"name": "Ann", "email": "a@b"},
        {"name": "Ann"},
        {"name": None, "email": "ann@x.com"},
        ["Ann", "ann@x.com"],
    ],
)
def test_create_invalid_is_400(client, user_store, payload):
    r = client.post("/users", json=payload)
    assert r.status_code == 400
    assert "detail" in r.json()
    assert len(user_store) == 0


def test_create_malformed_json_is_400(client, user_store):
    r = client.post("/users", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert len(user_store) == 0


def test_create_without_body_is_400(client):
    r = client.post("/users")
    assert r.status_code == 400


def test_update_existing(client):
    created = client.post("/users", json=ANN).json()
    r = client.put(f"/users/{created['id']}", json={"name": "Ann Lee", "email": "lee@x.com"})
    assert r.status_code == 200
    assert r.json() == {"id": created["id"], "name": "Ann Lee", "email": "lee@x.com"}
    assert client.get(f"/users/{created['id']}").json()["name"] == "Ann Lee"


def test_update_missing_is_404_and_store_unchanged(client, user_store):
    client.post("/users", json=ANN)
    before = user_store.list_users()
    r = client.put("/users/999", json=BO)
    assert r.status_code == 404
    assert user_store.list_users() == before


def test_update_missing_checked_before_body(client):
    """Unknown id wins over an invalid body."""
    r = client.put("/users/999", json={"name": "", "extra": 1})
    assert r.status_code == 404


def test_update_extra_fields_is_400(client, user_store):
    created = client.post("/users", json=ANN).json()
    r = client.put(f"/users/{created['id']}", json={**BO, "role": "admin"})
    assert r.status_code == 400
    assert user_store.get_user(created["id"]).name == "Ann"


def test_update_invalid_email_is_400(client):
    created = client.post("/users", json=ANN).json()
    r = client.put(f"/users/{created['id']}", json={"name": "Ann", "email": "a b@c.com"})
    assert r.status_code == 400


def test_update_null_field_is_rejected_not_coalesced(client, user_store):
    created = client.post("/users", json=ANN).json()
    r = client.put(f"/users/{created['id']}", json={"name": "New", "email": None})
    assert r.status_code == 400
    assert user_store.get_user(created["id"]).name == "Ann"


def test_update_noop_rejected_by_default(client):
    created = client.post("/users", json=ANN).json()
    r = client.put(f"/users/{created['id']}", json=ANN)
    assert r.status_code == 400
    assert "No changes" in r.json()["detail"]


@pytest.mark.parametrize("settings", [Settings(reject_noop_update=False)])
def test_update_noop_allowed_when_disabled(client, settings):
    """With reject_noop_update off, an unchanged PUT succeeds."""
    assert settings.reject_noop_update is False
    created = client.post("/users", json=ANN).json()
    r = client.put(f"/users/{created['id']}", json=ANN)
    assert r.status_code == 200
    assert r.json() == created


def test_delete_twice(client):
    """First DELETE is 204 with no body, second is 404."""
    created = client.post("/users", json=ANN).json()
    r1 = client.delete(f"/users/{created['id']}")
    assert r1.status_code == 204
    assert r1.content == b""
    r2 = client.delete(f"/users/{created['id']}")
    assert r2.status_code == 404
    assert client.get(f"/users/{created['id']}").status_code == 404


def test_health_is_public(anon_client):
    r = anon_client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_unknown_route_is_404(client):
    r = client.get("/nope")
    assert r.status_code == 404


def test_module_level_app_serves_requests():
    """The uvicorn entrypoint app is wired with the same routes and middleware."""
    from fastapi.testclient import TestClient

    from user_management.api_server.app import app
    from user_management.database import InMemoryUserStore

    assert isinstance(app.state.user_store, InMemoryUserStore)
    c = TestClient(app)
    assert c.get("/health").status_code == 200
    assert c.get("/users").status_code == 401
    assert c.get("/users", headers={"Authorization": "Bearer secret"}).status_code == 200
