import uuid

from fastapi.testclient import TestClient

import main
from users import repository


def test_create_then_list_user(client, store):
    response = client.post("/api/users", data={"username": "alice"})
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "alice"
    assert body["id"]
    uuid.UUID(body["id"])

    response = client.get("/api/users")
    assert response.status_code == 200
    assert response.json() == [{"id": body["id"], "username": "alice"}]


def test_create_user_accepts_json(client, store):
    response = client.post("/api/users", json={"username": "bob"})
    assert response.status_code == 200
    assert response.json()["username"] == "bob"
    assert [row["username"] for row in store.users] == ["bob"]


def test_username_stored_verbatim(client, store):
    response = client.post("/api/users", data={"username": "  Mixed Case  "})
    assert response.status_code == 200
    assert response.json()["username"] == "  Mixed Case  "


def test_list_users_empty(client, store):
    response = client.get("/api/users")
    assert response.status_code == 200
    assert response.json() == []


def test_missing_username_surfaces_storage_error(client, store):
    response = client.post("/api/users", data={})
    assert response.status_code == 500
    assert "not-null" in response.json()["error"]
    assert store.users == []


def test_missing_username_strict_mode(strict_client, store):
    response = strict_client.post("/api/users", data={"username": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "username is required."}
    assert store.users == []


def test_invalid_json_body(client, store):
    response = client.post(
        "/api/users",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_unexpected_error_is_json(store, settings, fake_db, monkeypatch):
    async def broken(db):
        raise RuntimeError("boom")

    monkeypatch.setattr(repository, "list_users", broken)

    app = main.create_app(settings, database=fake_db)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/users")
    assert response.status_code == 500
    assert response.json() == {"error": "boom"}
