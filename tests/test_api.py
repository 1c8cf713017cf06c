"""API tests against an in-memory service. /health does not need a service."""

import pytest
from fastapi.testclient import TestClient

from api.formatting import format_list
from api.main import SESSION_HEADER, app, get_service
from jackut.application import JackutService
from jackut.infrastructure import InMemoryCommunityRepository, InMemoryUserRepository


@pytest.fixture
def client():
    service = JackutService(InMemoryUserRepository(), InMemoryCommunityRepository())
    app.dependency_overrides[get_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _login(client, login: str) -> dict:
    r = client.post("/users", json={"name": login.capitalize(), "password": "pw", "login": login})
    assert r.status_code == 201
    r = client.post("/sessions", json={"login": login, "password": "pw"})
    assert r.status_code == 201
    return {SESSION_HEADER: r.json()["session_id"]}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_format_list():
    assert format_list([]) == "{}"
    assert format_list(None) == "{}"
    assert format_list(["bob", "carol"]) == "{bob,carol}"


def test_register_errors_map_to_status(client):
    _login(client, "alice")
    r = client.post("/users", json={"name": "Other", "password": "pw", "login": "alice"})
    assert r.status_code == 409
    assert r.json()["kind"] == "DUPLICATE_ACCOUNT"
    r = client.post("/users", json={"name": "Other", "login": "other"})
    assert r.status_code == 400
    assert r.json()["kind"] == "INVALID_CREDENTIAL"
    r = client.post("/sessions", json={"login": "alice", "password": "nope"})
    assert r.status_code == 401


def test_friendship_over_http(client):
    alice = _login(client, "alice")
    bob = _login(client, "bob")

    assert client.post("/friends/bob", headers=alice).json() == {"confirmed": False}
    assert client.post("/friends/alice", headers=bob).json() == {"confirmed": True}
    assert client.get("/users/alice/friends/bob").json() == {"result": True}
    assert client.get("/users/bob/friends").json() == {"items": ["alice"], "display": "{alice}"}

    r = client.post("/friends/bob", headers=alice)
    assert r.status_code == 409
    assert r.json()["kind"] == "ALREADY_FRIENDS"


def test_enemy_blocks_note(client):
    alice = _login(client, "alice")
    _login(client, "bob")
    assert client.post("/enemies/bob", headers=alice).status_code == 204
    r = client.post("/notes", json={"recipient": "bob", "text": "hi"}, headers=alice)
    assert r.status_code == 409
    assert r.json()["kind"] == "ENEMY_BLOCKED"


def test_community_flow_over_http(client):
    alice = _login(client, "alice")
    bob = _login(client, "bob")
    r = client.post("/communities", json={"name": "Go Fans", "description": "We love Go"}, headers=alice)
    assert r.status_code == 201
    assert client.post("/communities/Go Fans/members", headers=bob).status_code == 204
    r = client.post("/communities/Go Fans/messages", json={"text": "Hello"}, headers=alice)
    assert r.status_code == 201

    assert client.get("/communities/Go Fans").json() == {
        "name": "Go Fans",
        "description": "We love Go",
        "owner": "alice",
    }
    assert client.get("/communities/Go Fans/members").json()["display"] == "{alice,bob}"
    assert client.post("/messages/read", headers=bob).json() == {
        "sender": "alice",
        "community": "Go Fans",
        "text": "Hello",
    }
    r = client.post("/messages/read", headers=bob)
    assert r.status_code == 404
    assert r.json()["kind"] == "EMPTY_QUEUE"


def test_delete_account_over_http(client):
    alice = _login(client, "alice")
    bob = _login(client, "bob")
    client.post("/notes", json={"recipient": "bob", "text": "hi"}, headers=alice)
    client.post("/idols/alice", headers=bob)
    assert client.get("/users/alice/fans").json()["items"] == ["bob"]

    assert client.delete("/users/me", headers=alice).status_code == 204

    assert client.get("/users/bob/idols").json()["items"] == []
    assert client.post("/notes/read", headers=bob).status_code == 404
    r = client.get("/users/alice/attributes/nome")
    assert r.status_code == 404
    assert r.json()["kind"] == "USER_NOT_FOUND"


def test_attributes_over_http(client):
    alice = _login(client, "alice")
    r = client.put("/users/me/attributes/descricao", json={"value": "Gopher"}, headers=alice)
    assert r.status_code == 204
    assert client.get("/users/alice/attributes/descricao").json() == {"value": "Gopher"}
    r = client.get("/users/alice/attributes/estilo")
    assert r.status_code == 404
    assert r.json()["kind"] == "ATTRIBUTE_NOT_SET"


@pytest.mark.parametrize("headers", [{}, {SESSION_HEADER: "ghost"}])
def test_missing_or_unknown_session_reads_as_unknown_user(client, headers):
    _login(client, "bob")
    r = client.post("/friends/bob", headers=headers)
    assert r.status_code == 404
    assert r.json()["kind"] == "USER_NOT_FOUND"


def test_blank_login_and_community_name_rejected(client):
    r = client.post("/users", json={"name": "Blank", "password": "pw", "login": "   "})
    assert r.status_code == 400
    assert r.json()["kind"] == "INVALID_IDENTIFIER"
    alice = _login(client, "alice")
    r = client.post("/communities", json={"name": "  ", "description": "x"}, headers=alice)
    assert r.status_code == 400
    assert r.json()["kind"] == "INVALID_IDENTIFIER"
