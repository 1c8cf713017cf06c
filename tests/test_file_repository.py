"""Tests for the JSON snapshot repositories."""

import json

import pytest

from jackut.application import JackutService, PersistenceError
from jackut.domain import Community, User
from jackut.infrastructure import JsonFileCommunityRepository, JsonFileUserRepository


def _service(data_dir) -> JackutService:
    return JackutService(JsonFileUserRepository(data_dir), JsonFileCommunityRepository(data_dir))


def test_missing_files_load_empty(tmp_path) -> None:
    assert JsonFileUserRepository(tmp_path / "db").load_all() == []
    assert JsonFileCommunityRepository(tmp_path / "db").load_all() == []


def test_save_creates_directory_and_files(tmp_path) -> None:
    data_dir = tmp_path / "database"
    service = _service(data_dir)
    service.register_user("Alice", "pw", "alice")

    assert (data_dir / "users.json").exists()
    assert (data_dir / "communities.json").exists()
    stored = json.loads((data_dir / "users.json").read_text(encoding="utf-8"))
    assert [u["login"] for u in stored] == ["alice"]


def test_service_restart_restores_graph(tmp_path) -> None:
    service = _service(tmp_path)
    service.register_user("Alice", "pw", "alice")
    service.register_user("Bob", "pw", "bob")
    alice = service.open_session("alice", "pw")
    bob = service.open_session("bob", "pw")
    service.set_attribute(alice, "cidadeNatal", "Maceió")
    service.request_friend(alice, "bob")
    service.add_crush(alice, "bob")
    service.add_enemy(bob, "alice")
    service.create_community(bob, "Book Club", "Books")
    service.add_member(alice, "Book Club")

    restarted = _service(tmp_path)

    assert restarted.get_attribute("alice", "cidadeNatal") == "Maceió"
    alice_user = restarted.users.find_by_login("alice")
    assert alice_user.profile.pending_friends == ["bob"]
    assert alice_user.profile.crushes == ["bob"]
    assert restarted.community_owner("Book Club") == "bob"
    assert restarted.list_memberships("alice") == ["Book Club"]
    bob = restarted.open_session("bob", "pw")
    assert restarted.is_enemy(bob, "alice")


def test_corrupt_snapshot_is_discarded(tmp_path, caplog) -> None:
    path = tmp_path / "users.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonFileUserRepository(tmp_path).load_all() == []
    assert not path.exists()
    assert "Corrupt snapshot" in caplog.text


def test_malformed_record_raises_persistence_error(tmp_path) -> None:
    (tmp_path / "communities.json").write_text(json.dumps([{"description": "x"}]), encoding="utf-8")
    with pytest.raises(PersistenceError):
        JsonFileCommunityRepository(tmp_path).load_all()


def test_unwritable_directory_raises_persistence_error(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    repo = JsonFileUserRepository(blocker / "db")
    with pytest.raises(PersistenceError):
        repo.save_all([User(login="alice", name="Alice", password="pw")])


def test_community_roundtrip_keeps_member_order(tmp_path) -> None:
    repo = JsonFileCommunityRepository(tmp_path)
    repo.save_all([Community(name="Go Fans", description="Go", owner="alice", members=["alice", "carol", "bob"])])
    (loaded,) = repo.load_all()
    assert loaded.owner == "alice"
    assert loaded.members == ["alice", "carol", "bob"]
