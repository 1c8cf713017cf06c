"""Unit tests for CommunityRegistry."""

import pytest

from jackut.application import CommunityRegistry, JackutStore, UserRegistry
from jackut.domain import ErrorKind, JackutError


def _registries() -> tuple[CommunityRegistry, UserRegistry]:
    store = JackutStore()
    users = UserRegistry(store)
    users.register("Alice", "pw", "alice")
    users.register("Bob", "pw", "bob")
    users.register("Carol", "pw", "carol")
    return CommunityRegistry(store, users), users


def test_create_makes_owner_first_member() -> None:
    communities, users = _registries()
    communities.create("alice", "Go Fans", "We love Go")

    assert communities.describe("Go Fans") == "We love Go"
    assert communities.owner("Go Fans") == "alice"
    assert communities.members("Go Fans") == ["alice"]
    alice = users.find_by_login("alice")
    assert alice.profile.owner_of == ["Go Fans"]
    assert alice.profile.member_of == ["Go Fans"]


def test_create_duplicate_name_rejected() -> None:
    communities, users = _registries()
    communities.create("alice", "Go Fans", "We love Go")
    with pytest.raises(JackutError) as exc:
        communities.create("bob", "Go Fans", "Another")
    assert exc.value.kind is ErrorKind.DUPLICATE_COMMUNITY
    assert users.find_by_login("bob").profile.owner_of == []


@pytest.mark.parametrize("name", ["", "   "])
def test_create_with_blank_name_rejected(name) -> None:
    communities, users = _registries()
    with pytest.raises(JackutError) as exc:
        communities.create("alice", name, "Nothing")
    assert exc.value.kind is ErrorKind.INVALID_IDENTIFIER
    assert communities.all() == []
    assert users.find_by_login("alice").profile.owner_of == []


def test_create_with_unknown_owner() -> None:
    communities, _ = _registries()
    with pytest.raises(JackutError) as exc:
        communities.create("ghost", "Go Fans", "We love Go")
    assert exc.value.kind is ErrorKind.USER_NOT_FOUND
    assert communities.all() == []


def test_add_member_appends_in_order_and_rejects_repeats() -> None:
    communities, users = _registries()
    communities.create("alice", "Go Fans", "We love Go")
    communities.add_member("carol", "Go Fans")
    communities.add_member("bob", "Go Fans")
    assert communities.members("Go Fans") == ["alice", "carol", "bob"]
    assert users.find_by_login("bob").profile.member_of == ["Go Fans"]

    for login in ("bob", "alice"):
        with pytest.raises(JackutError) as exc:
            communities.add_member(login, "Go Fans")
        assert exc.value.kind is ErrorKind.ALREADY_MEMBER
    assert communities.members("Go Fans") == ["alice", "carol", "bob"]


@pytest.mark.parametrize("lookup", ["describe", "owner", "members"])
def test_lookups_on_unknown_community(lookup) -> None:
    communities, _ = _registries()
    with pytest.raises(JackutError) as exc:
        getattr(communities, lookup)("Nope")
    assert exc.value.kind is ErrorKind.COMMUNITY_NOT_FOUND


def test_add_member_to_unknown_community() -> None:
    communities, _ = _registries()
    with pytest.raises(JackutError) as exc:
        communities.add_member("bob", "Nope")
    assert exc.value.kind is ErrorKind.COMMUNITY_NOT_FOUND


def test_broadcast_reaches_every_member_including_sender() -> None:
    communities, users = _registries()
    communities.create("alice", "Go Fans", "We love Go")
    communities.add_member("bob", "Go Fans")
    communities.broadcast("alice", "Go Fans", "Hello")

    alice, bob, carol = (users.find_by_login(x) for x in ("alice", "bob", "carol"))
    assert [m.text for m in bob.profile.broadcasts] == ["Hello"]
    assert [m.text for m in alice.profile.broadcasts] == ["Hello"]
    assert len(carol.profile.broadcasts) == 0
    message = bob.profile.broadcasts[0]
    assert (message.sender, message.community) == ("alice", "Go Fans")


def test_delete_owned_by_detaches_every_member() -> None:
    communities, users = _registries()
    communities.create("alice", "Go Fans", "We love Go")
    communities.create("alice", "Rustaceans", "Crabs")
    communities.create("bob", "Pythonistas", "Snakes")
    communities.add_member("bob", "Go Fans")
    communities.add_member("carol", "Go Fans")
    communities.add_member("alice", "Pythonistas")

    deleted = communities.delete_owned_by("alice")

    assert deleted == ["Go Fans", "Rustaceans"]
    assert [c.name for c in communities.all()] == ["Pythonistas"]
    assert users.find_by_login("bob").profile.member_of == ["Pythonistas"]
    assert users.find_by_login("carol").profile.member_of == []
    alice = users.find_by_login("alice")
    assert alice.profile.owner_of == []
    assert alice.profile.member_of == ["Pythonistas"]
