"""Plain-dict form of users and communities, shared by the snapshot adapters."""

from collections import deque

from jackut.domain import Broadcast, Community, Note, Profile, User


def user_to_dict(user: User) -> dict:
    p = user.profile
    return {
        "login": user.login,
        "name": user.name,
        "password": user.password,
        "attributes": dict(p.attributes),
        "friends": list(p.friends),
        "pending_friends": list(p.pending_friends),
        "enemies": list(p.enemies),
        "crushes": list(p.crushes),
        "idols": list(p.idols),
        "fans": list(p.fans),
        "notes": [[n.sender, n.recipient, n.text] for n in p.notes],
        "broadcasts": [[b.sender, b.community, b.text] for b in p.broadcasts],
        "member_of": list(p.member_of),
        "owner_of": list(p.owner_of),
    }


def user_from_dict(data: dict) -> User:
    profile = Profile(
        attributes=dict(data.get("attributes") or {}),
        friends=list(data.get("friends") or []),
        pending_friends=list(data.get("pending_friends") or []),
        enemies=list(data.get("enemies") or []),
        crushes=list(data.get("crushes") or []),
        idols=list(data.get("idols") or []),
        fans=list(data.get("fans") or []),
        notes=deque(Note(*n) for n in data.get("notes") or []),
        broadcasts=deque(Broadcast(*b) for b in data.get("broadcasts") or []),
        member_of=list(data.get("member_of") or []),
        owner_of=list(data.get("owner_of") or []),
    )
    return User(
        login=data["login"],
        name=data.get("name") or "",
        password=data.get("password") or "",
        profile=profile,
    )


def community_to_dict(community: Community) -> dict:
    return {
        "name": community.name,
        "description": community.description,
        "owner": community.owner,
        "members": list(community.members),
    }


def community_from_dict(data: dict) -> Community:
    return Community(
        name=data["name"],
        description=data.get("description") or "",
        owner=data["owner"],
        members=list(data.get("members") or []),
    )
