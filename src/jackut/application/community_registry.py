"""Communities: creation, membership, broadcast and owner cascade."""

from jackut.application.store import JackutStore
from jackut.application.user_registry import UserRegistry
from jackut.domain import Broadcast, Community, ErrorKind, JackutError


class CommunityRegistry:
    """Owns the community collection of a store; resolves users through the UserRegistry."""

    def __init__(self, store: JackutStore, users: UserRegistry) -> None:
        self._store = store
        self._users = users

    def create(self, owner_login: str, name: str, description: str) -> Community:
        owner = self._users.find_by_login(owner_login)
        if not name or not name.strip():
            raise JackutError(ErrorKind.INVALID_IDENTIFIER, "Nome de comunidade inválido.")
        if name in self._store.communities:
            raise JackutError(ErrorKind.DUPLICATE_COMMUNITY)
        community = Community(name=name, description=description, owner=owner.login)
        self._store.communities[name] = community
        owner.profile.owner_of.append(name)
        owner.profile.member_of.append(name)
        return community

    def find_by_name(self, name: str | None) -> Community:
        community = self._store.communities.get(name) if name is not None else None
        if community is None:
            raise JackutError(ErrorKind.COMMUNITY_NOT_FOUND)
        return community

    def add_member(self, login: str, name: str) -> None:
        user = self._users.find_by_login(login)
        community = self.find_by_name(name)
        if name in user.profile.member_of:
            raise JackutError(ErrorKind.ALREADY_MEMBER)
        community.members.append(user.login)
        user.profile.member_of.append(name)

    def broadcast(self, sender_login: str, name: str, text: str) -> Broadcast:
        """Queue `text` on every current member, the sender included when a member."""
        sender = self._users.find_by_login(sender_login)
        community = self.find_by_name(name)
        message = Broadcast(sender=sender.login, community=community.name, text=text)
        for member_login in community.members:
            self._users.find_by_login(member_login).profile.broadcasts.append(message)
        return message

    def describe(self, name: str) -> str:
        return self.find_by_name(name).description

    def owner(self, name: str) -> str:
        return self.find_by_name(name).owner

    def members(self, name: str) -> list[str]:
        return list(self.find_by_name(name).members)

    def remove_member(self, login: str, name: str) -> None:
        """Drop `login` from the member list only; callers detach the profile side."""
        community = self._store.communities.get(name)
        if community is not None and login in community.members:
            community.members.remove(login)

    def delete_owned_by(self, login: str) -> list[str]:
        """Delete every community owned by `login`, detaching all members first.

        Returns the names of the deleted communities.
        """
        owner = self._users.find_by_login(login)
        deleted = []
        for name in list(owner.profile.owner_of):
            community = self._store.communities.get(name)
            if community is None:
                continue
            for member_login in list(community.members):
                community.members.remove(member_login)
                if self._users.exists(member_login):
                    member = self._users.find_by_login(member_login)
                    if name in member.profile.member_of:
                        member.profile.member_of.remove(name)
            del self._store.communities[name]
            owner.profile.owner_of.remove(name)
            deleted.append(name)
        return deleted

    def all(self) -> list[Community]:
        return list(self._store.communities.values())

    def load(self, communities: list[Community]) -> None:
        """Replace the collection with a reloaded snapshot."""
        self._store.communities.clear()
        for community in communities:
            self._store.communities[community.name] = community

    def clear(self) -> None:
        self._store.communities.clear()
