"""Caller-facing operations. One store per service; every mutating call ends with a snapshot flush."""

import logging
import threading
from collections.abc import Callable
from functools import wraps

from jackut.application.community_registry import CommunityRegistry
from jackut.application.ports import CommunityRepository, PersistenceError, UserRepository
from jackut.application.relationship_engine import RelationshipEngine
from jackut.application.session import SessionAuthenticator
from jackut.application.store import JackutStore
from jackut.application.user_registry import UserRegistry
from jackut.domain import Broadcast, ErrorKind, JackutError, Note

logger = logging.getLogger(__name__)

# Attributes answered from the account itself rather than the profile map.
NAME_ATTRIBUTE = "nome"
LOGIN_ATTRIBUTE = "login"


def _locked(method: Callable) -> Callable:
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


def _mutating(method: Callable) -> Callable:
    """Run under the store lock and flush a snapshot after a successful call."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            try:
                result = method(self, *args, **kwargs)
            except JackutError as e:
                logger.debug("%s rejected: %s", method.__name__, e.kind.name)
                raise
            self._flush()
            return result

    return wrapper


class JackutService:
    """Authenticates callers, resolves logins and delegates to the registries and engine."""

    def __init__(
        self,
        user_repository: UserRepository,
        community_repository: CommunityRepository,
        *,
        store: JackutStore | None = None,
    ) -> None:
        self._user_repo = user_repository
        self._community_repo = community_repository
        self._store = store if store is not None else JackutStore()
        self._lock = threading.RLock()
        self.users = UserRegistry(self._store)
        self.communities = CommunityRegistry(self._store, self.users)
        self.sessions = SessionAuthenticator(self._store, self.users)
        self.relationships = RelationshipEngine(self.users, self.communities, self.sessions)
        self._load()

    # --- persistence ---

    def _load(self) -> None:
        try:
            users = self._user_repo.load_all()
            communities = self._community_repo.load_all()
        except PersistenceError:
            logger.exception("Could not load snapshot; starting with an empty store")
            return
        self.users.load(users)
        self.communities.load(communities)
        logger.info("Loaded %d users and %d communities", len(users), len(communities))

    def _flush(self) -> None:
        try:
            self._user_repo.save_all(self.users.all())
            self._community_repo.save_all(self.communities.all())
        except PersistenceError:
            logger.exception("Could not save snapshot")

    @_mutating
    def reset_all(self) -> None:
        """Wipe users, communities and sessions."""
        self.sessions.clear()
        self.communities.clear()
        self.users.clear()
        logger.info("All data reset")

    @_locked
    def shutdown(self) -> None:
        self._flush()

    # --- accounts and sessions ---

    @_mutating
    def register_user(self, name: str | None, password: str | None, login: str | None) -> None:
        user = self.users.register(name, password, login)
        logger.info("Registered user %s", user.login)

    @_locked
    def open_session(self, login: str | None, password: str | None) -> str:
        return self.sessions.open_session(login, password)

    @_locked
    def close_session(self, session_id: str) -> None:
        self.sessions.close_session(session_id)

    @_locked
    def is_active_session(self, session_id: str | None) -> bool:
        return self.sessions.is_active_session(session_id)

    @_mutating
    def delete_user(self, session_id: str) -> None:
        user = self.sessions.resolve(session_id)
        self.relationships.delete_user(user)
        logger.info("Deleted user %s", user.login)

    # --- profile ---

    @_locked
    def get_attribute(self, login: str, attribute: str) -> str:
        user = self.users.find_by_login(login)
        if attribute == NAME_ATTRIBUTE:
            return user.name
        if attribute == LOGIN_ATTRIBUTE:
            return user.login
        value = user.profile.attributes.get(attribute)
        if not value:
            raise JackutError(ErrorKind.ATTRIBUTE_NOT_SET)
        return value

    @_mutating
    def set_attribute(self, session_id: str, attribute: str, value: str) -> None:
        user = self.sessions.resolve(session_id)
        if not attribute or not attribute.strip() or attribute == LOGIN_ATTRIBUTE:
            raise JackutError(ErrorKind.INVALID_ATTRIBUTE)
        # Empty clears the attribute; whitespace-only is rejected.
        if value is None or (value and not value.strip()):
            raise JackutError(ErrorKind.INVALID_ATTRIBUTE)
        if attribute == NAME_ATTRIBUTE:
            if not value:
                raise JackutError(ErrorKind.INVALID_ATTRIBUTE)
            user.name = value
        elif value:
            user.profile.attributes[attribute] = value
        else:
            user.profile.attributes.pop(attribute, None)

    # --- friends ---

    @_mutating
    def request_friend(self, session_id: str, friend_login: str) -> bool:
        user = self.sessions.resolve(session_id)
        friend = self.users.find_by_login(friend_login)
        return self.relationships.request_friend(user, friend)

    @_mutating
    def remove_friend(self, session_id: str, friend_login: str) -> None:
        user = self.sessions.resolve(session_id)
        friend = self.users.find_by_login(friend_login)
        self.relationships.remove_friend(user, friend)

    @_locked
    def is_friend(self, login: str, friend_login: str) -> bool:
        user = self.users.find_by_login(login)
        friend = self.users.find_by_login(friend_login)
        return self.relationships.is_friend(user, friend)

    @_locked
    def list_friends(self, login: str) -> list[str]:
        return self.relationships.list_friends(self.users.find_by_login(login))

    # --- notes ---

    @_mutating
    def send_note(self, session_id: str, recipient_login: str, text: str) -> None:
        sender = self.sessions.resolve(session_id)
        if sender.login == recipient_login:
            raise JackutError(ErrorKind.SELF_RELATIONSHIP, "Usuário não pode enviar recado para si mesmo.")
        recipient = self.users.find_by_login(recipient_login)
        self.relationships.send_note(sender, recipient, text)

    @_mutating
    def read_note(self, session_id: str) -> Note:
        return self.relationships.read_note(self.sessions.resolve(session_id))

    # --- communities ---

    @_mutating
    def create_community(self, session_id: str, name: str, description: str) -> None:
        owner = self.sessions.resolve(session_id)
        self.communities.create(owner.login, name, description)
        logger.info("Community %r created by %s", name, owner.login)

    @_mutating
    def add_member(self, session_id: str, name: str) -> None:
        user = self.sessions.resolve(session_id)
        self.communities.add_member(user.login, name)

    @_mutating
    def broadcast(self, session_id: str, name: str, text: str) -> None:
        sender = self.sessions.resolve(session_id)
        self.communities.broadcast(sender.login, name, text)

    @_mutating
    def read_broadcast(self, session_id: str) -> Broadcast:
        user = self.sessions.resolve(session_id)
        if not user.profile.broadcasts:
            raise JackutError(ErrorKind.EMPTY_QUEUE)
        return user.profile.broadcasts.popleft()

    @_locked
    def describe_community(self, name: str) -> str:
        return self.communities.describe(name)

    @_locked
    def community_owner(self, name: str) -> str:
        return self.communities.owner(name)

    @_locked
    def community_members(self, name: str) -> list[str]:
        return self.communities.members(name)

    @_locked
    def list_memberships(self, login: str) -> list[str]:
        return list(self.users.find_by_login(login).profile.member_of)

    # --- enemy / crush / idol ---

    @_mutating
    def add_enemy(self, session_id: str, enemy_login: str) -> None:
        user = self.sessions.resolve(session_id)
        enemy = self.users.find_by_login(enemy_login)
        self.relationships.add_enemy(user, enemy)

    @_locked
    def is_enemy(self, session_id: str, enemy_login: str) -> bool:
        user = self.sessions.resolve(session_id)
        return self.relationships.is_enemy(user, self.users.find_by_login(enemy_login))

    @_mutating
    def add_crush(self, session_id: str, crush_login: str) -> None:
        user = self.sessions.resolve(session_id)
        crush = self.users.find_by_login(crush_login)
        self.relationships.add_crush(user, crush)

    @_locked
    def is_crush(self, session_id: str, crush_login: str) -> bool:
        user = self.sessions.resolve(session_id)
        return self.relationships.is_crush(user, self.users.find_by_login(crush_login))

    @_locked
    def list_crushes(self, session_id: str) -> list[str]:
        return self.relationships.list_crushes(self.sessions.resolve(session_id))

    @_mutating
    def add_idol(self, session_id: str, idol_login: str) -> None:
        fan = self.sessions.resolve(session_id)
        idol = self.users.find_by_login(idol_login)
        self.relationships.add_idol(fan, idol)

    @_locked
    def is_fan(self, fan_login: str, idol_login: str) -> bool:
        fan = self.users.find_by_login(fan_login)
        idol = self.users.find_by_login(idol_login)
        return self.relationships.is_fan(fan, idol)

    @_locked
    def list_fans(self, login: str) -> list[str]:
        return self.relationships.list_fans(self.users.find_by_login(login))

    @_locked
    def list_idols(self, login: str) -> list[str]:
        return self.relationships.list_idols(self.users.find_by_login(login))
