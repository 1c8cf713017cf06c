"""
Relationship rules between users: friendship handshake, enemy, crush and
fan/idol edges, direct notes, and the teardown of a deleted account.

Every operation validates before it mutates, so a rejected call leaves all
profiles untouched. Users are passed in already resolved by the UserRegistry.
"""

import logging

from jackut.application.community_registry import CommunityRegistry
from jackut.application.session import SessionAuthenticator
from jackut.application.user_registry import UserRegistry
from jackut.domain import ErrorKind, JackutError, Note, User

logger = logging.getLogger(__name__)

CRUSH_MATCH_TEXT = "{name} é seu paquera - Recado do Jackut."


class RelationshipEngine:
    def __init__(
        self,
        users: UserRegistry,
        communities: CommunityRegistry,
        sessions: SessionAuthenticator,
    ) -> None:
        self._users = users
        self._communities = communities
        self._sessions = sessions

    # --- guards ---

    @staticmethod
    def _reject_self(user: User, other: User) -> None:
        if user.login == other.login:
            raise JackutError(ErrorKind.SELF_RELATIONSHIP)

    @staticmethod
    def _reject_enemy(user: User, other: User) -> None:
        if other.login in user.profile.enemies:
            raise JackutError(
                ErrorKind.ENEMY_BLOCKED,
                f"Função inválida: {other.name} é seu inimigo.",
            )

    # --- friendship ---

    def request_friend(self, requester: User, target: User) -> bool:
        """Send or accept a friend request. Returns True when the friendship is confirmed."""
        self._reject_self(requester, target)
        self._reject_enemy(requester, target)
        if target.login in requester.profile.pending_friends:
            raise JackutError(ErrorKind.FRIEND_REQUEST_PENDING)
        if target.login in requester.profile.friends:
            raise JackutError(ErrorKind.ALREADY_FRIENDS)

        if requester.login in target.profile.pending_friends:
            target.profile.pending_friends.remove(requester.login)
            requester.profile.friends.append(target.login)
            target.profile.friends.append(requester.login)
            return True
        requester.profile.pending_friends.append(target.login)
        return False

    def remove_friend(self, user: User, friend: User) -> None:
        if friend.login not in user.profile.friends:
            raise JackutError(ErrorKind.NOT_FRIENDS)
        user.profile.friends.remove(friend.login)
        if user.login in friend.profile.friends:
            friend.profile.friends.remove(user.login)

    def is_friend(self, user: User, other: User) -> bool:
        return other.login in user.profile.friends

    def list_friends(self, user: User) -> list[str]:
        return list(user.profile.friends)

    # --- enemy / crush / idol ---

    def add_enemy(self, user: User, other: User) -> None:
        self._reject_self(user, other)
        if other.login in user.profile.enemies:
            raise JackutError(ErrorKind.ALREADY_ADDED, "Usuário já está adicionado como inimigo.")
        user.profile.enemies.append(other.login)
        if user.login not in other.profile.enemies:
            other.profile.enemies.append(user.login)

    def is_enemy(self, user: User, other: User) -> bool:
        return other.login in user.profile.enemies

    def add_crush(self, user: User, target: User) -> None:
        """Add a one-way crush; a reciprocated crush notifies both parties by note."""
        self._reject_self(user, target)
        self._reject_enemy(user, target)
        if target.login in user.profile.crushes:
            raise JackutError(ErrorKind.ALREADY_ADDED, "Usuário já está adicionado como paquera.")
        user.profile.crushes.append(target.login)

        if user.login in target.profile.crushes:
            self._deliver_note(target, user, CRUSH_MATCH_TEXT.format(name=target.name))
            self._deliver_note(user, target, CRUSH_MATCH_TEXT.format(name=user.name))

    def is_crush(self, user: User, other: User) -> bool:
        return other.login in user.profile.crushes

    def list_crushes(self, user: User) -> list[str]:
        return list(user.profile.crushes)

    def add_idol(self, fan: User, idol: User) -> None:
        self._reject_self(fan, idol)
        self._reject_enemy(fan, idol)
        if idol.login in fan.profile.idols:
            raise JackutError(ErrorKind.ALREADY_ADDED, "Usuário já está adicionado como ídolo.")
        fan.profile.idols.append(idol.login)
        if fan.login not in idol.profile.fans:
            idol.profile.fans.append(fan.login)

    def is_fan(self, fan: User, idol: User) -> bool:
        return fan.login in idol.profile.fans

    def list_fans(self, idol: User) -> list[str]:
        return list(idol.profile.fans)

    def list_idols(self, fan: User) -> list[str]:
        return list(fan.profile.idols)

    # --- notes ---

    def send_note(self, sender: User, recipient: User, text: str) -> Note:
        self._reject_self(sender, recipient)
        self._reject_enemy(sender, recipient)
        return self._deliver_note(sender, recipient, text)

    @staticmethod
    def _deliver_note(sender: User, recipient: User, text: str) -> Note:
        note = Note(sender=sender.login, recipient=recipient.login, text=text)
        recipient.profile.notes.append(note)
        return note

    def read_note(self, user: User) -> Note:
        if not user.profile.notes:
            raise JackutError(ErrorKind.EMPTY_QUEUE, "Não há recados.")
        return user.profile.notes.popleft()

    # --- account deletion ---

    def delete_user(self, target: User) -> None:
        """Remove every trace of `target` from other users and communities, then the user."""
        login = target.login
        profile = target.profile
        if not self._users.exists(login):
            raise JackutError(ErrorKind.USER_NOT_FOUND)

        for other in self._resolve_all(profile.enemies):
            _discard(other.profile.enemies, login)
        for other in self._resolve_all(profile.friends):
            _discard(other.profile.friends, login)
        for other in self._resolve_all(profile.idols):
            _discard(other.profile.fans, login)
        for other in self._resolve_all(profile.fans):
            _discard(other.profile.idols, login)

        for name in list(profile.member_of):
            if name not in profile.owner_of:
                self._communities.remove_member(login, name)
        deleted = self._communities.delete_owned_by(login)
        if deleted:
            logger.info("Deleted communities owned by %s: %s", login, deleted)

        for other in self._users.all():
            if other is target:
                continue
            _discard(other.profile.pending_friends, login)
            _discard(other.profile.crushes, login)
            orphaned = [note for note in other.profile.notes if note.sender == login]
            for note in orphaned:
                other.profile.notes.remove(note)

        profile.clear()
        self._sessions.close_session(login)
        self._users.remove(target)

    def _resolve_all(self, logins: list[str]) -> list[User]:
        return [self._users.find_by_login(login) for login in list(logins) if self._users.exists(login)]


def _discard(items: list, value) -> None:
    if value in items:
        items.remove(value)
