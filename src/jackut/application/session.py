"""Credential check and active-session tracking. Session ids are logins."""

from jackut.application.store import JackutStore
from jackut.application.user_registry import UserRegistry
from jackut.domain import ErrorKind, JackutError, User


class SessionAuthenticator:
    def __init__(self, store: JackutStore, users: UserRegistry) -> None:
        self._store = store
        self._users = users

    def authenticate(self, login: str | None, password: str | None) -> User:
        """Return the user for a matching credential pair, else raise BAD_CREDENTIALS."""
        if not login or password is None or not self._users.exists(login):
            raise JackutError(ErrorKind.BAD_CREDENTIALS)
        user = self._users.find_by_login(login)
        if user.password != password:
            raise JackutError(ErrorKind.BAD_CREDENTIALS)
        return user

    def open_session(self, login: str | None, password: str | None) -> str:
        """Authenticate and mark the user active. Reopening an active session returns it."""
        user = self.authenticate(login, password)
        if user.login not in self._store.sessions:
            self._store.sessions.append(user.login)
        return user.login

    def is_active_session(self, session_id: str | None) -> bool:
        return session_id is not None and session_id in self._store.sessions

    def resolve(self, session_id: str | None) -> User:
        """Map an active session to its user; unknown sessions read as unknown users."""
        if not self.is_active_session(session_id):
            raise JackutError(ErrorKind.USER_NOT_FOUND)
        return self._users.find_by_login(session_id)

    def close_session(self, session_id: str | None) -> None:
        if session_id in self._store.sessions:
            self._store.sessions.remove(session_id)

    def active_sessions(self) -> list[str]:
        return list(self._store.sessions)

    def clear(self) -> None:
        self._store.sessions.clear()
