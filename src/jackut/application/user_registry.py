"""Registered users: creation, uniqueness and lookup by login."""

from jackut.application.store import JackutStore
from jackut.domain import ErrorKind, JackutError, User


class UserRegistry:
    """Owns the user collection of a store. Does not cascade on removal."""

    def __init__(self, store: JackutStore) -> None:
        self._store = store

    def register(self, name: str | None, password: str | None, login: str | None) -> User:
        """Create a user with an empty profile.

        Login and display name share one namespace: a new account is rejected when
        an existing login equals either its login or its display name.
        """
        if not login or not login.strip() or not name or not name.strip():
            raise JackutError(ErrorKind.INVALID_IDENTIFIER)
        if not password:
            raise JackutError(ErrorKind.INVALID_CREDENTIAL)
        for existing in self._store.users.values():
            if existing.login == login or existing.login == name:
                raise JackutError(ErrorKind.DUPLICATE_ACCOUNT)
        user = User(login=login, name=name, password=password)
        self._store.users[login] = user
        return user

    def find_by_login(self, login: str | None) -> User:
        user = self._store.users.get(login) if login is not None else None
        if user is None:
            raise JackutError(ErrorKind.USER_NOT_FOUND)
        return user

    def exists(self, login: str) -> bool:
        return login in self._store.users

    def remove(self, user: User) -> None:
        self._store.users.pop(user.login, None)

    def all(self) -> list[User]:
        return list(self._store.users.values())

    def load(self, users: list[User]) -> None:
        """Replace the collection with a reloaded snapshot."""
        self._store.users.clear()
        for user in users:
            self._store.users[user.login] = user

    def clear(self) -> None:
        self._store.users.clear()
