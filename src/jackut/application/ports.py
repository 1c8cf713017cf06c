"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from jackut.domain import Community, User


class PersistenceError(Exception):
    """A snapshot could not be written or read. Never raised for domain rule violations."""


class UserRepository(Protocol):
    """Loads and saves the full user collection as one snapshot."""

    def load_all(self) -> list[User]:
        """Return every stored user in registration order (empty when nothing stored)."""
        ...

    def save_all(self, users: list[User]) -> None:
        """Replace the stored snapshot with `users`. Raises PersistenceError on failure."""
        ...


class CommunityRepository(Protocol):
    """Loads and saves the full community collection as one snapshot."""

    def load_all(self) -> list[Community]:
        """Return every stored community in creation order (empty when nothing stored)."""
        ...

    def save_all(self, communities: list[Community]) -> None:
        """Replace the stored snapshot with `communities`. Raises PersistenceError on failure."""
        ...
