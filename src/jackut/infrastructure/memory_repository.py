"""In-memory implementations of the snapshot repositories (no disk, no DB)."""

from jackut.domain import Community, User
from jackut.infrastructure.snapshot import (
    community_from_dict,
    community_to_dict,
    user_from_dict,
    user_to_dict,
)


class InMemoryUserRepository:
    """Keeps the last saved snapshot as plain dicts, so later mutations of live
    objects do not leak into it. Loading returns fresh objects.
    """

    def __init__(self) -> None:
        self._snapshot: list[dict] = []
        self.save_count = 0

    def load_all(self) -> list[User]:
        return [user_from_dict(data) for data in self._snapshot]

    def save_all(self, users: list[User]) -> None:
        self._snapshot = [user_to_dict(user) for user in users]
        self.save_count += 1


class InMemoryCommunityRepository:
    """Community counterpart of InMemoryUserRepository."""

    def __init__(self) -> None:
        self._snapshot: list[dict] = []
        self.save_count = 0

    def load_all(self) -> list[Community]:
        return [community_from_dict(data) for data in self._snapshot]

    def save_all(self, communities: list[Community]) -> None:
        self._snapshot = [community_to_dict(c) for c in communities]
        self.save_count += 1
