"""The single in-memory store shared by every component of one process."""

from dataclasses import dataclass, field

from jackut.domain import Community, User


@dataclass
class JackutStore:
    """Users by login and communities by name, both in insertion order."""

    users: dict[str, User] = field(default_factory=dict)
    communities: dict[str, Community] = field(default_factory=dict)
    sessions: list[str] = field(default_factory=list)
