"""Domain entities: User, Profile, Community, Note and Broadcast."""

from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Note:
    """A direct message ("recado") queued on the recipient's profile."""

    sender: str
    recipient: str
    text: str


@dataclass(frozen=True)
class Broadcast:
    """A community message queued on every member's profile."""

    sender: str
    community: str
    text: str


@dataclass
class Profile:
    """
    Mutable per-user state. Relationship targets are stored by login and
    communities by name; both resolve through their registries.
    Lists keep insertion order and never hold the same entry twice.
    """

    attributes: dict[str, str] = field(default_factory=dict)
    friends: list[str] = field(default_factory=list)
    pending_friends: list[str] = field(default_factory=list)
    enemies: list[str] = field(default_factory=list)
    crushes: list[str] = field(default_factory=list)
    idols: list[str] = field(default_factory=list)
    fans: list[str] = field(default_factory=list)
    notes: deque[Note] = field(default_factory=deque)
    broadcasts: deque[Broadcast] = field(default_factory=deque)
    member_of: list[str] = field(default_factory=list)
    owner_of: list[str] = field(default_factory=list)

    def clear(self) -> None:
        self.attributes.clear()
        self.friends.clear()
        self.pending_friends.clear()
        self.enemies.clear()
        self.crushes.clear()
        self.idols.clear()
        self.fans.clear()
        self.notes.clear()
        self.broadcasts.clear()
        self.member_of.clear()
        self.owner_of.clear()


@dataclass(eq=False)
class User:
    """
    A registered account. Identity is the login, which never changes.
    Compared by identity: two User objects are the same user only if they are
    the same object held by the registry.
    """

    login: str
    name: str
    password: str
    profile: Profile = field(default_factory=Profile)

    def __post_init__(self):
        if not self.login or not self.login.strip():
            raise ValueError("User login must be non-empty.")

    def __repr__(self) -> str:
        return f"User(login={self.login!r})"


@dataclass(eq=False)
class Community:
    """
    A named group. The owner is set once at creation and is always the first member.
    """

    name: str
    description: str
    owner: str
    members: list[str] = field(default_factory=list)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Community name must be non-empty.")
        if not self.members:
            self.members.append(self.owner)
        elif self.members[0] != self.owner:
            raise ValueError("Community owner must be its first member.")

    def __repr__(self) -> str:
        return f"Community(name={self.name!r})"
