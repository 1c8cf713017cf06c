"""
Jackut core: clean-architecture layout.

- domain: entities (User, Profile, Community, Note, Broadcast) and error kinds.
- application: registries, RelationshipEngine, SessionAuthenticator, JackutService, ports.
- infrastructure: snapshot adapters (in-memory, JSON files, Neo4j).
"""

from jackut.application import (
    CommunityRegistry,
    CommunityRepository,
    JackutService,
    JackutStore,
    PersistenceError,
    RelationshipEngine,
    SessionAuthenticator,
    UserRegistry,
    UserRepository,
)
from jackut.domain import Broadcast, Community, ErrorKind, JackutError, Note, Profile, User
from jackut.infrastructure import (
    InMemoryCommunityRepository,
    InMemoryUserRepository,
    JsonFileCommunityRepository,
    JsonFileUserRepository,
    Neo4jCommunityRepository,
    Neo4jUserRepository,
)

__all__ = [
    "Broadcast",
    "Community",
    "CommunityRegistry",
    "CommunityRepository",
    "ErrorKind",
    "InMemoryCommunityRepository",
    "InMemoryUserRepository",
    "JackutError",
    "JackutService",
    "JackutStore",
    "JsonFileCommunityRepository",
    "JsonFileUserRepository",
    "Neo4jCommunityRepository",
    "Neo4jUserRepository",
    "Note",
    "PersistenceError",
    "Profile",
    "RelationshipEngine",
    "SessionAuthenticator",
    "User",
    "UserRegistry",
    "UserRepository",
]
