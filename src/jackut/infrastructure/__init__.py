"""Infrastructure layer: concrete implementations of application ports."""

from jackut.infrastructure.file_repository import (
    JsonFileCommunityRepository,
    JsonFileUserRepository,
)
from jackut.infrastructure.memory_repository import (
    InMemoryCommunityRepository,
    InMemoryUserRepository,
)
from jackut.infrastructure.persistence.neo4j_repository import (
    Neo4jCommunityRepository,
    Neo4jUserRepository,
    ensure_jackut_constraints,
)

__all__ = [
    "InMemoryCommunityRepository",
    "InMemoryUserRepository",
    "JsonFileCommunityRepository",
    "JsonFileUserRepository",
    "Neo4jCommunityRepository",
    "Neo4jUserRepository",
    "ensure_jackut_constraints",
]
