"""Application layer: registries, relationship engine, sessions, ports and the service facade."""

from jackut.application.community_registry import CommunityRegistry
from jackut.application.jackut_service import JackutService
from jackut.application.ports import CommunityRepository, PersistenceError, UserRepository
from jackut.application.relationship_engine import RelationshipEngine
from jackut.application.session import SessionAuthenticator
from jackut.application.store import JackutStore
from jackut.application.user_registry import UserRegistry

__all__ = [
    "CommunityRegistry",
    "CommunityRepository",
    "JackutService",
    "JackutStore",
    "PersistenceError",
    "RelationshipEngine",
    "SessionAuthenticator",
    "UserRegistry",
    "UserRepository",
]
