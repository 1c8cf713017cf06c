"""Domain layer: entities and error kinds. No dependencies on outer layers."""

from jackut.domain.entities import Broadcast, Community, Note, Profile, User
from jackut.domain.errors import ErrorKind, JackutError

__all__ = [
    "Broadcast",
    "Community",
    "ErrorKind",
    "JackutError",
    "Note",
    "Profile",
    "User",
]
