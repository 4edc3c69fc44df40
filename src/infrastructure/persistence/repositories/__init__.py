"""Repository implementations (adapters for hexagonal architecture).

This package contains concrete implementations of repository protocols
defined in the domain layer.
"""

from src.infrastructure.persistence.repositories.profile_repository import (
    ProfileRepository,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from src.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "ProfileRepository",
    "SessionRepository",
    "UserRepository",
]
