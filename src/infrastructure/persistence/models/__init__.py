"""Database models for persistence layer.

This package contains SQLAlchemy database models that map to database
tables. These are infrastructure concerns and should not be imported by the
domain layer.

Models Organization:
    - user.py: User model (identity of record, embedded lockout state)
    - session.py: Device session model
    - profile.py: Buyer and seller profile shells

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here in src/infrastructure/persistence/models/
    They are separate and mapped via repository layer.
"""

from src.infrastructure.persistence.models.profile import BuyerProfile, SellerProfile
from src.infrastructure.persistence.models.session import Session
from src.infrastructure.persistence.models.user import User

__all__ = [
    "BuyerProfile",
    "SellerProfile",
    "Session",
    "User",
]
