"""Identity provider adapters.

Adapters:
    - FirebaseIdentityProvider: ID token verification and role custom claims
    - RoleClaimSyncWorker: Background role claim propagation with retries
"""

from src.infrastructure.identity.firebase_identity_provider import (
    FirebaseIdentityProvider,
    close_firebase_app,
    create_firebase_app,
)
from src.infrastructure.identity.role_claim_sync_worker import RoleClaimSyncWorker

__all__ = [
    "FirebaseIdentityProvider",
    "RoleClaimSyncWorker",
    "close_firebase_app",
    "create_firebase_app",
]
