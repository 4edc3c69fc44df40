"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import UserRepository, IdentityProviderProtocol
"""

from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.identity_provider_protocol import IdentityProviderProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.profile_repository import ProfileRepository
from src.domain.protocols.role_claim_sync_protocol import RoleClaimSyncProtocol
from src.domain.protocols.session_enricher_protocol import (
    DeviceEnricher,
    LocationEnricher,
)
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    "DeviceEnricher",
    "EventBusProtocol",
    "EventHandler",
    "IdentityProviderProtocol",
    "LocationEnricher",
    "LoggerProtocol",
    "ProfileRepository",
    "RoleClaimSyncProtocol",
    "SessionRepository",
    "UserRepository",
]
