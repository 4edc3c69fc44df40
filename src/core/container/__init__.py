"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_login_handler, ...

Modules:
- infrastructure: Logging, database, identity provider, claim sync, enrichers
- events: Event bus and subscriptions
- auth_handlers: Authentication handler factories
- session_handlers: Session handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_device_enricher,
    get_firebase_app,
    get_identity_provider,
    get_location_enricher,
    get_logger,
    get_role_claim_sync,
)

# Event bus
from src.core.container.events import get_event_bus

# Auth handlers
from src.core.container.auth_handlers import (
    get_authenticate_request_handler,
    get_change_account_status_handler,
    get_change_user_role_handler,
    get_current_user_handler,
    get_login_handler,
    get_record_failed_login_handler,
)

# Session handlers
from src.core.container.session_handlers import (
    get_list_sessions_handler,
    get_purge_expired_sessions_handler,
    get_revoke_all_sessions_handler,
    get_revoke_session_handler,
    get_sweep_idle_sessions_handler,
    get_trust_session_device_handler,
    get_validate_session_activity_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_device_enricher",
    "get_firebase_app",
    "get_identity_provider",
    "get_location_enricher",
    "get_logger",
    "get_role_claim_sync",
    # Events
    "get_event_bus",
    # Auth handlers
    "get_authenticate_request_handler",
    "get_change_account_status_handler",
    "get_change_user_role_handler",
    "get_current_user_handler",
    "get_login_handler",
    "get_record_failed_login_handler",
    # Session handlers
    "get_list_sessions_handler",
    "get_purge_expired_sessions_handler",
    "get_revoke_all_sessions_handler",
    "get_revoke_session_handler",
    "get_sweep_idle_sessions_handler",
    "get_trust_session_device_handler",
    "get_validate_session_activity_handler",
]
