"""Domain events.

Usage:
    from src.domain.events import UserLoginSucceeded, SessionRevoked
"""

from src.domain.events.auth_events import (
    UserAccountLocked,
    UserAccountStatusChanged,
    UserLoginFailed,
    UserLoginSucceeded,
    UserRoleChanged,
)
from src.domain.events.base_event import DomainEvent
from src.domain.events.session_events import (
    AllSessionsRevoked,
    SessionCreated,
    SessionIdleExpired,
    SessionRevoked,
)

__all__ = [
    "AllSessionsRevoked",
    "DomainEvent",
    "SessionCreated",
    "SessionIdleExpired",
    "SessionRevoked",
    "UserAccountLocked",
    "UserAccountStatusChanged",
    "UserLoginFailed",
    "UserLoginSucceeded",
    "UserRoleChanged",
]
