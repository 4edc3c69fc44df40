"""Commands - Write operations that change state.

Commands represent intent to perform an action. They are immutable
dataclasses with imperative names (ReconcileIdentity, RevokeSession).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.auth_commands import (
    AuthenticateRequest,
    ChangeUserRole,
    Login,
    ReconcileIdentity,
    RecordFailedLogin,
)
from src.application.commands.session_commands import (
    OpenOrRefreshSession,
    PurgeExpiredSessions,
    RevokeAllUserSessions,
    RevokeSession,
    SweepIdleSessions,
    TrustSessionDevice,
    ValidateSessionActivity,
)

__all__ = [
    "AuthenticateRequest",
    "ChangeUserRole",
    "Login",
    "OpenOrRefreshSession",
    "PurgeExpiredSessions",
    "ReconcileIdentity",
    "RecordFailedLogin",
    "RevokeAllUserSessions",
    "RevokeSession",
    "SweepIdleSessions",
    "TrustSessionDevice",
    "ValidateSessionActivity",
]
