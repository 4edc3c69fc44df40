"""Logging event handler for domain events.

Structured logging for the identity core's domain events.

Log Levels:
    - INFO: logins, session lifecycle, role changes
    - WARNING: failed logins, account lockouts, suspensions and bans

Field names avoid the redaction markers (a ``session_id`` key would be
masked), so session ids are logged under ``sid``.
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
from src.domain.protocols.event_bus_protocol import EventBusProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol


class LoggingEventHandler:
    """Event handler for structured logging of domain events.

    Attributes:
        _logger: Logger protocol implementation (from container).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def register(self, event_bus: EventBusProtocol) -> None:
        """Subscribe every handle_* method to its event type."""
        event_bus.subscribe(UserLoginSucceeded, self.handle_user_login_succeeded)
        event_bus.subscribe(UserLoginFailed, self.handle_user_login_failed)
        event_bus.subscribe(UserAccountLocked, self.handle_user_account_locked)
        event_bus.subscribe(UserRoleChanged, self.handle_user_role_changed)
        event_bus.subscribe(
            UserAccountStatusChanged, self.handle_user_account_status_changed
        )
        event_bus.subscribe(SessionCreated, self.handle_session_created)
        event_bus.subscribe(SessionRevoked, self.handle_session_revoked)
        event_bus.subscribe(AllSessionsRevoked, self.handle_all_sessions_revoked)
        event_bus.subscribe(SessionIdleExpired, self.handle_session_idle_expired)

    # =========================================================================
    # Authentication Event Handlers
    # =========================================================================

    async def handle_user_login_succeeded(self, event: UserLoginSucceeded) -> None:
        """Log successful login (INFO level)."""
        self._logger.info(
            "user_login_succeeded",
            **_base(event),
            user_id=str(event.user_id),
            subject_id=event.subject_id,
            is_new_user=event.is_new_user,
            sid=str(event.session_id) if event.session_id else None,
            ip_address=event.ip_address,
        )

    async def handle_user_login_failed(self, event: UserLoginFailed) -> None:
        """Log rejected login (WARNING level)."""
        self._logger.warning(
            "user_login_failed",
            **_base(event),
            reason=event.reason,
            subject_id=event.subject_id,
            email=event.email,
            ip_address=event.ip_address,
        )

    async def handle_user_account_locked(self, event: UserAccountLocked) -> None:
        """Log account lockout (WARNING level)."""
        self._logger.warning(
            "user_account_locked",
            **_base(event),
            user_id=str(event.user_id),
            failed_login_attempts=event.failed_login_attempts,
        )

    async def handle_user_role_changed(self, event: UserRoleChanged) -> None:
        self._logger.info(
            "user_role_changed",
            **_base(event),
            user_id=str(event.user_id),
            previous_role=event.previous_role,
            new_role=event.new_role,
            changed_by=event.changed_by,
        )

    async def handle_user_account_status_changed(
        self, event: UserAccountStatusChanged
    ) -> None:
        """Log status changes; WARNING when the account leaves ACTIVE."""
        log = self._logger.info if event.new_status == "active" else self._logger.warning
        log(
            "user_account_status_changed",
            **_base(event),
            user_id=str(event.user_id),
            previous_status=event.previous_status,
            new_status=event.new_status,
            changed_by=event.changed_by,
            reason=event.reason,
            revoked_count=event.revoked_count,
        )

    # =========================================================================
    # Session Event Handlers
    # =========================================================================

    async def handle_session_created(self, event: SessionCreated) -> None:
        self._logger.info(
            "session_created",
            **_base(event),
            sid=str(event.session_id),
            user_id=str(event.user_id),
            device_info=event.device_info,
            ip_address=event.ip_address,
            location=event.location,
        )

    async def handle_session_revoked(self, event: SessionRevoked) -> None:
        self._logger.info(
            "session_revoked",
            **_base(event),
            sid=str(event.session_id),
            user_id=str(event.user_id),
            reason=event.reason,
        )

    async def handle_all_sessions_revoked(self, event: AllSessionsRevoked) -> None:
        self._logger.info(
            "all_sessions_revoked",
            **_base(event),
            user_id=str(event.user_id),
            revoked_count=event.session_count,
            reason=event.reason,
        )

    async def handle_session_idle_expired(self, event: SessionIdleExpired) -> None:
        self._logger.info(
            "session_idle_expired",
            **_base(event),
            sid=str(event.session_id),
            user_id=str(event.user_id),
        )


def _base(event: DomainEvent) -> dict[str, str]:
    return {
        "event_id": str(event.event_id),
        "occurred_at": event.occurred_at.isoformat(),
    }
