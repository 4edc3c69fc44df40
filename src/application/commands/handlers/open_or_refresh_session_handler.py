"""Open or refresh session handler.

Flow:
1. Resolve the client location (best effort)
2. Find the active session for (user, device fingerprint)
3a. Found: touch last activity and location
3b. Not found: parse the device, open a new session (same-device races are
    folded into the existing row by the repository)
4. Refresh the lightweight session reference on the user record
5. Publish SessionCreated for new sessions
6. Return Success(SessionOpenResult)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- Enrichers are fail-open and never block session creation
"""

from datetime import UTC, datetime, timedelta

from src.application.commands.session_commands import OpenOrRefreshSession
from src.application.dtos.session_dtos import SessionOpenResult
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities.session import DEFAULT_SESSION_TTL, Session
from src.domain.events.session_events import SessionCreated
from src.domain.protocols import (
    DeviceEnricher,
    EventBusProtocol,
    LocationEnricher,
    LoggerProtocol,
    SessionRepository,
    UserRepository,
)


class OpenOrRefreshSessionHandler:
    """Handler for session creation during login.

    At most one active session exists per (user, device fingerprint).
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        device_enricher: DeviceEnricher,
        location_enricher: LocationEnricher,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            session_repo: Session repository for persistence.
            user_repo: User repository (session references).
            device_enricher: User agent parser.
            location_enricher: IP geolocation.
            event_bus: Event bus for publishing domain events.
            logger: Structured logger.
            session_ttl: Hard session lifetime.
        """
        self._session_repo = session_repo
        self._user_repo = user_repo
        self._device_enricher = device_enricher
        self._location_enricher = location_enricher
        self._event_bus = event_bus
        self._logger = logger
        self._session_ttl = session_ttl

    async def handle(
        self, cmd: OpenOrRefreshSession
    ) -> Result[SessionOpenResult, DomainError]:
        """Handle open-or-refresh.

        Args:
            cmd: OpenOrRefreshSession command.

        Returns:
            Success(SessionOpenResult) with the stored session.
            Failure(NotFoundError) if the user does not exist.
        """
        now = datetime.now(UTC)

        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found.",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        # Step 1: Location
        location = await self._location_enricher.enrich(cmd.ip_address)

        # Step 2: Existing device session
        existing = await self._session_repo.find_active_by_device(
            cmd.user_id, cmd.device_fingerprint, now
        )

        if existing is not None:
            # Step 3a: Refresh in place
            existing.touch(now, location)
            await self._session_repo.update(existing)
            session = existing
            created = False
        else:
            # Step 3b: New session
            device = await self._device_enricher.enrich(
                cmd.user_agent, cmd.device_fingerprint
            )
            opened = Session.open(
                user_id=cmd.user_id,
                subject_id=cmd.subject_id,
                device=device,
                location=location,
                login_method=cmd.login_method,
                now=now,
                ttl=self._session_ttl,
            )
            session = await self._session_repo.add_or_refresh(opened)
            created = session.id == opened.id

        # Step 4: Session reference on the user
        user.upsert_session_ref(session.to_ref())
        if location.display_name:
            user.last_login_location = location.display_name
        user.updated_at = now
        await self._user_repo.update(user)

        # Step 5: Event
        if created:
            await self._event_bus.publish(
                SessionCreated(
                    session_id=session.id,
                    user_id=session.user_id,
                    device_info=session.device.display_name,
                    ip_address=session.location.ip_address,
                    location=session.location.display_name,
                )
            )
        else:
            self._logger.debug(
                "session_refreshed",
                sid=str(session.id),
                user_id=str(session.user_id),
            )

        return Success(value=SessionOpenResult(session=session, created=created))
