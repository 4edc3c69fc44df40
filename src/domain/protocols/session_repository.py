"""Session repository protocol for persistence abstraction.

This module defines the port (interface) for session persistence.
Infrastructure layer implements the adapter.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.session import Session


class SessionRepository(Protocol):
    """Session repository protocol (port).

    Lookups that return "active" sessions exclude rows past their hard
    expiry as well as deactivated rows.

    Methods:
        find_by_id: Retrieve session by id
        find_active_by_device: Active session for (user, device fingerprint)
        list_active_by_user: Active sessions, newest activity first
        add_or_refresh: Insert, or refresh the existing active row on a
            same-device race
        update: Persist changes to an existing session
        deactivate_all_for_user: Bulk revoke
        deactivate_idle: Bulk idle-expiry
        purge_expired: Physically delete rows past expires_at
    """

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find session by id.

        Args:
            session_id: Session identifier.

        Returns:
            Session if found, None otherwise.
        """
        ...

    async def find_active_by_device(
        self,
        user_id: UUID,
        device_fingerprint: str,
        now: datetime,
    ) -> Session | None:
        """Find the active session for a user's device.

        Args:
            user_id: Owning user.
            device_fingerprint: Device fingerprint.
            now: Current time, used to exclude hard-expired rows.

        Returns:
            Session if found, None otherwise.
        """
        ...

    async def list_active_by_user(self, user_id: UUID, now: datetime) -> list[Session]:
        """List active sessions ordered by last activity (newest first).

        Args:
            user_id: Owning user.
            now: Current time, used to exclude hard-expired rows.

        Returns:
            List of sessions, empty if none.
        """
        ...

    async def add_or_refresh(self, session: Session) -> Session:
        """Insert a new active session.

        If a concurrent login already inserted an active row for the same
        (user, device fingerprint), that row is refreshed with this session's
        activity and location instead, and returned.

        Args:
            session: Newly opened session.

        Returns:
            The session as stored.
        """
        ...

    async def update(self, session: Session) -> None:
        """Persist changes to an existing session.

        Args:
            session: Session entity with changes.
        """
        ...

    async def deactivate_all_for_user(
        self,
        user_id: UUID,
        now: datetime,
        reason: str,
    ) -> int:
        """Deactivate every active session of a user.

        Args:
            user_id: Owning user.
            now: Timestamp stored in logged_out_at.
            reason: Revocation reason.

        Returns:
            Number of sessions deactivated.
        """
        ...

    async def deactivate_idle(
        self,
        user_id: UUID,
        idle_cutoff: datetime,
        now: datetime,
    ) -> int:
        """Deactivate a user's active sessions whose last activity predates ``idle_cutoff``.

        Args:
            user_id: Owning user.
            idle_cutoff: Sessions with last_activity before this are idle.
            now: Timestamp stored in logged_out_at.

        Returns:
            Number of sessions deactivated (0 when called again).
        """
        ...

    async def purge_expired(self, now: datetime) -> int:
        """Delete sessions whose hard expiry has passed.

        Args:
            now: Current time.

        Returns:
            Number of rows deleted.
        """
        ...
