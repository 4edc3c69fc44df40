"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Session entities and database Session models.

This repository handles all session persistence operations including:
- Device lookups (one active row per user and device fingerprint)
- Same-device insert races (folded into the surviving row)
- Bulk revocation and idle expiry
- Physical purge of hard-expired rows
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import and_, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.session import Session
from src.domain.enums.device_type import DeviceType
from src.domain.enums.login_method import LoginMethod
from src.domain.value_objects.session_metadata import (
    DeviceDescriptor,
    LocationDescriptor,
)
from src.infrastructure.persistence.models.session import Session as SessionModel


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    This class does NOT inherit from SessionRepository protocol
    (Protocol uses structural typing - duck typing with type safety).

    Example:
        >>> async with database.get_session() as db_session:
        ...     repo = SessionRepository(db_session)
        ...     session = await repo.find_by_id(session_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Find session by ID.

        Args:
            session_id: Session identifier.

        Returns:
            Session if found, None otherwise.
        """
        session_model = await self._session.get(SessionModel, session_id)
        if session_model is None:
            return None
        return self._to_domain(session_model)

    async def find_active_by_device(
        self,
        user_id: UUID,
        device_fingerprint: str,
        now: datetime,
    ) -> Session | None:
        """Find the active, unexpired session for a user's device.

        Args:
            user_id: Owning user.
            device_fingerprint: Device fingerprint.
            now: Current time.

        Returns:
            Session if found, None otherwise.
        """
        stmt = (
            select(SessionModel)
            .where(
                and_(
                    SessionModel.user_id == user_id,
                    SessionModel.device_fingerprint == device_fingerprint,
                    SessionModel.is_active.is_(True),
                    SessionModel.expires_at > now,
                )
            )
            .order_by(SessionModel.last_activity.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        session_model = result.scalar_one_or_none()
        if session_model is None:
            return None
        return self._to_domain(session_model)

    async def list_active_by_user(self, user_id: UUID, now: datetime) -> list[Session]:
        """List active sessions for a user, newest activity first.

        Args:
            user_id: Owning user.
            now: Current time.

        Returns:
            List of sessions, empty if none found.
        """
        stmt = (
            select(SessionModel)
            .where(
                and_(
                    SessionModel.user_id == user_id,
                    SessionModel.is_active.is_(True),
                    SessionModel.expires_at > now,
                )
            )
            .order_by(SessionModel.last_activity.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def add_or_refresh(self, session: Session) -> Session:
        """Insert a new session, or refresh the row a concurrent login inserted.

        The insert runs inside a savepoint. If the partial unique index on
        (user_id, device_fingerprint) rejects it, the surviving active row gets
        this session's activity and location instead.

        Args:
            session: Newly opened session.

        Returns:
            The session as stored.
        """
        try:
            async with self._session.begin_nested():
                self._session.add(self._to_model(session))
        except IntegrityError:
            existing = await self.find_active_by_device(
                session.user_id, session.device.fingerprint, session.last_activity
            )
            if existing is None:
                raise
            existing.touch(session.last_activity, session.location)
            await self.update(existing)
            return existing

        await self._session.commit()
        return session

    async def update(self, session: Session) -> None:
        """Persist changes to an existing session.

        Args:
            session: Session entity with changes.

        Raises:
            NoResultFound: If the session doesn't exist.
        """
        stmt = select(SessionModel).where(SessionModel.id == session.id)
        result = await self._session.execute(stmt)
        session_model = result.scalar_one()

        for key, value in self._columns(session).items():
            setattr(session_model, key, value)

        await self._session.commit()

    async def deactivate_all_for_user(
        self,
        user_id: UUID,
        now: datetime,
        reason: str,
    ) -> int:
        """Deactivate all active sessions for a user.

        Args:
            user_id: Owning user.
            now: Timestamp stored in logged_out_at.
            reason: Revocation reason.

        Returns:
            Number of sessions deactivated.
        """
        stmt = (
            update(SessionModel)
            .where(
                and_(
                    SessionModel.user_id == user_id,
                    SessionModel.is_active.is_(True),
                )
            )
            .values(
                is_active=False,
                logged_out_at=now,
                revoked_reason=reason,
                updated_at=now,
            )
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return result.rowcount

    async def deactivate_idle(
        self,
        user_id: UUID,
        idle_cutoff: datetime,
        now: datetime,
    ) -> int:
        """Deactivate a user's sessions idle since before ``idle_cutoff``.

        Args:
            user_id: Owning user.
            idle_cutoff: Sessions with last_activity before this are idle.
            now: Timestamp stored in logged_out_at.

        Returns:
            Number of sessions deactivated.
        """
        stmt = (
            update(SessionModel)
            .where(
                and_(
                    SessionModel.user_id == user_id,
                    SessionModel.is_active.is_(True),
                    SessionModel.last_activity < idle_cutoff,
                )
            )
            .values(
                is_active=False,
                logged_out_at=now,
                revoked_reason="idle_timeout",
                updated_at=now,
            )
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return result.rowcount

    async def purge_expired(self, now: datetime) -> int:
        """Delete sessions past their hard expiry.

        Args:
            now: Current time.

        Returns:
            Number of rows deleted.
        """
        stmt = delete(SessionModel).where(SessionModel.expires_at <= now)
        result = await self._session.execute(stmt)
        await self._session.commit()
        return result.rowcount

    def _to_domain(self, model: SessionModel) -> Session:
        """Convert database model to domain entity.

        Args:
            model: SQLAlchemy Session model.

        Returns:
            Domain Session entity.
        """
        return Session(
            id=model.id,
            user_id=model.user_id,
            subject_id=model.subject_id,
            device=DeviceDescriptor(
                fingerprint=model.device_fingerprint,
                device_type=DeviceType(model.device_type),
                user_agent=model.user_agent,
                browser=model.browser,
                browser_version=model.browser_version,
                os=model.os,
                os_version=model.os_version,
                model=model.device_model,
            ),
            location=LocationDescriptor(
                ip_address=model.ip_address,
                country=model.country,
                country_code=model.country_code,
                city=model.city,
                region=model.region,
                timezone=model.timezone,
                latitude=model.latitude,
                longitude=model.longitude,
            ),
            login_method=LoginMethod(model.login_method),
            is_active=model.is_active,
            is_trusted=model.is_trusted,
            created_at=model.created_at,
            last_activity=model.last_activity,
            expires_at=model.expires_at,
            logged_out_at=model.logged_out_at,
            revoked_reason=model.revoked_reason,
        )

    def _to_model(self, session: Session) -> SessionModel:
        """Convert domain entity to database model.

        Args:
            session: Domain Session entity.

        Returns:
            SQLAlchemy Session model.
        """
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            subject_id=session.subject_id,
            created_at=session.created_at,
            **self._columns(session),
        )

    def _columns(self, session: Session) -> dict[str, Any]:
        device = session.device
        location = session.location
        return {
            "device_fingerprint": device.fingerprint,
            "device_type": device.device_type.value,
            "user_agent": device.user_agent,
            "browser": device.browser,
            "browser_version": device.browser_version,
            "os": device.os,
            "os_version": device.os_version,
            "device_model": device.model,
            "ip_address": location.ip_address,
            "country": location.country,
            "country_code": location.country_code,
            "city": location.city,
            "region": location.region,
            "timezone": location.timezone,
            "latitude": location.latitude,
            "longitude": location.longitude,
            "login_method": session.login_method.value,
            "is_active": session.is_active,
            "is_trusted": session.is_trusted,
            "last_activity": session.last_activity,
            "expires_at": session.expires_at,
            "logged_out_at": session.logged_out_at,
            "revoked_reason": session.revoked_reason,
            "updated_at": session.logged_out_at or session.last_activity,
        }
