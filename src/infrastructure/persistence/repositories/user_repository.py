"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.device_type import DeviceType
from src.domain.enums.user_role import UserRole
from src.domain.value_objects.lockout_state import LockoutState
from src.domain.value_objects.session_metadata import ActiveSessionRef
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This is an adapter that implements the UserRepository port.
    It handles the mapping between domain User entities and database UserModel.

    This class does NOT inherit from UserRepository protocol
    (Protocol uses structural typing - duck typing with type safety).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("test@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Args:
            user_id: User's unique identifier.

        Returns:
            Domain User entity if found, None otherwise.
        """
        user_model = await self.session.get(UserModel, user_id)
        if user_model is None:
            return None
        return self._to_domain(user_model)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive).

        Args:
            email: Email address to search for.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    async def find_by_subject_or_email(
        self,
        subject_id: str,
        email: str | None,
    ) -> User | None:
        """Find the user matching subject id OR email in a single query.

        Rows matching the subject id sort first, so a subject match wins
        when two different rows match.

        Args:
            subject_id: Identity provider subject id.
            email: Email address (case-insensitive), or None.

        Returns:
            Domain User entity if found, None otherwise.
        """
        predicates = [UserModel.subject_id == subject_id]
        if email:
            predicates.append(func.lower(UserModel.email) == email.lower())

        stmt = (
            select(UserModel)
            .where(or_(*predicates))
            .order_by(case((UserModel.subject_id == subject_id, 0), else_=1))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()
        if user_model is None:
            return None
        return self._to_domain(user_model)

    async def add(self, user: User) -> None:
        """Create new user in database.

        Args:
            user: Domain User entity to persist.

        Raises:
            IntegrityError: If subject id or email already exists.
        """
        self.session.add(self._to_model(user))
        await self.session.commit()

    async def add_if_absent(self, user: User) -> bool:
        """Insert a new user unless its subject id or email is already taken.

        The insert runs inside a savepoint, so losing a race with a concurrent
        first login leaves the outer transaction usable.

        Returns:
            True if the row was inserted, False if a unique constraint
            rejected it.
        """
        try:
            async with self.session.begin_nested():
                self.session.add(self._to_model(user))
        except IntegrityError:
            return False
        await self.session.commit()
        return True

    async def update(self, user: User) -> None:
        """Update existing user in database.

        Lockout columns are left alone; they only change through
        save_lockout_state so a stale entity never overwrites a fresh lock.

        Args:
            user: Domain User entity with updated fields.

        Raises:
            NoResultFound: If user doesn't exist.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self.session.execute(stmt)
        user_model = result.scalar_one()

        for key, value in self._columns(user).items():
            setattr(user_model, key, value)

        await self.session.commit()

    async def get_lockout_state(self, user_id: UUID) -> LockoutState | None:
        """Read the lockout columns straight from the database.

        Selecting columns (not the entity) bypasses the identity map, so a
        lock written by a concurrent request is always seen.

        Args:
            user_id: User's unique identifier.

        Returns:
            LockoutState, or None if the user does not exist.
        """
        stmt = select(UserModel.failed_login_attempts, UserModel.locked_until).where(
            UserModel.id == user_id
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return LockoutState(
            failed_login_attempts=max(row.failed_login_attempts, 0),
            locked_until=row.locked_until,
        )

    async def save_lockout_state(self, user_id: UUID, state: LockoutState) -> None:
        """Write only the lockout columns.

        Args:
            user_id: User's unique identifier.
            state: New lockout state.
        """
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(
                failed_login_attempts=state.failed_login_attempts,
                locked_until=state.locked_until,
            )
        )
        await self.session.execute(stmt)
        await self.session.commit()

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity.

        Args:
            user_model: SQLAlchemy UserModel instance.

        Returns:
            Domain User entity.
        """
        return User(
            id=user_model.id,
            subject_id=user_model.subject_id,
            email=user_model.email,
            name=user_model.name,
            avatar_url=user_model.avatar_url,
            phone_number=user_model.phone_number,
            role=UserRole(user_model.role),
            account_status=AccountStatus(user_model.account_status),
            status_reason=user_model.status_reason,
            failed_login_attempts=user_model.failed_login_attempts,
            locked_until=user_model.locked_until,
            login_count=user_model.login_count,
            last_login=user_model.last_login,
            last_login_ip=user_model.last_login_ip,
            last_login_location=user_model.last_login_location,
            email_verified_at=user_model.email_verified_at,
            is_phone_verified=user_model.is_phone_verified,
            active_sessions=[
                _ref_from_json(item) for item in (user_model.active_sessions or [])
            ],
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model.

        Args:
            user: Domain User entity.

        Returns:
            SQLAlchemy UserModel instance.
        """
        return UserModel(
            id=user.id,
            created_at=user.created_at,
            failed_login_attempts=user.failed_login_attempts,
            locked_until=user.locked_until,
            **self._columns(user),
        )

    def _columns(self, user: User) -> dict[str, Any]:
        return {
            "subject_id": user.subject_id,
            "email": user.email,
            "name": user.name,
            "avatar_url": user.avatar_url,
            "phone_number": user.phone_number,
            "role": user.role.value,
            "account_status": user.account_status.value,
            "status_reason": user.status_reason,
            "login_count": user.login_count,
            "last_login": user.last_login,
            "last_login_ip": user.last_login_ip,
            "last_login_location": user.last_login_location,
            "email_verified_at": user.email_verified_at,
            "is_phone_verified": user.is_phone_verified,
            "active_sessions": [_ref_to_json(ref) for ref in user.active_sessions],
            "updated_at": user.updated_at,
        }


def _ref_to_json(ref: ActiveSessionRef) -> dict[str, str]:
    return {
        "session_id": str(ref.session_id),
        "device_type": ref.device_type.value,
        "last_activity": ref.last_activity.isoformat(),
    }


def _ref_from_json(data: dict[str, Any]) -> ActiveSessionRef:
    return ActiveSessionRef(
        session_id=UUID(data["session_id"]),
        device_type=DeviceType(data["device_type"]),
        last_activity=datetime.fromisoformat(data["last_activity"]),
    )
