"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User
from src.domain.value_objects.lockout_state import LockoutState


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        find_by_id: Retrieve user by internal id
        find_by_email: Retrieve user by email
        find_by_subject_or_email: Single OR lookup used by reconciliation
        add: Insert a new user
        add_if_absent: Insert unless the subject id or email is taken
        update: Persist changes to an existing user
        get_lockout_state: Fresh read of the lockout columns
        save_lockout_state: Write only the lockout columns
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by internal id.

        Args:
            user_id: User's unique identifier.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive).

        Args:
            email: Email address.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def find_by_subject_or_email(
        self,
        subject_id: str,
        email: str | None,
    ) -> User | None:
        """Find the user matching ``subject_id`` OR ``email`` in one query.

        When two different rows match (one per predicate), the row whose
        subject id matches wins.

        Args:
            subject_id: Identity provider subject id.
            email: Email address (case-insensitive). None matches on the
                subject id only.

        Returns:
            User if found, None otherwise.
        """
        ...

    async def add(self, user: User) -> None:
        """Insert a new user.

        Args:
            user: User entity to insert.
        """
        ...

    async def add_if_absent(self, user: User) -> bool:
        """Insert a new user unless a unique constraint rejects it.

        Returns:
            True if inserted, False if another row already holds the
            subject id or email.
        """
        ...

    async def update(self, user: User) -> None:
        """Persist the mutable fields of an existing user.

        Lockout columns are excluded; they change only via save_lockout_state.

        Args:
            user: User entity with changes.
        """
        ...

    async def get_lockout_state(self, user_id: UUID) -> LockoutState | None:
        """Re-read the lockout columns, bypassing any identity-map copy.

        Args:
            user_id: User's unique identifier.

        Returns:
            Current LockoutState, or None if the user does not exist.
        """
        ...

    async def save_lockout_state(self, user_id: UUID, state: LockoutState) -> None:
        """Write only the lockout columns.

        Args:
            user_id: User's unique identifier.
            state: New lockout state.
        """
        ...
