"""ProfileRepository - SQLAlchemy implementation of ProfileRepository protocol.

Creates buyer/seller profile shells idempotently. A concurrent creation that
loses the race on the unique user_id constraint is treated as "already
exists".
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.domain.enums.user_role import UserRole
from src.infrastructure.persistence.models.profile import BuyerProfile, SellerProfile


class ProfileRepository:
    """SQLAlchemy implementation of ProfileRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def ensure_profile(self, user: User) -> bool:
        """Create the profile shell matching ``user.role`` if missing.

        Args:
            user: User whose profile should exist.

        Returns:
            bool: True if a profile was created.
        """
        if user.role == UserRole.BUYER:
            model_cls = BuyerProfile
            first_name, _, last_name = (user.name or "").partition(" ")
            profile = BuyerProfile(
                user_id=user.id,
                subject_id=user.subject_id,
                first_name=first_name,
                last_name=last_name.strip(),
                display_name=user.name,
                profile_image=user.avatar_url,
            )
        elif user.role == UserRole.SELLER:
            model_cls = SellerProfile
            profile = SellerProfile(
                user_id=user.id,
                subject_id=user.subject_id,
                seller_type="individual",
                verification_status="pending",
                profile_image=user.avatar_url,
            )
        else:
            return False

        stmt = select(model_cls.id).where(model_cls.user_id == user.id)
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none() is not None:
            return False

        try:
            async with self._session.begin_nested():
                self._session.add(profile)
        except IntegrityError:
            return False

        await self._session.commit()
        return True
