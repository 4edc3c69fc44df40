"""Role profile models (buyer and seller shells).

A profile shell is created the first time a user holds the matching role.
Marketplace features fill in the rest later; the identity core only
guarantees the row exists, exactly once per user.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class BuyerProfile(BaseMutableModel):
    """Buyer profile shell.

    Fields:
        user_id: Owning user (unique, cascade delete)
        subject_id: Identity provider subject id
        first_name: First word of the display name
        last_name: Remaining words of the display name
        display_name: Display name at creation time
        profile_image: Avatar URL at creation time
    """

    __tablename__ = "buyer_profiles"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        comment="User who owns this profile",
    )

    subject_id: Mapped[str] = mapped_column(String(128), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_image: Mapped[str | None] = mapped_column(String(2048), nullable=True)


class SellerProfile(BaseMutableModel):
    """Seller profile shell.

    Fields:
        user_id: Owning user (unique, cascade delete)
        subject_id: Identity provider subject id
        seller_type: individual or store (shells start as individual)
        verification_status: pending until reviewed
        profile_image: Avatar URL at creation time
    """

    __tablename__ = "seller_profiles"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        comment="User who owns this profile",
    )

    subject_id: Mapped[str] = mapped_column(String(128), nullable=False)
    seller_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="individual"
    )
    verification_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending"
    )
    profile_image: Mapped[str | None] = mapped_column(String(2048), nullable=True)
