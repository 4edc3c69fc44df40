"""Declarative base for the identity tables.

Rows carry a UUIDv7 primary key and UTC timestamps. Domain entities never
inherit from these classes; repositories copy fields across in both
directions, passing ``id`` and ``created_at`` from the entity so the
database defaults only matter for rows written by hand or by migrations.

Column types stay portable between asyncpg in production and aiosqlite in
the integration tests.
"""

from datetime import datetime
from uuid import UUID as PythonUUID

from sqlalchemy import Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7

from src.infrastructure.persistence.types import UTCDateTime


class BaseModel(DeclarativeBase):
    """Root of every mapped table: ``id`` plus ``created_at``."""

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(Uuid, primary_key=True, default=uuid7)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


class BaseMutableModel(BaseModel):
    """Rows that change after insert (users, sessions, profiles).

    ``updated_at`` is bumped by the ORM on every flush that touches the row.
    """

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
