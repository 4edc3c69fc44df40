"""Alembic migration environment for the identity schema.

The database URL comes from application settings, so migrations always target
the same database the API would connect to.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from src.core.config import settings
from src.infrastructure.persistence import BaseModel
import src.infrastructure.persistence.models  # noqa: F401  registers tables

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

alembic_config.set_main_option("sqlalchemy.url", settings.database_url)

# users, user_sessions, buyer_profiles, seller_profiles
identity_metadata = BaseModel.metadata


def _configure(**options) -> None:
    context.configure(
        target_metadata=identity_metadata,
        compare_type=True,
        render_as_batch=settings.database_url.startswith("sqlite"),
        **options,
    )


def migrate_offline() -> None:
    """Emit migration SQL to the script output without connecting."""
    _configure(
        url=alembic_config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate_with(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    """Apply migrations through a throwaway async engine."""
    engine = async_engine_from_config(
        alembic_config.get_section(alembic_config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate_with)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
