"""Pytest configuration and shared fixtures.

Environment variables are set before anything under ``src`` is imported so
the module-level Settings instance picks them up.

Fixtures:
    test_database: Fresh SQLite (aiosqlite) database per test, tables created
    db_session: Session on test_database, shared by the repositories under test
    mock_logger: Mock implementing LoggerProtocol
    mock_event_bus: AsyncMock event bus recording published events
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOGIN_FAILURE_REPORT_KEY", "test-service-key")

from datetime import UTC, datetime, timedelta  # noqa: E402
from unittest.mock import AsyncMock, Mock  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from uuid_extensions import uuid7  # noqa: E402

from src.domain.entities.session import Session  # noqa: E402
from src.domain.entities.user import User  # noqa: E402
from src.domain.enums.account_status import AccountStatus  # noqa: E402
from src.domain.enums.device_type import DeviceType  # noqa: E402
from src.domain.enums.login_method import LoginMethod  # noqa: E402
from src.domain.enums.user_role import UserRole  # noqa: E402
from src.domain.value_objects.claims import ValidatedClaimSet  # noqa: E402
from src.domain.value_objects.session_metadata import (  # noqa: E402
    DeviceDescriptor,
    LocationDescriptor,
)
from src.infrastructure.persistence.database import Database  # noqa: E402

CHROME_MAC_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)


# =============================================================================
# Domain object builders
# =============================================================================


def make_claims(
    subject_id: str = "firebase-uid-1",
    email: str | None = "ada@example.com",
    email_verified: bool = True,
    name: str | None = "Ada Lovelace",
    picture: str | None = None,
    phone_number: str | None = None,
    sign_in_provider: str | None = "password",
    role: str | None = None,
) -> ValidatedClaimSet:
    """Build a ValidatedClaimSet with sensible defaults."""
    return ValidatedClaimSet(
        subject_id=subject_id,
        email=email,
        email_verified=email_verified,
        name=name,
        picture=picture,
        phone_number=phone_number,
        sign_in_provider=sign_in_provider,
        role=role,
    )


def make_user(
    user_id: UUID | None = None,
    subject_id: str = "firebase-uid-1",
    email: str = "ada@example.com",
    role: UserRole = UserRole.BUYER,
    account_status: AccountStatus = AccountStatus.ACTIVE,
    failed_login_attempts: int = 0,
    locked_until: datetime | None = None,
    verified: bool = True,
) -> User:
    """Build a User entity with sensible defaults."""
    now = datetime.now(UTC)
    return User(
        id=user_id or uuid7(),
        subject_id=subject_id,
        email=email,
        name="Ada Lovelace",
        role=role,
        account_status=account_status,
        failed_login_attempts=failed_login_attempts,
        locked_until=locked_until,
        email_verified_at=now if verified else None,
        created_at=now,
        updated_at=now,
    )


def make_session(
    user_id: UUID,
    subject_id: str = "firebase-uid-1",
    fingerprint: str = CHROME_MAC_UA[:200],
    now: datetime | None = None,
    last_activity: datetime | None = None,
    ttl: timedelta = timedelta(days=30),
) -> Session:
    """Build an active Session entity."""
    now = now or datetime.now(UTC)
    session = Session.open(
        user_id=user_id,
        subject_id=subject_id,
        device=DeviceDescriptor(
            fingerprint=fingerprint,
            device_type=DeviceType.WEB,
            user_agent=CHROME_MAC_UA,
            browser="Chrome",
            os="Mac OS X",
        ),
        location=LocationDescriptor(ip_address="203.0.113.7"),
        login_method=LoginMethod.PASSWORD,
        now=now,
        ttl=ttl,
    )
    if last_activity is not None:
        session.last_activity = last_activity
    return session


# =============================================================================
# Mocks
# =============================================================================


@pytest.fixture
def mock_logger():
    """Logger double; every protocol method is a plain Mock."""
    return Mock()


@pytest.fixture
def mock_event_bus():
    """Event bus double recording published events."""
    bus = AsyncMock()
    bus.published = []

    async def _publish(event):
        bus.published.append(event)

    bus.publish.side_effect = _publish
    return bus


# =============================================================================
# Database
# =============================================================================


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Fresh file-backed SQLite database per test.

    A file (not :memory:) so that separate connections see the same data.
    """
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(test_database):
    """Database session shared by the repositories under test."""
    async with test_database.get_session() as session:
        yield session
