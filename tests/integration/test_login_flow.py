"""End-to-end login flow with real repositories on SQLite.

The identity provider and role-claim worker are doubles; everything else
(handlers, repositories, enrichers) is the production wiring.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy import func, select

from src.application.commands.auth_commands import (
    ChangeAccountStatus,
    Login,
    ReconcileIdentity,
    RecordFailedLogin,
)
from src.application.commands.handlers.authenticate_request_handler import (
    AuthenticateRequestHandler,
)
from src.application.commands.handlers.change_account_status_handler import (
    ChangeAccountStatusHandler,
)
from src.application.commands.handlers.login_handler import LoginHandler
from src.application.commands.handlers.open_or_refresh_session_handler import (
    OpenOrRefreshSessionHandler,
)
from src.application.commands.handlers.reconcile_identity_handler import (
    ReconcileIdentityHandler,
)
from src.application.commands.handlers.record_failed_login_handler import (
    RecordFailedLoginHandler,
)
from src.application.commands.handlers.validate_session_activity_handler import (
    ValidateSessionActivityHandler,
)
from src.application.commands.session_commands import ValidateSessionActivity
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.user_role import UserRole
from src.infrastructure.enrichers import IPLocationEnricher, UserAgentDeviceEnricher
from src.infrastructure.persistence.models.profile import BuyerProfile
from src.infrastructure.persistence.models.user import User as UserModel
from src.infrastructure.persistence.repositories import (
    ProfileRepository,
    SessionRepository,
    UserRepository,
)
from tests.conftest import CHROME_MAC_UA, IPHONE_UA, make_claims


@pytest.fixture
def identity_provider():
    provider = Mock()
    provider.verify_token = AsyncMock(return_value=Success(value=make_claims()))
    return provider


@pytest.fixture
def claim_sync():
    sync = Mock()
    sync.enqueue.return_value = True
    return sync


@pytest.fixture
def repos(db_session):
    return (
        UserRepository(session=db_session),
        SessionRepository(session=db_session),
        ProfileRepository(session=db_session),
    )


@pytest.fixture
def login_handler(repos, identity_provider, claim_sync, mock_event_bus, mock_logger):
    user_repo, session_repo, profile_repo = repos
    return LoginHandler(
        authenticate_handler=AuthenticateRequestHandler(
            identity_provider=identity_provider,
            user_repo=user_repo,
            logger=mock_logger,
            trusted_providers=frozenset({"google.com"}),
        ),
        reconcile_handler=ReconcileIdentityHandler(
            user_repo=user_repo,
            profile_repo=profile_repo,
            claim_sync=claim_sync,
            logger=mock_logger,
        ),
        session_handler=OpenOrRefreshSessionHandler(
            session_repo=session_repo,
            user_repo=user_repo,
            device_enricher=UserAgentDeviceEnricher(logger=mock_logger),
            location_enricher=IPLocationEnricher(logger=mock_logger),
            event_bus=mock_event_bus,
            logger=mock_logger,
        ),
        event_bus=mock_event_bus,
    )


@pytest.fixture
def validate_handler(repos, mock_event_bus, mock_logger):
    user_repo, session_repo, _ = repos
    return ValidateSessionActivityHandler(
        session_repo=session_repo,
        user_repo=user_repo,
        event_bus=mock_event_bus,
        logger=mock_logger,
        idle_timeout=timedelta(hours=24),
    )


def login(user_agent: str = CHROME_MAC_UA, **overrides) -> Login:
    values = {
        "credential": "id-token",
        "name_hint": None,
        "ip_address": "203.0.113.7",
        "user_agent": user_agent,
        "device_fingerprint": user_agent[:200],
    }
    values.update(overrides)
    return Login(**values)


@pytest.mark.integration
class TestFirstAndRepeatLogin:
    async def test_first_login_creates_user_profile_and_session(
        self, login_handler, repos, db_session, claim_sync
    ):
        user_repo, session_repo, _ = repos

        result = await login_handler.handle(login())

        assert isinstance(result, Success)
        assert result.value.is_new_user is True
        user = await user_repo.find_by_id(result.value.user.id)
        assert user.role == UserRole.BUYER
        assert user.login_count == 1
        assert user.is_email_verified is True
        assert [ref.session_id for ref in user.active_sessions] == [result.value.session.id]

        sessions = await session_repo.list_active_by_user(user.id, datetime.now(UTC))
        assert len(sessions) == 1
        assert sessions[0].device.browser == "Chrome"

        profile = await db_session.scalar(
            select(BuyerProfile).where(BuyerProfile.user_id == user.id)
        )
        assert profile is not None
        assert profile.first_name == "Ada"
        claim_sync.enqueue.assert_called_once_with("firebase-uid-1", "buyer")

    async def test_repeat_login_same_device_refreshes_session(
        self, login_handler, repos
    ):
        _, session_repo, _ = repos
        first = await login_handler.handle(login())

        second = await login_handler.handle(login(ip_address="198.51.100.9"))

        assert second.value.is_new_user is False
        assert second.value.session.id == first.value.session.id
        assert second.value.user.login_count == 2
        sessions = await session_repo.list_active_by_user(
            first.value.user.id, datetime.now(UTC)
        )
        assert len(sessions) == 1
        assert sessions[0].location.ip_address == "198.51.100.9"

    async def test_second_device_opens_second_session(self, login_handler, repos):
        _, session_repo, _ = repos
        first = await login_handler.handle(login())

        second = await login_handler.handle(login(user_agent=IPHONE_UA))

        assert second.value.session.id != first.value.session.id
        sessions = await session_repo.list_active_by_user(
            first.value.user.id, datetime.now(UTC)
        )
        assert len(sessions) == 2


@pytest.mark.integration
class TestReanchoring:
    async def test_new_subject_with_known_email_reuses_user(
        self, login_handler, identity_provider, repos
    ):
        user_repo, _, _ = repos
        first = await login_handler.handle(login())

        identity_provider.verify_token.return_value = Success(
            value=make_claims(subject_id="firebase-uid-2")
        )
        second = await login_handler.handle(login())

        assert second.value.is_new_user is False
        assert second.value.user.id == first.value.user.id
        stored = await user_repo.find_by_id(first.value.user.id)
        assert stored.subject_id == "firebase-uid-2"


@pytest.mark.integration
class TestIdleExpiry:
    async def test_idle_session_reported_once(
        self, login_handler, validate_handler, repos, mock_event_bus
    ):
        user_repo, session_repo, _ = repos
        result = await login_handler.handle(login())
        session = result.value.session
        session.last_activity = datetime.now(UTC) - timedelta(hours=25)
        await session_repo.update(session)

        command = ValidateSessionActivity(
            user_id=result.value.user.id,
            device_fingerprint=CHROME_MAC_UA[:200],
        )
        expired = await validate_handler.handle(command)
        again = await validate_handler.handle(command)

        assert isinstance(expired, Failure)
        assert expired.error.code == ErrorCode.SESSION_EXPIRED
        assert isinstance(again, Success)
        assert again.value.session_id is None
        user = await user_repo.find_by_id(result.value.user.id)
        assert user.active_sessions == []

    async def test_active_session_is_touched(self, login_handler, validate_handler):
        result = await login_handler.handle(login())

        activity = await validate_handler.handle(
            ValidateSessionActivity(
                user_id=result.value.user.id,
                device_fingerprint=CHROME_MAC_UA[:200],
            )
        )

        assert activity.value.session_id == result.value.session.id


@pytest.mark.integration
class TestLockout:
    async def test_five_failures_lock_the_next_login(
        self, login_handler, repos, mock_event_bus, mock_logger
    ):
        user_repo, _, _ = repos
        await login_handler.handle(login())
        failures = RecordFailedLoginHandler(
            user_repo=user_repo,
            event_bus=mock_event_bus,
            logger=mock_logger,
            threshold=5,
            duration=timedelta(minutes=15),
        )

        for _ in range(5):
            await failures.handle(RecordFailedLogin(email="ada@example.com"))
        result = await login_handler.handle(login())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_LOCKED
        assert 14 <= result.error.retry_after_minutes <= 15

    async def test_successful_login_clears_failures(self, login_handler, repos, mock_event_bus, mock_logger):
        user_repo, _, _ = repos
        first = await login_handler.handle(login())
        failures = RecordFailedLoginHandler(
            user_repo=user_repo, event_bus=mock_event_bus, logger=mock_logger
        )
        await failures.handle(RecordFailedLogin(email="ada@example.com"))

        await login_handler.handle(login())

        state = await user_repo.get_lockout_state(first.value.user.id)
        assert state.failed_login_attempts == 0
        assert state.locked_until is None


@pytest.mark.integration
class TestAccountStatus:
    async def test_suspension_revokes_sessions_and_blocks_login(
        self, login_handler, repos, mock_event_bus
    ):
        user_repo, session_repo, _ = repos
        first = await login_handler.handle(login())
        await login_handler.handle(login(user_agent=IPHONE_UA))
        status_handler = ChangeAccountStatusHandler(
            user_repo=user_repo, session_repo=session_repo, event_bus=mock_event_bus
        )

        result = await status_handler.handle(
            ChangeAccountStatus(
                user_id=first.value.user.id,
                status=AccountStatus.SUSPENDED,
                changed_by="admin-uid",
                reason="chargeback",
            )
        )

        assert result.value.account_status == AccountStatus.SUSPENDED
        assert mock_event_bus.published[-1].revoked_count == 2
        stored = await user_repo.find_by_id(first.value.user.id)
        assert stored.status_reason == "chargeback"
        assert stored.active_sessions == []
        sessions = await session_repo.list_active_by_user(
            stored.id, datetime.now(UTC)
        )
        assert sessions == []

        blocked = await login_handler.handle(login())
        assert isinstance(blocked, Failure)
        assert blocked.error.code == ErrorCode.ACCOUNT_INACTIVE

    async def test_reactivated_user_logs_in_again(
        self, login_handler, repos, mock_event_bus
    ):
        user_repo, session_repo, _ = repos
        first = await login_handler.handle(login())
        status_handler = ChangeAccountStatusHandler(
            user_repo=user_repo, session_repo=session_repo, event_bus=mock_event_bus
        )
        for status in (AccountStatus.BANNED, AccountStatus.ACTIVE):
            await status_handler.handle(
                ChangeAccountStatus(
                    user_id=first.value.user.id, status=status, changed_by="admin-uid"
                )
            )

        result = await login_handler.handle(login())

        assert isinstance(result, Success)
        assert result.value.user.status_reason is None


class _StaleLookupUserRepository(UserRepository):
    """Misses on its first lookup, like a login that read before a rival committed."""

    def __init__(self, session):
        super().__init__(session=session)
        self._stale = True

    async def find_by_subject_or_email(self, subject_id, email):
        if self._stale:
            self._stale = False
            return None
        return await super().find_by_subject_or_email(subject_id, email)


def _reconciler(user_repo, session, claim_sync, logger) -> ReconcileIdentityHandler:
    return ReconcileIdentityHandler(
        user_repo=user_repo,
        profile_repo=ProfileRepository(session=session),
        claim_sync=claim_sync,
        logger=logger,
    )


@pytest.mark.integration
class TestConcurrentFirstLogin:
    async def test_losing_insert_continues_with_existing_user(
        self, test_database, claim_sync, mock_logger
    ):
        async with test_database.get_session() as session:
            first = await _reconciler(
                UserRepository(session=session), session, claim_sync, mock_logger
            ).handle(ReconcileIdentity(claims=make_claims()))

        async with test_database.get_session() as session:
            second = await _reconciler(
                _StaleLookupUserRepository(session), session, claim_sync, mock_logger
            ).handle(ReconcileIdentity(claims=make_claims()))
            user_count = await session.scalar(
                select(func.count()).select_from(UserModel)
            )

        assert isinstance(second, Success)
        assert second.value.is_new_user is False
        assert second.value.user.id == first.value.user.id
        assert second.value.user.login_count == 2
        assert user_count == 1

    async def test_email_collision_under_new_subject_is_reanchored(
        self, test_database, claim_sync, mock_logger
    ):
        async with test_database.get_session() as session:
            first = await _reconciler(
                UserRepository(session=session), session, claim_sync, mock_logger
            ).handle(ReconcileIdentity(claims=make_claims()))

        async with test_database.get_session() as session:
            second = await _reconciler(
                _StaleLookupUserRepository(session), session, claim_sync, mock_logger
            ).handle(ReconcileIdentity(claims=make_claims(subject_id="firebase-uid-2")))

        assert isinstance(second, Success)
        assert second.value.user.id == first.value.user.id
        assert second.value.user.subject_id == "firebase-uid-2"
