"""Unit tests for ReconcileIdentityHandler.

Tests cover:
- Creation on first sight (default role, name precedence, profile shell)
- Matching by subject id or email, subject re-anchoring
- Monotonic email verification and login bookkeeping
- Role hint handling (ignored unless trusted)
- Best-effort profile creation and claim propagation
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from src.application.commands.auth_commands import ReconcileIdentity
from src.application.commands.handlers.reconcile_identity_handler import (
    ReconcileIdentityHandler,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.user_role import UserRole
from src.domain.value_objects.lockout_state import LockoutState
from tests.conftest import make_claims, make_user


def build_handler(mock_logger, user=None, lock_state=None):
    user_repo = AsyncMock()
    user_repo.find_by_subject_or_email.return_value = user
    user_repo.add_if_absent.return_value = True
    user_repo.get_lockout_state.return_value = (
        lock_state if lock_state is not None else (user.lockout_state if user else None)
    )
    profile_repo = AsyncMock()
    profile_repo.ensure_profile.return_value = True
    claim_sync = Mock()
    claim_sync.enqueue.return_value = True

    handler = ReconcileIdentityHandler(
        user_repo=user_repo,
        profile_repo=profile_repo,
        claim_sync=claim_sync,
        logger=mock_logger,
    )
    return handler, user_repo, profile_repo, claim_sync


@pytest.mark.unit
class TestReconcileCreate:
    """First sight of a subject."""

    async def test_creates_buyer_with_claims(self, mock_logger):
        handler, user_repo, profile_repo, claim_sync = build_handler(mock_logger)

        result = await handler.handle(
            ReconcileIdentity(claims=make_claims(email="Ada@Example.com"), ip_address="203.0.113.7")
        )

        assert isinstance(result, Success)
        user = result.value.user
        assert result.value.is_new_user is True
        assert user.role == UserRole.BUYER
        assert user.email == "ada@example.com"
        assert user.subject_id == "firebase-uid-1"
        assert user.login_count == 1
        assert user.last_login_ip == "203.0.113.7"
        assert user.is_email_verified is True
        user_repo.add_if_absent.assert_awaited_once_with(user)
        profile_repo.ensure_profile.assert_awaited_once_with(user)
        claim_sync.enqueue.assert_called_once_with("firebase-uid-1", "buyer")

    async def test_phone_claim_seeds_phone_number(self, mock_logger):
        handler, _, _, _ = build_handler(mock_logger)

        result = await handler.handle(
            ReconcileIdentity(claims=make_claims(phone_number="+15555550100"))
        )

        assert result.value.user.phone_number == "+15555550100"

    async def test_lost_insert_race_continues_with_existing_row(self, mock_logger):
        winner = make_user(failed_login_attempts=0)
        handler, user_repo, profile_repo, _ = build_handler(mock_logger)
        user_repo.find_by_subject_or_email.side_effect = [None, winner]
        user_repo.get_lockout_state.return_value = winner.lockout_state
        user_repo.add_if_absent.return_value = False

        result = await handler.handle(ReconcileIdentity(claims=make_claims()))

        assert isinstance(result, Success)
        assert result.value.is_new_user is False
        assert result.value.user.id == winner.id
        user_repo.update.assert_awaited_once_with(winner)
        user_repo.save_lockout_state.assert_awaited_once_with(
            winner.id, LockoutState.cleared()
        )
        profile_repo.ensure_profile.assert_not_called()

    async def test_email_required(self, mock_logger):
        handler, user_repo, _, _ = build_handler(mock_logger)

        result = await handler.handle(ReconcileIdentity(claims=make_claims(email=None)))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.EMAIL_REQUIRED
        user_repo.find_by_subject_or_email.assert_not_called()

    @pytest.mark.parametrize(
        "name_hint,claim_name,expected",
        [
            ("Hinted", "Claimed", "Hinted"),
            (None, "Claimed", "Claimed"),
            (None, None, "ada"),
        ],
    )
    async def test_name_precedence(self, mock_logger, name_hint, claim_name, expected):
        handler, _, _, _ = build_handler(mock_logger)

        result = await handler.handle(
            ReconcileIdentity(claims=make_claims(name=claim_name), name_hint=name_hint)
        )

        assert result.value.user.name == expected

    async def test_untrusted_role_hint_ignored(self, mock_logger):
        handler, _, _, _ = build_handler(mock_logger)

        result = await handler.handle(
            ReconcileIdentity(claims=make_claims(), role_hint=UserRole.ADMIN)
        )

        assert result.value.user.role == UserRole.BUYER
        mock_logger.warning.assert_any_call(
            "untrusted_role_hint_ignored",
            subject_id="firebase-uid-1",
            requested_role="admin",
        )

    async def test_trusted_role_hint_honoured(self, mock_logger):
        handler, _, _, claim_sync = build_handler(mock_logger)

        result = await handler.handle(
            ReconcileIdentity(
                claims=make_claims(), role_hint=UserRole.SELLER, trusted=True
            )
        )

        assert result.value.user.role == UserRole.SELLER
        claim_sync.enqueue.assert_called_once_with("firebase-uid-1", "seller")

    async def test_profile_failure_does_not_fail_login(self, mock_logger):
        handler, _, profile_repo, _ = build_handler(mock_logger)
        profile_repo.ensure_profile.side_effect = RuntimeError("db down")

        result = await handler.handle(ReconcileIdentity(claims=make_claims()))

        assert isinstance(result, Success)
        mock_logger.error.assert_called_once()

    async def test_claim_sync_failure_does_not_fail_login(self, mock_logger):
        handler, _, _, claim_sync = build_handler(mock_logger)
        claim_sync.enqueue.side_effect = RuntimeError("queue gone")

        result = await handler.handle(ReconcileIdentity(claims=make_claims()))

        assert isinstance(result, Success)


@pytest.mark.unit
class TestReconcileExisting:
    """Known users."""

    async def test_existing_user_is_returned_with_stored_role(self, mock_logger):
        user = make_user(role=UserRole.SELLER)
        handler, user_repo, profile_repo, _ = build_handler(mock_logger, user=user)

        result = await handler.handle(
            ReconcileIdentity(claims=make_claims(role="seller"), role_hint=UserRole.ADMIN)
        )

        assert isinstance(result, Success)
        assert result.value.is_new_user is False
        assert result.value.user.id == user.id
        assert result.value.user.role == UserRole.SELLER
        user_repo.add_if_absent.assert_not_called()
        profile_repo.ensure_profile.assert_not_called()

    async def test_subject_reanchored_on_email_match(self, mock_logger):
        user = make_user(subject_id="old-uid")
        handler, user_repo, _, _ = build_handler(mock_logger, user=user)

        result = await handler.handle(
            ReconcileIdentity(claims=make_claims(subject_id="new-uid"))
        )

        assert result.value.user.subject_id == "new-uid"
        user_repo.update.assert_awaited()

    async def test_login_clears_lockout_and_counts(self, mock_logger):
        user = make_user(failed_login_attempts=3)
        handler, user_repo, _, _ = build_handler(mock_logger, user=user)

        result = await handler.handle(ReconcileIdentity(claims=make_claims()))

        assert result.value.user.login_count == 1
        user_repo.save_lockout_state.assert_awaited_once_with(
            user.id, LockoutState.cleared()
        )

    async def test_verification_never_reverts(self, mock_logger):
        user = make_user(verified=True)
        verified_at = user.email_verified_at
        handler, _, _, _ = build_handler(mock_logger, user=user)

        result = await handler.handle(
            ReconcileIdentity(claims=make_claims(email_verified=False, sign_in_provider="google.com"))
        )

        assert result.value.user.email_verified_at == verified_at

    async def test_stale_role_claim_enqueues_sync(self, mock_logger):
        user = make_user(role=UserRole.SELLER)
        handler, _, _, claim_sync = build_handler(mock_logger, user=user)

        await handler.handle(ReconcileIdentity(claims=make_claims(role="buyer")))

        claim_sync.enqueue.assert_called_once_with("firebase-uid-1", "seller")

    async def test_matching_role_claim_skips_sync(self, mock_logger):
        user = make_user(role=UserRole.SELLER)
        handler, _, _, claim_sync = build_handler(mock_logger, user=user)

        await handler.handle(ReconcileIdentity(claims=make_claims(role="seller")))

        claim_sync.enqueue.assert_not_called()

    async def test_locked_user_rejected_without_writes(self, mock_logger):
        user = make_user()
        lock = LockoutState(
            failed_login_attempts=5,
            locked_until=datetime.now(UTC) + timedelta(minutes=3),
        )
        handler, user_repo, _, _ = build_handler(mock_logger, user=user, lock_state=lock)

        result = await handler.handle(ReconcileIdentity(claims=make_claims()))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_LOCKED
        user_repo.update.assert_not_called()
        user_repo.save_lockout_state.assert_not_called()

    async def test_suspended_user_rejected(self, mock_logger):
        user = make_user(account_status=AccountStatus.SUSPENDED)
        handler, _, _, _ = build_handler(mock_logger, user=user)

        result = await handler.handle(ReconcileIdentity(claims=make_claims()))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_INACTIVE
        assert result.error.account_status == "suspended"
