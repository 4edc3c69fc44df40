"""Unit tests for LoginHandler orchestration."""

from unittest.mock import AsyncMock

import pytest

from src.application.commands.auth_commands import Login
from src.application.commands.handlers.login_handler import LoginHandler
from src.application.dtos.auth_dtos import AuthenticatedIdentity, ReconciliationResult
from src.application.dtos.session_dtos import SessionOpenResult
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums.login_method import LoginMethod
from src.domain.enums.user_role import UserRole
from src.domain.enums.verification_failure import VerificationFailure
from src.domain.errors import AccountLockedError, TokenVerificationError
from src.domain.events.auth_events import UserLoginFailed, UserLoginSucceeded
from tests.conftest import make_claims, make_session, make_user


def build_handler(mock_event_bus, claims=None, is_new_user=False):
    claims = claims or make_claims(sign_in_provider="google.com")
    user = make_user()
    session = make_session(user.id)

    authenticate = AsyncMock()
    authenticate.handle.return_value = Success(
        value=AuthenticatedIdentity(
            subject_id=claims.subject_id,
            email=claims.email,
            name=claims.name,
            avatar_url=None,
            role=UserRole.BUYER,
            claims=claims,
        )
    )
    reconcile = AsyncMock()
    reconcile.handle.return_value = Success(
        value=ReconciliationResult(user=user, is_new_user=is_new_user)
    )
    sessions = AsyncMock()
    sessions.handle.return_value = Success(
        value=SessionOpenResult(session=session, created=True)
    )

    handler = LoginHandler(
        authenticate_handler=authenticate,
        reconcile_handler=reconcile,
        session_handler=sessions,
        event_bus=mock_event_bus,
    )
    return handler, authenticate, reconcile, sessions, user, session


def login_command(**overrides):
    values = {
        "credential": "tok",
        "name_hint": "Ada",
        "ip_address": "203.0.113.7",
        "user_agent": "Mozilla/5.0",
        "device_fingerprint": "Mozilla/5.0",
    }
    values.update(overrides)
    return Login(**values)


@pytest.mark.unit
class TestLoginHandler:
    """Login orchestration."""

    async def test_success_returns_user_and_session(self, mock_event_bus):
        handler, _, reconcile, sessions, user, session = build_handler(
            mock_event_bus, is_new_user=True
        )

        result = await handler.handle(login_command())

        assert isinstance(result, Success)
        assert result.value.user is user
        assert result.value.session is session
        assert result.value.is_new_user is True

        reconcile_cmd = reconcile.handle.await_args.args[0]
        assert reconcile_cmd.name_hint == "Ada"
        assert reconcile_cmd.trusted is False

        session_cmd = sessions.handle.await_args.args[0]
        assert session_cmd.user_id == user.id
        assert session_cmd.login_method == LoginMethod.GOOGLE
        assert session_cmd.device_fingerprint == "Mozilla/5.0"

        succeeded = mock_event_bus.published[-1]
        assert isinstance(succeeded, UserLoginSucceeded)
        assert succeeded.session_id == session.id
        assert succeeded.is_new_user is True

    async def test_role_hint_forwarded_untrusted(self, mock_event_bus):
        handler, _, reconcile, _, _, _ = build_handler(mock_event_bus)

        await handler.handle(login_command(role_hint=UserRole.ADMIN))

        reconcile_cmd = reconcile.handle.await_args.args[0]
        assert reconcile_cmd.role_hint == UserRole.ADMIN
        assert reconcile_cmd.trusted is False

    async def test_authentication_failure_short_circuits(self, mock_event_bus):
        handler, authenticate, reconcile, sessions, _, _ = build_handler(mock_event_bus)
        authenticate.handle.return_value = Failure(
            error=TokenVerificationError.from_kind(VerificationFailure.EXPIRED)
        )

        result = await handler.handle(login_command())

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        reconcile.handle.assert_not_called()
        sessions.handle.assert_not_called()
        failed = mock_event_bus.published[-1]
        assert isinstance(failed, UserLoginFailed)
        assert failed.reason == "token_expired"

    async def test_reconcile_failure_reports_subject(self, mock_event_bus):
        handler, _, reconcile, sessions, _, _ = build_handler(mock_event_bus)
        reconcile.handle.return_value = Failure(
            error=AccountLockedError(
                code=ErrorCode.ACCOUNT_LOCKED,
                message="locked",
                retry_after_minutes=3,
            )
        )

        result = await handler.handle(login_command())

        assert isinstance(result, Failure)
        sessions.handle.assert_not_called()
        failed = mock_event_bus.published[-1]
        assert failed.reason == "account_locked"
        assert failed.subject_id == "firebase-uid-1"
