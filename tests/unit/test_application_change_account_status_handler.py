"""Unit tests for ChangeAccountStatusHandler."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.commands.auth_commands import ChangeAccountStatus
from src.application.commands.handlers.change_account_status_handler import (
    ChangeAccountStatusHandler,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.device_type import DeviceType
from src.domain.events.auth_events import UserAccountStatusChanged
from src.domain.value_objects.session_metadata import ActiveSessionRef
from tests.conftest import make_user


def build_handler(mock_event_bus, user=None, revoked=0):
    user_repo = AsyncMock()
    user_repo.find_by_id.return_value = user
    session_repo = AsyncMock()
    session_repo.deactivate_all_for_user.return_value = revoked
    handler = ChangeAccountStatusHandler(
        user_repo=user_repo,
        session_repo=session_repo,
        event_bus=mock_event_bus,
    )
    return handler, user_repo, session_repo


def _with_session_ref(user):
    user.upsert_session_ref(
        ActiveSessionRef(
            session_id=uuid7(),
            device_type=DeviceType.WEB,
            last_activity=datetime.now(UTC),
        )
    )
    return user


@pytest.mark.unit
class TestChangeAccountStatus:
    """Administrator status changes."""

    async def test_suspend_revokes_sessions(self, mock_event_bus):
        user = _with_session_ref(make_user())
        handler, user_repo, session_repo = build_handler(
            mock_event_bus, user=user, revoked=2
        )

        result = await handler.handle(
            ChangeAccountStatus(
                user_id=user.id,
                status=AccountStatus.SUSPENDED,
                changed_by="admin-uid",
                reason="chargeback",
            )
        )

        assert isinstance(result, Success)
        assert result.value.account_status == AccountStatus.SUSPENDED
        assert result.value.status_reason == "chargeback"
        assert result.value.active_sessions == []
        user_repo.update.assert_awaited_once_with(user)
        session_repo.deactivate_all_for_user.assert_awaited_once()
        args = session_repo.deactivate_all_for_user.await_args.args
        assert args[0] == user.id
        assert args[2] == "account_suspended"

        event = mock_event_bus.published[-1]
        assert isinstance(event, UserAccountStatusChanged)
        assert event.previous_status == "active"
        assert event.new_status == "suspended"
        assert event.changed_by == "admin-uid"
        assert event.reason == "chargeback"
        assert event.revoked_count == 2

    async def test_status_stored_before_sessions_revoked(self, mock_event_bus):
        user = make_user()
        handler, user_repo, session_repo = build_handler(mock_event_bus, user=user)
        calls = []
        user_repo.update.side_effect = lambda u: calls.append("update")
        session_repo.deactivate_all_for_user.side_effect = (
            lambda *args: calls.append("revoke") or 0
        )

        await handler.handle(
            ChangeAccountStatus(
                user_id=user.id, status=AccountStatus.BANNED, changed_by="admin-uid"
            )
        )

        assert calls == ["update", "revoke"]

    async def test_reactivate_clears_reason(self, mock_event_bus):
        user = make_user(account_status=AccountStatus.BANNED)
        user.status_reason = "spam"
        handler, user_repo, session_repo = build_handler(mock_event_bus, user=user)

        result = await handler.handle(
            ChangeAccountStatus(
                user_id=user.id, status=AccountStatus.ACTIVE, changed_by="admin-uid"
            )
        )

        assert result.value.is_active()
        assert result.value.status_reason is None
        user_repo.update.assert_awaited_once_with(user)
        session_repo.deactivate_all_for_user.assert_not_called()

        event = mock_event_bus.published[-1]
        assert event.previous_status == "banned"
        assert event.new_status == "active"
        assert event.revoked_count == 0

    async def test_unchanged_status_is_a_no_op(self, mock_event_bus):
        user = make_user(account_status=AccountStatus.SUSPENDED)
        handler, user_repo, session_repo = build_handler(mock_event_bus, user=user)

        result = await handler.handle(
            ChangeAccountStatus(
                user_id=user.id, status=AccountStatus.SUSPENDED, changed_by="admin-uid"
            )
        )

        assert isinstance(result, Success)
        user_repo.update.assert_not_called()
        session_repo.deactivate_all_for_user.assert_not_called()
        assert mock_event_bus.published == []

    async def test_unknown_user(self, mock_event_bus):
        handler, user_repo, _ = build_handler(mock_event_bus)

        result = await handler.handle(
            ChangeAccountStatus(
                user_id=uuid7(), status=AccountStatus.BANNED, changed_by="admin-uid"
            )
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.USER_NOT_FOUND
        user_repo.update.assert_not_called()
