"""Login handler.

Flow:
1. Authenticate the bearer credential (verify, email check, fresh lock check,
   account status check)
2. Reconcile the verified claims onto one user record (client name hint
   honoured, role hint never)
3. Open or refresh the session for the calling device
4. Emit UserLoginSucceeded event
5. Return Success(LoginResult)

On failure:
- Emit UserLoginFailed event with the rejection code
- Return Failure(error)

Architecture:
- Orchestrates the authentication, reconciliation and session handlers; it
  holds no persistence of its own
- Events are published after every write has been committed
"""

from src.application.commands.auth_commands import (
    AuthenticateRequest,
    Login,
    ReconcileIdentity,
)
from src.application.commands.handlers.authenticate_request_handler import (
    AuthenticateRequestHandler,
)
from src.application.commands.handlers.open_or_refresh_session_handler import (
    OpenOrRefreshSessionHandler,
)
from src.application.commands.handlers.reconcile_identity_handler import (
    ReconcileIdentityHandler,
)
from src.application.commands.session_commands import OpenOrRefreshSession
from src.application.dtos.auth_dtos import LoginResult
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums.login_method import LoginMethod
from src.domain.events.auth_events import UserLoginFailed, UserLoginSucceeded
from src.domain.protocols import EventBusProtocol


class LoginHandler:
    """Handler for the login command."""

    def __init__(
        self,
        authenticate_handler: AuthenticateRequestHandler,
        reconcile_handler: ReconcileIdentityHandler,
        session_handler: OpenOrRefreshSessionHandler,
        event_bus: EventBusProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            authenticate_handler: Credential and policy checks.
            reconcile_handler: Claim set to user record mapping.
            session_handler: Device session bookkeeping.
            event_bus: Event bus for login outcome events.
        """
        self._authenticate_handler = authenticate_handler
        self._reconcile_handler = reconcile_handler
        self._session_handler = session_handler
        self._event_bus = event_bus

    async def handle(self, cmd: Login) -> Result[LoginResult, DomainError]:
        """Handle login.

        Args:
            cmd: Login command.

        Returns:
            Success(LoginResult) on successful login.
            Failure(DomainError) with the rejection code otherwise.
        """
        # Step 1: Authenticate
        auth_result = await self._authenticate_handler.handle(
            AuthenticateRequest(credential=cmd.credential, ip_address=cmd.ip_address)
        )
        if isinstance(auth_result, Failure):
            await self._publish_failure(auth_result.error, cmd)
            return auth_result
        identity = auth_result.value
        claims = identity.claims
        assert claims is not None  # set on every successful authentication

        # Step 2: Reconcile
        reconcile_result = await self._reconcile_handler.handle(
            ReconcileIdentity(
                claims=claims,
                name_hint=cmd.name_hint,
                role_hint=cmd.role_hint,
                ip_address=cmd.ip_address,
            )
        )
        if isinstance(reconcile_result, Failure):
            await self._publish_failure(
                reconcile_result.error, cmd, subject_id=claims.subject_id
            )
            return reconcile_result
        user = reconcile_result.value.user
        is_new_user = reconcile_result.value.is_new_user

        # Step 3: Device session
        session_result = await self._session_handler.handle(
            OpenOrRefreshSession(
                user_id=user.id,
                subject_id=user.subject_id,
                device_fingerprint=cmd.device_fingerprint,
                user_agent=cmd.user_agent,
                ip_address=cmd.ip_address,
                login_method=LoginMethod.from_sign_in_provider(
                    claims.sign_in_provider
                ),
            )
        )
        if isinstance(session_result, Failure):
            return session_result
        session = session_result.value.session

        # Step 4: Emit SUCCEEDED event
        await self._event_bus.publish(
            UserLoginSucceeded(
                user_id=user.id,
                subject_id=user.subject_id,
                is_new_user=is_new_user,
                session_id=session.id,
                ip_address=cmd.ip_address,
            )
        )

        return Success(
            value=LoginResult(user=user, session=session, is_new_user=is_new_user)
        )

    async def _publish_failure(
        self,
        error: DomainError,
        cmd: Login,
        subject_id: str | None = None,
    ) -> None:
        await self._event_bus.publish(
            UserLoginFailed(
                reason=error.code.value,
                subject_id=subject_id,
                ip_address=cmd.ip_address,
            )
        )
