"""Authenticate request handler.

Resolves a bearer credential into an AuthenticatedIdentity for protected
routes.

Flow:
1. Reject a missing or blank credential (TOKEN_MISSING)
2. Verify the credential with the identity provider (revocation checked)
3. Reject an unverified email unless a trusted OAuth provider vouches for it
4. Look up the stored user (subject id, then email)
5. Re-read the lock state; reject while locked, persist an auto-unlock
6. Reject accounts that are not active
7. Return Success(AuthenticatedIdentity) with the stored role

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- NO infrastructure imports (identity provider and repository are injected)
"""

from datetime import UTC, datetime

from src.application.commands.auth_commands import AuthenticateRequest
from src.application.dtos.auth_dtos import AuthenticatedIdentity
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums.user_role import UserRole
from src.domain.errors import (
    AccessDeniedError,
    AccountLockedError,
    MissingTokenError,
)
from src.domain.protocols import (
    IdentityProviderProtocol,
    LoggerProtocol,
    UserRepository,
)
from src.domain.value_objects.lockout_state import is_locked, minutes_remaining

DEFAULT_TRUSTED_PROVIDERS = frozenset({"google.com", "apple.com", "facebook.com"})


class AuthenticateRequestHandler:
    """Handler for request authentication.

    Never mutates the user record except to persist an expired lock being
    cleared.
    """

    def __init__(
        self,
        identity_provider: IdentityProviderProtocol,
        user_repo: UserRepository,
        logger: LoggerProtocol,
        trusted_providers: frozenset[str] = DEFAULT_TRUSTED_PROVIDERS,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            identity_provider: Token verification gateway.
            user_repo: User repository for the stored role and lock state.
            logger: Structured logger.
            trusted_providers: Sign-in providers exempt from the email check.
        """
        self._identity_provider = identity_provider
        self._user_repo = user_repo
        self._logger = logger
        self._trusted_providers = trusted_providers

    async def handle(
        self, cmd: AuthenticateRequest
    ) -> Result[AuthenticatedIdentity, DomainError]:
        """Handle request authentication.

        Args:
            cmd: AuthenticateRequest command with the raw credential.

        Returns:
            Success(AuthenticatedIdentity) when every check passes.
            Failure(DomainError) with the rejection code otherwise.
        """
        # Step 1: Credential must be present
        credential = (cmd.credential or "").strip()
        if not credential:
            return Failure(
                error=MissingTokenError(
                    code=ErrorCode.TOKEN_MISSING,
                    message="No authentication token provided.",
                )
            )

        # Step 2: Verify with the identity provider
        verify_result = await self._identity_provider.verify_token(credential)
        if isinstance(verify_result, Failure):
            self._logger.warning(
                "token_verification_failed",
                kind=verify_result.error.kind.value,
                ip_address=cmd.ip_address,
            )
            return Failure(error=verify_result.error)
        claims = verify_result.value

        # Step 3: Email must be verified unless an OAuth provider vouches for it
        if not claims.email_verified and not claims.is_trusted_oauth(
            self._trusted_providers
        ):
            return Failure(
                error=AccessDeniedError(
                    code=ErrorCode.EMAIL_NOT_VERIFIED,
                    message="Please verify your email address before signing in.",
                )
            )

        # Step 4: Stored user (if any) supplies the authoritative role
        email = claims.email.strip().lower() if claims.email else None
        user = await self._user_repo.find_by_subject_or_email(claims.subject_id, email)
        if user is None:
            return Success(
                value=AuthenticatedIdentity(
                    subject_id=claims.subject_id,
                    email=email,
                    name=claims.name,
                    avatar_url=claims.picture,
                    role=UserRole.BUYER,
                    claims=claims,
                )
            )

        # Step 5: Fresh lock check
        now = datetime.now(UTC)
        state = await self._user_repo.get_lockout_state(user.id) or user.lockout_state
        locked, current = is_locked(state, now)
        if locked:
            minutes = minutes_remaining(state, now)
            return Failure(
                error=AccountLockedError(
                    code=ErrorCode.ACCOUNT_LOCKED,
                    message=f"Account is temporarily locked. Try again in {minutes} minutes.",
                    retry_after_minutes=minutes,
                )
            )
        if current != state:
            await self._user_repo.save_lockout_state(user.id, current)
            self._logger.info("account_auto_unlocked", user_id=str(user.id))

        # Step 6: Account status
        if not user.is_active():
            return Failure(
                error=AccessDeniedError(
                    code=ErrorCode.ACCOUNT_INACTIVE,
                    message=f"Account is {user.account_status.value}.",
                    account_status=user.account_status.value,
                )
            )

        # Step 7: Attach identity
        return Success(
            value=AuthenticatedIdentity(
                subject_id=claims.subject_id,
                email=user.email,
                name=user.name,
                avatar_url=user.avatar_url,
                role=user.role,
                user_id=user.id,
                claims=claims,
            )
        )
