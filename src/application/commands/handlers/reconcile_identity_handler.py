"""Reconcile identity handler.

Maps a verified claim set onto exactly one internal user record, creating it
on first sight.

Flow:
1. Require an email claim
2. Single lookup: subject id OR email (subject match preferred)
3a. Not found: create the user (role defaults to buyer) and its profile shell;
    if a concurrent first login won the insert, continue as 3b on its row
3b. Found: re-check the lock, re-anchor the subject id if it changed, refresh
    display fields, stamp verification, record the login
4. Enqueue role-claim propagation when the echoed role claim is stale
5. Return Success(ReconciliationResult)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- Profile creation and claim propagation are best effort: failures are
  logged and never fail the login
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.commands.auth_commands import ReconcileIdentity
from src.application.dtos.auth_dtos import ReconciliationResult
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.enums.user_role import UserRole
from src.domain.errors import AccessDeniedError, AccountLockedError
from src.domain.protocols import (
    LoggerProtocol,
    ProfileRepository,
    RoleClaimSyncProtocol,
    UserRepository,
)
from src.domain.value_objects.lockout_state import (
    LockoutState,
    is_locked,
    minutes_remaining,
)


class ReconcileIdentityHandler:
    """Handler for identity reconciliation.

    The returned user always carries the authoritative role from storage.
    A role hint is only honoured on creation and only on a trusted path.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
        claim_sync: RoleClaimSyncProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            user_repo: User repository.
            profile_repo: Buyer/seller profile repository.
            claim_sync: Background role-claim propagation.
            logger: Structured logger.
        """
        self._user_repo = user_repo
        self._profile_repo = profile_repo
        self._claim_sync = claim_sync
        self._logger = logger

    async def handle(
        self, cmd: ReconcileIdentity
    ) -> Result[ReconciliationResult, DomainError]:
        """Handle identity reconciliation.

        Args:
            cmd: ReconcileIdentity command.

        Returns:
            Success(ReconciliationResult) with the user and is_new_user.
            Failure(ValidationError) if the claims carry no email.
            Failure(AccountLockedError | AccessDeniedError) if an existing
            account may not sign in right now.
        """
        claims = cmd.claims
        now = datetime.now(UTC)

        # Step 1: Email is required to create or match a record
        if not claims.email or not claims.email.strip():
            return Failure(
                error=ValidationError(
                    code=ErrorCode.EMAIL_REQUIRED,
                    message="An email address is required to sign in.",
                    field="email",
                )
            )
        email = claims.email.strip().lower()

        # Step 2: Single OR lookup
        user = await self._user_repo.find_by_subject_or_email(claims.subject_id, email)

        is_new_user = False
        if user is None:
            # Step 3a: First sight
            created = await self._create_user(cmd, email, now)
            if created is not None:
                user, is_new_user = created, True
            else:
                # A concurrent first login inserted the row after our lookup
                user = await self._user_repo.find_by_subject_or_email(
                    claims.subject_id, email
                )
                if user is None:
                    raise RuntimeError(
                        "User insert was rejected but no matching row exists"
                    )
                self._logger.info(
                    "identity_insert_race_lost",
                    user_id=str(user.id),
                    subject_id=claims.subject_id,
                )

        if not is_new_user:
            # Step 3b: Known user; lock state re-read right before accepting
            rejection = await self._check_can_sign_in(user, now)
            if rejection is not None:
                return Failure(error=rejection)
            self._apply_login(user, cmd, now)
            await self._user_repo.update(user)
            await self._user_repo.save_lockout_state(user.id, LockoutState.cleared())

        # Step 4: Role claim propagation (best effort)
        if is_new_user or UserRole.parse(claims.role) != user.role:
            self._enqueue_claim_sync(user)

        self._logger.info(
            "identity_reconciled",
            user_id=str(user.id),
            is_new_user=is_new_user,
            role=user.role.value,
        )
        return Success(value=ReconciliationResult(user=user, is_new_user=is_new_user))

    async def _create_user(
        self, cmd: ReconcileIdentity, email: str, now: datetime
    ) -> User | None:
        claims = cmd.claims
        role = UserRole.BUYER
        if cmd.trusted and cmd.role_hint is not None:
            role = cmd.role_hint
        elif cmd.role_hint is not None and cmd.role_hint != UserRole.BUYER:
            self._logger.warning(
                "untrusted_role_hint_ignored",
                subject_id=claims.subject_id,
                requested_role=cmd.role_hint.value,
            )

        user = User(
            id=uuid7(),
            subject_id=claims.subject_id,
            email=email,
            name=cmd.name_hint or claims.name or email.split("@")[0],
            avatar_url=claims.picture,
            phone_number=claims.phone_number,
            role=role,
            login_count=1,
            last_login=now,
            last_login_ip=cmd.ip_address,
            email_verified_at=now if claims.email_verified else None,
            created_at=now,
            updated_at=now,
        )
        if not await self._user_repo.add_if_absent(user):
            return None

        try:
            await self._profile_repo.ensure_profile(user)
        except Exception as e:
            self._logger.error(
                "role_profile_creation_failed",
                error=e,
                user_id=str(user.id),
                role=user.role.value,
            )
        return user

    async def _check_can_sign_in(self, user: User, now: datetime) -> DomainError | None:
        state = await self._user_repo.get_lockout_state(user.id) or user.lockout_state
        locked, _ = is_locked(state, now)
        if locked:
            minutes = minutes_remaining(state, now)
            return AccountLockedError(
                code=ErrorCode.ACCOUNT_LOCKED,
                message=f"Account is temporarily locked. Try again in {minutes} minutes.",
                retry_after_minutes=minutes,
            )
        if not user.is_active():
            return AccessDeniedError(
                code=ErrorCode.ACCOUNT_INACTIVE,
                message=f"Account is {user.account_status.value}.",
                account_status=user.account_status.value,
            )
        return None

    def _apply_login(self, user: User, cmd: ReconcileIdentity, now: datetime) -> None:
        claims = cmd.claims
        if user.subject_id != claims.subject_id:
            self._logger.info(
                "user_subject_reanchored",
                user_id=str(user.id),
                previous_subject_id=user.subject_id,
                subject_id=claims.subject_id,
            )
            user.subject_id = claims.subject_id
        user.update_display_fields(claims.name, claims.picture)
        if claims.email_verified:
            user.mark_email_verified(now)
        user.record_successful_login(now, ip_address=cmd.ip_address)
        user.updated_at = now

    def _enqueue_claim_sync(self, user: User) -> None:
        try:
            queued = self._claim_sync.enqueue(user.subject_id, user.role.value)
        except Exception as e:
            self._logger.error("role_claim_enqueue_failed", error=e, user_id=str(user.id))
            return
        if not queued:
            self._logger.warning("role_claim_enqueue_rejected", user_id=str(user.id))
