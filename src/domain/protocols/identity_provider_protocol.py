"""Identity provider protocol (port).

Wraps the external identity provider: bearer credential verification and
role custom-claim storage. Implementations own their client object; it is
constructed at process start-up and injected, never initialised lazily
through module state.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.errors.authentication_error import TokenVerificationError
from src.domain.value_objects.claims import ValidatedClaimSet


class IdentityProviderProtocol(Protocol):
    """Identity provider port.

    Behavior:
        - verify_token requests revocation checking
        - verify_token never raises; every failure is a typed Failure
        - A provider timeout is a VerificationFailure.UNKNOWN failure
    """

    async def verify_token(
        self,
        credential: str,
    ) -> Result[ValidatedClaimSet, TokenVerificationError]:
        """Verify a bearer credential.

        Args:
            credential: Raw bearer token (non-empty).

        Returns:
            Success(ValidatedClaimSet) or Failure(TokenVerificationError).
        """
        ...

    async def set_role_claim(self, subject_id: str, role: str) -> None:
        """Store ``role`` as a custom claim on the provider account.

        Args:
            subject_id: Identity provider subject id.
            role: Role value to store.

        Raises:
            Exception: Any provider error. Callers retry.
        """
        ...
