"""Firebase identity provider adapter.

Implements IdentityProviderProtocol on top of firebase-admin.

Behavior:
    - ID tokens are verified with revocation checking
    - The SDK is synchronous; every call runs in a worker thread under
      asyncio.wait_for so a slow provider cannot stall the event loop
    - verify_token never raises. SDK exceptions map onto VerificationFailure:
        RevokedIdTokenError / UserDisabledError -> REVOKED
        ExpiredIdTokenError                     -> EXPIRED
        InvalidIdTokenError / ValueError        -> MALFORMED
        CertificateFetchError / timeout / other -> UNKNOWN

The firebase ``App`` is created once at start-up (see ``create_firebase_app``)
and injected; nothing here initialises SDK state on first use.
"""

import asyncio
from typing import Any

import firebase_admin
from firebase_admin import auth, credentials

from src.core.result import Failure, Result, Success
from src.domain.enums.verification_failure import VerificationFailure
from src.domain.errors.authentication_error import TokenVerificationError
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.claims import ValidatedClaimSet

DEFAULT_APP_NAME = "identity-core"


def create_firebase_app(
    project_id: str | None,
    credentials_path: str | None = None,
    name: str = DEFAULT_APP_NAME,
) -> firebase_admin.App:
    """Create the firebase-admin App used by the identity adapter.

    Args:
        project_id: Firebase project id (needed for token audience checks).
        credentials_path: Service account JSON. Application default
            credentials are used when None.
        name: App name, unique per process.

    Returns:
        firebase_admin.App: Initialised app.
    """
    credential = (
        credentials.Certificate(credentials_path)
        if credentials_path
        else credentials.ApplicationDefault()
    )
    options = {"projectId": project_id} if project_id else None
    return firebase_admin.initialize_app(credential, options=options, name=name)


def close_firebase_app(app: firebase_admin.App) -> None:
    """Release an App created by create_firebase_app."""
    firebase_admin.delete_app(app)


class FirebaseIdentityProvider:
    """Token verification and role claims backed by Firebase Authentication.

    Args:
        app: Initialised firebase-admin App.
        logger: Structured logger.
        timeout_seconds: Upper bound for each provider call.
    """

    def __init__(
        self,
        app: firebase_admin.App,
        logger: LoggerProtocol,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._app = app
        self._logger = logger
        self._timeout = timeout_seconds

    async def verify_token(
        self,
        credential: str,
    ) -> Result[ValidatedClaimSet, TokenVerificationError]:
        """Verify a Firebase ID token.

        Args:
            credential: Raw ID token.

        Returns:
            Success(ValidatedClaimSet) or Failure(TokenVerificationError).
        """
        if not credential:
            return Failure(
                error=TokenVerificationError.from_kind(VerificationFailure.MALFORMED)
            )

        try:
            decoded = await asyncio.wait_for(
                asyncio.to_thread(
                    auth.verify_id_token,
                    credential,
                    app=self._app,
                    check_revoked=True,
                ),
                timeout=self._timeout,
            )
        # Expired/Revoked subclass InvalidIdTokenError, so they go first.
        except auth.RevokedIdTokenError:
            return self._fail(VerificationFailure.REVOKED)
        except auth.ExpiredIdTokenError:
            return self._fail(VerificationFailure.EXPIRED)
        except auth.UserDisabledError:
            return self._fail(VerificationFailure.REVOKED)
        except auth.InvalidIdTokenError:
            return self._fail(VerificationFailure.MALFORMED)
        except auth.CertificateFetchError as e:
            self._logger.warning("idp_certificate_fetch_failed", error_message=str(e))
            return self._fail(VerificationFailure.UNKNOWN)
        except TimeoutError:
            self._logger.warning("idp_verification_timeout", timeout=self._timeout)
            return self._fail(VerificationFailure.UNKNOWN)
        except ValueError:
            return self._fail(VerificationFailure.MALFORMED)
        except Exception as e:
            self._logger.error("idp_verification_error", error=e)
            return self._fail(VerificationFailure.UNKNOWN)

        return Success(value=self._to_claims(decoded))

    async def set_role_claim(self, subject_id: str, role: str) -> None:
        """Store the role as a custom claim on the Firebase user.

        Raises:
            Exception: Any SDK error or a timeout. The claim sync worker retries.
        """
        await asyncio.wait_for(
            asyncio.to_thread(
                auth.set_custom_user_claims,
                subject_id,
                {"role": role},
                app=self._app,
            ),
            timeout=self._timeout,
        )

    @staticmethod
    def _fail(kind: VerificationFailure) -> Failure[TokenVerificationError]:
        return Failure(error=TokenVerificationError.from_kind(kind))

    @staticmethod
    def _to_claims(decoded: dict[str, Any]) -> ValidatedClaimSet:
        firebase_info = decoded.get("firebase") or {}
        return ValidatedClaimSet(
            subject_id=decoded.get("uid") or decoded["sub"],
            email=decoded.get("email"),
            email_verified=bool(decoded.get("email_verified", False)),
            name=decoded.get("name"),
            picture=decoded.get("picture"),
            phone_number=decoded.get("phone_number"),
            sign_in_provider=firebase_info.get("sign_in_provider"),
            role=decoded.get("role"),
        )
