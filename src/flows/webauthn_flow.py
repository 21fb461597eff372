"""
WebAuthn Flow

Login and registration with platform authenticators. Each operation is
three steps: fetch options from the API, run the platform ceremony, send
the result back. Credential IDs confirmed by the API are remembered
locally so later sessions can tell whether this device already holds a
credential for the user.
"""

from typing import Any

from core.errors import InvalidWebauthnCredentialError, TechnicalError, WebAuthnRequestCancelledError
from core.logger import get_logger
from core.result import Result
from models import User, WebauthnFinalized
from state import TimingStore
from transport import HttpClient, Response
from webauthn import BaseAuthenticator

from .payload import parse_payload

logger = get_logger(__name__)


def _options(response: Response) -> Result[dict[str, Any]]:
    if not response.ok:
        return Result.failure(TechnicalError())
    try:
        options = response.json()
    except ValueError as e:
        return Result.failure(TechnicalError(e))
    if not isinstance(options, dict):
        return Result.failure(TechnicalError())
    return Result.success(options)


class WebauthnFlow:
    """
    WebAuthn login, registration and the registration prompt heuristic.

    Args:
        http: Shared HTTP client
        store: Shared timing & credential store
        authenticator: Platform ceremony implementation
    """

    def __init__(self, http: HttpClient, store: TimingStore, authenticator: BaseAuthenticator):
        self._http = http
        self._store = store
        self.authenticator = authenticator

    async def login(self, user_id: str | None = None) -> Result[None]:
        """
        Log in with a WebAuthn credential.

        With a user ID the API can restrict the allowed credentials, so the
        platform only offers matching ones. On success the API issues a
        session token via the transport.

        Args:
            user_id: Optional user ID

        Returns:
            Result; fails with WebAuthnRequestCancelled, InvalidWebAuthnCredential,
            Timeout or Technical
        """
        result = await self._http.post("/webauthn/login/initialize", {"user_id": user_id})
        if not result.ok:
            return Result.failure(result.error)

        challenge = _options(result.value)
        if not challenge.ok:
            return Result.failure(challenge.error)

        try:
            assertion = await self.authenticator.get_credential(challenge.value)
        except Exception as e:
            logger.info(f"WebAuthn login ceremony aborted: {e}")
            return Result.failure(WebAuthnRequestCancelledError(e))

        if not isinstance(assertion, dict):
            logger.warning("Authenticator returned a malformed assertion")
            return Result.failure(WebAuthnRequestCancelledError())

        result = await self._http.post("/webauthn/login/finalize", assertion)
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if response.status in (400, 401):
            return Result.failure(InvalidWebauthnCredentialError())
        if not response.ok:
            return Result.failure(TechnicalError())

        finalized = parse_payload(response, WebauthnFinalized)
        if not finalized.ok:
            return Result.failure(finalized.error)

        self._store.append_credential_id(finalized.value.user_id, finalized.value.credential_id)
        logger.info("WebAuthn login succeeded")
        return Result.success()

    async def register(self) -> Result[None]:
        """
        Register a new WebAuthn credential for the logged-in user.

        Returns:
            Result; fails with WebAuthnRequestCancelled, Timeout or Technical
        """
        result = await self._http.post("/webauthn/registration/initialize")
        if not result.ok:
            return Result.failure(result.error)

        challenge = _options(result.value)
        if not challenge.ok:
            return Result.failure(challenge.error)

        try:
            attestation = await self.authenticator.create_credential(challenge.value)
        except Exception as e:
            logger.info(f"WebAuthn registration ceremony aborted: {e}")
            return Result.failure(WebAuthnRequestCancelledError(e))

        credential_response = attestation.get("response") if isinstance(attestation, dict) else None
        if not isinstance(credential_response, dict):
            logger.warning("Authenticator returned a malformed attestation")
            return Result.failure(WebAuthnRequestCancelledError())

        # The API expects the transports at the top level, not under "response"
        payload = dict(attestation)
        payload["transports"] = credential_response.get("transports", [])

        result = await self._http.post("/webauthn/registration/finalize", payload)
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if not response.ok:
            return Result.failure(TechnicalError())

        finalized = parse_payload(response, WebauthnFinalized)
        if not finalized.ok:
            return Result.failure(finalized.error)

        self._store.append_credential_id(finalized.value.user_id, finalized.value.credential_id)
        logger.info("WebAuthn credential registered")
        return Result.success()

    async def is_authenticator_supported(self) -> bool:
        """Check if a user-verifying platform authenticator is available."""
        return await self.authenticator.is_platform_authenticator_available()

    async def should_register(self, user: User) -> Result[bool]:
        """
        Decide whether to prompt the user to register a credential.

        True when a platform authenticator is available and none of the
        user's credentials were registered on this device. Advisory only:
        local state may have been cleared.
        """
        try:
            supported = await self.is_authenticator_supported()
        except Exception as e:
            return Result.failure(TechnicalError(e))

        if not user.webauthn_credentials:
            return Result.success(supported)

        matches = self._store.match_credentials(user.id, user.webauthn_credentials)
        return Result.success(supported and not matches)
