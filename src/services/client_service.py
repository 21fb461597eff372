"""
Auth Client Service

Single entry point for the hosting application. Builds the shared
transport and timing store and wires one flow per authentication method.
"""

import httpx

from core.logger import get_logger, setup_logging
from core.settings import Settings, get_settings
from flows import ConfigFlow, PasscodeFlow, PasswordFlow, UserFlow, WebauthnFlow
from state import KeyValueStorage, TimingStore, create_storage
from transport import HttpClient, SessionCookie
from webauthn import BaseAuthenticator, UnavailableAuthenticator

logger = get_logger(__name__)


class AuthClient:
    """
    Aggregates the authentication flows.

    Attributes:
        config: Frontend configuration
        user: User lookup, creation and current user
        webauthn: WebAuthn login and registration
        password: Password login and update
        passcode: Passcode issuance and verification
    """

    def __init__(
        self,
        settings: Settings,
        storage: KeyValueStorage | None = None,
        authenticator: BaseAuthenticator | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            settings: Client settings
            storage: Persistence for timing state and the session cookie
                (derived from settings if not provided)
            authenticator: Platform authenticator (none available if not provided)
            transport: Optional httpx transport for the HTTP client
        """
        self.settings = settings
        self.storage = storage or create_storage(settings)
        self.cookie = SessionCookie(self.storage, name=settings.hanko_cookie_name)
        self.store = TimingStore(self.storage, key=settings.hanko_state_key)
        self.http = HttpClient(
            settings.hanko_api_url,
            self.cookie,
            timeout=settings.hanko_request_timeout,
            transport=transport,
        )

        self.config = ConfigFlow(self.http)
        self.user = UserFlow(self.http)
        self.webauthn = WebauthnFlow(self.http, self.store, authenticator or UnavailableAuthenticator())
        self.password = PasswordFlow(self.http, self.store)
        self.passcode = PasscodeFlow(self.http, self.store)

    async def __aenter__(self) -> "AuthClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP connection pool."""
        await self.http.aclose()


# Global client instance
_client: AuthClient | None = None


def create_client(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    authenticator: BaseAuthenticator | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AuthClient:
    """
    Create a new, independent client.

    Args:
        settings: Client settings (uses defaults if not provided)
        storage: Persistence port override
        authenticator: Platform authenticator
        transport: Optional httpx transport

    Returns:
        AuthClient instance
    """
    settings = settings or get_settings()
    logger.info(f"Creating auth client for {settings.hanko_api_url}")
    return AuthClient(settings, storage=storage, authenticator=authenticator, transport=transport)


def get_client(settings: Settings | None = None) -> AuthClient:
    """
    Get or create the process-wide client.

    Args:
        settings: Client settings (uses defaults if not provided)

    Returns:
        AuthClient instance
    """
    global _client

    if _client is None:
        settings = settings or get_settings()
        setup_logging("DEBUG" if settings.debug else settings.log_level)
        _client = create_client(settings)

    return _client
