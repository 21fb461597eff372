"""
Platform Authenticator Interface

Defines the boundary to the platform WebAuthn ceremonies. The client never
verifies signatures itself; it hands server options to the platform and
forwards whatever the platform returns.
"""

from abc import ABC, abstractmethod
from typing import Any


class CeremonyError(Exception):
    """The platform refused, aborted or could not run a ceremony."""


class BaseAuthenticator(ABC):
    """
    Abstract base class for platform authenticators.

    Ceremony methods receive the options JSON sent by the API and return the
    JSON-serializable credential. Any exception they raise is treated as a
    cancelled ceremony.
    """

    @abstractmethod
    async def is_platform_authenticator_available(self) -> bool:
        """Check if a user-verifying platform authenticator is present."""
        pass

    @abstractmethod
    async def create_credential(self, options: dict[str, Any]) -> dict[str, Any]:
        """
        Run the registration ceremony.

        Args:
            options: Credential creation options from the API

        Returns:
            Attestation (PublicKeyCredential JSON)
        """
        pass

    @abstractmethod
    async def get_credential(self, options: dict[str, Any]) -> dict[str, Any]:
        """
        Run the login ceremony.

        Args:
            options: Credential request options from the API

        Returns:
            Assertion (PublicKeyCredential JSON)
        """
        pass


class UnavailableAuthenticator(BaseAuthenticator):
    """Authenticator for hosts without WebAuthn support."""

    async def is_platform_authenticator_available(self) -> bool:
        return False

    async def create_credential(self, options: dict[str, Any]) -> dict[str, Any]:
        raise CeremonyError("No platform authenticator available")

    async def get_credential(self, options: dict[str, Any]) -> dict[str, Any]:
        raise CeremonyError("No platform authenticator available")
