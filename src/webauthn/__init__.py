"""
WebAuthn Package

Interface to the platform credential ceremonies.
"""

from .base_authenticator import BaseAuthenticator, CeremonyError, UnavailableAuthenticator

__all__ = [
    "BaseAuthenticator",
    "CeremonyError",
    "UnavailableAuthenticator",
]
