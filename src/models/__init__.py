"""
Models Package

Data transfer objects for the authentication API.
"""

from .dto import (
    Config,
    Credential,
    Me,
    Passcode,
    PasswordConfig,
    User,
    UserInfo,
    WebauthnFinalized,
)

__all__ = [
    "Config",
    "Credential",
    "Me",
    "Passcode",
    "PasswordConfig",
    "User",
    "UserInfo",
    "WebauthnFinalized",
]
