"""
Flows Package

One orchestrator per authentication method. Each holds the shared HTTP
client and, where it keeps local facts, the shared timing store.
"""

from .config_flow import ConfigFlow
from .passcode_flow import PasscodeFlow
from .password_flow import PasswordFlow
from .user_flow import UserFlow
from .webauthn_flow import WebauthnFlow

__all__ = [
    "ConfigFlow",
    "PasscodeFlow",
    "PasswordFlow",
    "UserFlow",
    "WebauthnFlow",
]
