"""
Core Module

Provides foundational utilities used across the client:
- Configuration management
- Logging setup
- Error taxonomy and operation results
"""

from .errors import (
    AuthError,
    ConflictError,
    ErrorKind,
    InvalidPasscodeError,
    InvalidPasswordError,
    InvalidWebauthnCredentialError,
    MaxNumOfPasscodeAttemptsReachedError,
    NotFoundError,
    RequestTimeoutError,
    TechnicalError,
    TooManyRequestsError,
    UnauthorizedError,
    WebAuthnRequestCancelledError,
)
from .logger import get_logger, set_log_level, setup_logging
from .result import Result
from .settings import Settings, get_settings

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "setup_logging",
    "get_logger",
    "set_log_level",
    # Errors
    "ErrorKind",
    "AuthError",
    "TechnicalError",
    "RequestTimeoutError",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
    "InvalidPasswordError",
    "InvalidPasscodeError",
    "MaxNumOfPasscodeAttemptsReachedError",
    "InvalidWebauthnCredentialError",
    "WebAuthnRequestCancelledError",
    "TooManyRequestsError",
    # Results
    "Result",
]
