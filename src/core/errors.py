"""
Authentication Error Taxonomy

Every failure an operation can report maps to exactly one ErrorKind.
Callers branch on the kind (or the concrete class), never on messages.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure reported by the transport and the flows."""
    TECHNICAL = "technical"
    TIMEOUT = "timeout"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_PASSWORD = "invalid_password"
    INVALID_PASSCODE = "invalid_passcode"
    MAX_PASSCODE_ATTEMPTS_REACHED = "max_passcode_attempts_reached"
    INVALID_WEBAUTHN_CREDENTIAL = "invalid_webauthn_credential"
    WEBAUTHN_REQUEST_CANCELLED = "webauthn_request_cancelled"
    TOO_MANY_REQUESTS = "too_many_requests"


class AuthError(Exception):
    """
    Base class of all authentication errors.

    Args:
        cause: Underlying exception, if any
    """

    kind: ErrorKind = ErrorKind.TECHNICAL
    message: str = "Technical error"

    def __init__(self, cause: BaseException | None = None):
        super().__init__(self.message)
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r})"


class TechnicalError(AuthError):
    kind = ErrorKind.TECHNICAL
    message = "Technical error"


class RequestTimeoutError(AuthError):
    kind = ErrorKind.TIMEOUT
    message = "Request timed out"


class UnauthorizedError(AuthError):
    kind = ErrorKind.UNAUTHORIZED
    message = "Unauthorized"


class NotFoundError(AuthError):
    kind = ErrorKind.NOT_FOUND
    message = "Not found"


class ConflictError(AuthError):
    kind = ErrorKind.CONFLICT
    message = "Conflict"


class InvalidPasswordError(AuthError):
    kind = ErrorKind.INVALID_PASSWORD
    message = "Invalid password"


class InvalidPasscodeError(AuthError):
    kind = ErrorKind.INVALID_PASSCODE
    message = "Invalid passcode"


class MaxNumOfPasscodeAttemptsReachedError(AuthError):
    kind = ErrorKind.MAX_PASSCODE_ATTEMPTS_REACHED
    message = "Maximum number of passcode attempts reached"


class InvalidWebauthnCredentialError(AuthError):
    kind = ErrorKind.INVALID_WEBAUTHN_CREDENTIAL
    message = "Invalid WebAuthn credential"


class WebAuthnRequestCancelledError(AuthError):
    kind = ErrorKind.WEBAUTHN_REQUEST_CANCELLED
    message = "WebAuthn request cancelled"


class TooManyRequestsError(AuthError):
    """Rate limited by the API; `retry_after` is the wait in seconds."""

    kind = ErrorKind.TOO_MANY_REQUESTS
    message = "Too many requests"

    def __init__(self, retry_after: int = 0, cause: BaseException | None = None):
        super().__init__(cause)
        self.retry_after = retry_after

    def __repr__(self) -> str:
        return f"{type(self).__name__}(retry_after={self.retry_after})"
