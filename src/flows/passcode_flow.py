"""
Passcode Flow

One-time passcodes sent to the user's email address. The ID and expiry of
the passcode awaiting verification are kept in the timing store, so the
code can be verified (and the countdown shown) after a restart.
"""

from core.errors import (
    InvalidPasscodeError,
    MaxNumOfPasscodeAttemptsReachedError,
    TechnicalError,
    TooManyRequestsError,
)
from core.logger import get_logger
from core.result import Result
from models import Passcode
from state import TimingStore
from transport import HttpClient

from .password_flow import RETRY_AFTER_HEADER
from .payload import parse_payload

logger = get_logger(__name__)


class PasscodeFlow:
    """
    Passcode issuance and verification.

    Args:
        http: Shared HTTP client
        store: Shared timing & credential store
    """

    def __init__(self, http: HttpClient, store: TimingStore):
        self._http = http
        self._store = store

    async def initialize(self, user_id: str) -> Result[Passcode]:
        """
        Ask the API to send a new passcode to the user.

        Returns:
            Result with the Passcode; fails with TooManyRequests, Timeout or Technical
        """
        result = await self._http.post("/passcode/login/initialize", {"user_id": user_id})
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if response.status == 429:
            resend_after = response.header_int(RETRY_AFTER_HEADER)
            self._store.set_passcode_resend_after(user_id, resend_after)
            logger.info(f"Passcode resend blocked for {resend_after}s")
            return Result.failure(TooManyRequestsError(resend_after))
        if not response.ok:
            return Result.failure(TechnicalError())

        passcode = parse_payload(response, Passcode)
        if not passcode.ok:
            return passcode

        self._store.set_active_passcode_id(user_id, passcode.value.id)
        self._store.set_passcode_ttl(user_id, passcode.value.ttl)
        logger.info(f"Passcode issued, valid for {passcode.value.ttl}s")
        return passcode

    async def finalize(self, user_id: str, code: str) -> Result[None]:
        """
        Verify the code entered by the user against the active passcode.

        An InvalidPasscode failure leaves the passcode active for another
        attempt. MaxPasscodeAttemptsReached means a new passcode is needed.
        """
        passcode_id = self._store.get_active_passcode_id(user_id)
        if passcode_id is None:
            logger.debug("No active passcode, submitting anyway")

        result = await self._http.post("/passcode/login/finalize", {"id": passcode_id, "code": code})
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if response.ok:
            self._store.clear_active_passcode(user_id)
            self._store.set_passcode_resend_after(user_id, 0)
            logger.info("Passcode verified")
            return Result.success()
        if response.status == 401:
            return Result.failure(InvalidPasscodeError())
        if response.status in (404, 410):
            self._store.clear_active_passcode(user_id)
            return Result.failure(MaxNumOfPasscodeAttemptsReachedError())
        return Result.failure(TechnicalError())

    def get_ttl(self, user_id: str) -> int:
        """Seconds until the active passcode expires."""
        return self._store.get_passcode_remaining_seconds(user_id)

    def get_resend_after(self, user_id: str) -> int:
        """Seconds until a new passcode may be requested."""
        return self._store.get_passcode_resend_remaining_seconds(user_id)
