"""
Password Flow

Password login and update.
"""

from core.errors import InvalidPasswordError, TechnicalError, TooManyRequestsError
from core.logger import get_logger
from core.result import Result
from state import TimingStore
from transport import HttpClient

logger = get_logger(__name__)

RETRY_AFTER_HEADER = "X-Retry-After"


class PasswordFlow:
    def __init__(self, http: HttpClient, store: TimingStore):
        self._http = http
        self._store = store

    async def login(self, user_id: str, password: str) -> Result[None]:
        """
        Log in with a password. The session token arrives via the transport.

        Args:
            user_id: The user's ID
            password: The password

        Returns:
            Result; fails with InvalidPassword, TooManyRequests, Timeout or Technical
        """
        result = await self._http.post("/password/login", {"user_id": user_id, "password": password})
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if response.ok:
            logger.info("Password login succeeded")
            return Result.success()
        if response.status == 401:
            return Result.failure(InvalidPasswordError())
        if response.status == 429:
            retry_after = response.header_int(RETRY_AFTER_HEADER)
            self._store.set_password_retry_after(user_id, retry_after)
            logger.info(f"Password login rate limited for {retry_after}s")
            return Result.failure(TooManyRequestsError(retry_after))
        return Result.failure(TechnicalError())

    async def update(self, user_id: str, password: str) -> Result[None]:
        """Set a new password. Requires a session; any failure is Technical."""
        result = await self._http.put("/password", {"user_id": user_id, "password": password})
        if not result.ok:
            return Result.failure(result.error)

        if not result.value.ok:
            return Result.failure(TechnicalError())
        logger.info("Password updated")
        return Result.success()

    def get_retry_after(self, user_id: str) -> int:
        """Seconds until password login is allowed again."""
        return self._store.get_password_retry_remaining_seconds(user_id)
