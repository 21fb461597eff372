"""
User Flow

User lookup and creation, and retrieval of the logged-in user.
"""

from core.errors import ConflictError, NotFoundError, TechnicalError, UnauthorizedError
from core.logger import get_logger
from core.result import Result
from models import Me, User, UserInfo
from transport import HttpClient, Response

from .payload import parse_payload

logger = get_logger(__name__)

_UNAUTHORIZED_STATUSES = (400, 401, 404)


class UserFlow:
    """Operations on user records."""

    def __init__(self, http: HttpClient):
        self._http = http

    async def get_info(self, email: str) -> Result[UserInfo]:
        """
        Fetch basic information about a user by email address.

        Works while logged out and helps deciding which login method to
        offer, e.g. passcode for unverified emails or no WebAuthn when the
        user has no credentials.

        Args:
            email: The user's email address

        Returns:
            Result with UserInfo; NotFound when no such user exists
        """
        result = await self._http.post("/user", {"email": email})
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if response.ok:
            return parse_payload(response, UserInfo)
        if response.status == 404:
            return Result.failure(NotFoundError())
        return Result.failure(TechnicalError())

    async def create(self, email: str) -> Result[User]:
        """
        Create a new user.

        The email address should be verified with a passcode next. A
        Conflict means the address is already registered.
        """
        result = await self._http.post("/users", {"email": email})
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if response.ok:
            logger.info("User created")
            return parse_payload(response, User)
        if response.status == 409:
            return Result.failure(ConflictError())
        return Result.failure(TechnicalError())

    @staticmethod
    def _classify_session_response(response: Response) -> Result[None]:
        if response.ok:
            return Result.success()
        if response.status in _UNAUTHORIZED_STATUSES:
            return Result.failure(UnauthorizedError())
        return Result.failure(TechnicalError())

    async def get_current(self) -> Result[User]:
        """
        Fetch the user of the current session.

        Resolves the own user ID via /me, then loads the full record.
        """
        result = await self._http.get("/me")
        if not result.ok:
            return Result.failure(result.error)

        checked = self._classify_session_response(result.value)
        if not checked.ok:
            return Result.failure(checked.error)

        me = parse_payload(result.value, Me)
        if not me.ok:
            return Result.failure(me.error)

        result = await self._http.get(f"/users/{me.value.id}")
        if not result.ok:
            return Result.failure(result.error)

        checked = self._classify_session_response(result.value)
        if not checked.ok:
            return Result.failure(checked.error)
        return parse_payload(result.value, User)
