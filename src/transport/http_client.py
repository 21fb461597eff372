"""
HTTP Transport

Thin async wrapper around httpx used by every flow. It adds the JSON
headers and the bearer token to outgoing requests and stores the rotated
token from the X-Auth-Token response header before the response is handed
back, so the next request already carries it.

Network failures and timeouts come back as failed Results, never as
raised httpx exceptions.
"""

import re
from typing import Any

import httpx
import orjson

from core.errors import RequestTimeoutError, TechnicalError
from core.logger import get_logger
from core.result import Result

from .cookie import SessionCookie

logger = get_logger(__name__)

AUTH_TOKEN_HEADER = "X-Auth-Token"

# Leading integer of a header value, e.g. "30" in "30.5" or "30s"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Response:
    """Status, headers and lazily decoded JSON body of an API response."""

    def __init__(self, response: httpx.Response):
        self._response = response
        self.status = response.status_code
        self.ok = 200 <= response.status_code <= 299

    def header(self, name: str) -> str | None:
        return self._response.headers.get(name)

    def header_int(self, name: str, default: int = 0) -> int:
        """Leading integer of a header; default when missing or not numeric."""
        value = self.header(name)
        if value is None:
            return default
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else default

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return orjson.loads(self._response.content)

    def __repr__(self) -> str:
        return f"Response(status={self.status})"


class HttpClient:
    """
    HTTP client for the authentication API.

    Args:
        api_url: Base URL of the API
        cookie: Session cookie holding the bearer token
        timeout: Request timeout in seconds
        transport: Optional httpx transport (e.g. httpx.MockTransport)
    """

    def __init__(
        self,
        api_url: str,
        cookie: SessionCookie,
        timeout: float = 13.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.cookie = cookie
        self._secure = self.api_url.startswith("https://")
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        token = self.cookie.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _encode(body: Any) -> bytes | None:
        if body is None:
            return None
        if isinstance(body, dict):
            body = {k: v for k, v in body.items() if v is not None}
        return orjson.dumps(body)

    async def _fetch(self, method: str, path: str, body: Any = None) -> Result[Response]:
        try:
            raw = await self._client.request(
                method,
                path,
                content=self._encode(body),
                headers=self._headers(),
            )
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out after {self.timeout}s")
            return Result.failure(RequestTimeoutError(e))
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            return Result.failure(TechnicalError(e))

        token = raw.headers.get(AUTH_TOKEN_HEADER)
        if token:
            self.cookie.set(token, secure=self._secure)

        logger.debug(f"{method} {path} -> {raw.status_code}")
        return Result.success(Response(raw))

    async def get(self, path: str) -> Result[Response]:
        """Perform a GET request."""
        return await self._fetch("GET", path)

    async def post(self, path: str, body: Any = None) -> Result[Response]:
        """Perform a POST request with an optional JSON body."""
        return await self._fetch("POST", path, body)

    async def put(self, path: str, body: Any = None) -> Result[Response]:
        """Perform a PUT request with an optional JSON body."""
        return await self._fetch("PUT", path, body)
