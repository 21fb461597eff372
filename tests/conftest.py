"""
Shared pytest fixtures for the auth client tests.

Provides:
- A controllable clock and in-memory storage
- A scripted API built on httpx.MockTransport
- A fake platform authenticator
"""

from collections import defaultdict, deque
from typing import Any

import httpx
import orjson
import pytest
import pytest_asyncio

from core.settings import Settings
from state import MemoryStorage, TimingStore
from transport import HttpClient, SessionCookie
from webauthn import BaseAuthenticator, CeremonyError

API_URL = "https://auth.example.com"


class FakeClock:
    """Clock returning a fixed time until advanced."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedApi:
    """
    Serves queued responses per (method, path) and records requests.

    A queued item is either an httpx.Response or an exception to raise.
    """

    def __init__(self):
        self._queues: dict[tuple[str, str], deque] = defaultdict(deque)
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        content = orjson.dumps(json) if json is not None else b""
        self._queues[(method, path)].append(httpx.Response(status, content=content, headers=headers))

    def fail(self, method: str, path: str, exc_type: type[httpx.HTTPError]) -> None:
        self._queues[(method, path)].append(exc_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._queues.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(500, content=b"{}")
        item = queue.popleft()
        if isinstance(item, type) and issubclass(item, httpx.HTTPError):
            raise item("scripted failure", request=request)
        return item

    def body(self, index: int = -1) -> Any:
        """Decoded JSON body of a recorded request."""
        content = self.requests[index].content
        return orjson.loads(content) if content else None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class FakeAuthenticator(BaseAuthenticator):
    """Platform authenticator returning canned ceremony results."""

    def __init__(self, available: bool = True):
        self.available = available
        self.assertion: dict[str, Any] = {"id": "c1", "type": "public-key", "response": {}}
        self.attestation: dict[str, Any] = {
            "id": "c9",
            "type": "public-key",
            "response": {"attestationObject": "AA", "clientDataJSON": "BB", "transports": ["internal"]},
        }
        self.cancel = False
        self.options: list[dict[str, Any]] = []

    async def is_platform_authenticator_available(self) -> bool:
        return self.available

    async def create_credential(self, options: dict[str, Any]) -> dict[str, Any]:
        self.options.append(options)
        if self.cancel:
            raise CeremonyError("The operation was aborted")
        return self.attestation

    async def get_credential(self, options: dict[str, Any]) -> dict[str, Any]:
        self.options.append(options)
        if self.cancel:
            raise CeremonyError("The operation was aborted")
        return self.assertion


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage, clock: FakeClock) -> TimingStore:
    return TimingStore(storage, key="hanko", clock=clock)


@pytest.fixture
def api() -> ScriptedApi:
    return ScriptedApi()


@pytest.fixture
def cookie(storage: MemoryStorage) -> SessionCookie:
    return SessionCookie(storage, name="hanko")


@pytest_asyncio.fixture
async def http(api: ScriptedApi, cookie: SessionCookie):
    client = HttpClient(API_URL, cookie, timeout=1.0, transport=api.transport)
    yield client
    await client.aclose()


@pytest.fixture
def authenticator() -> FakeAuthenticator:
    return FakeAuthenticator()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, hanko_api_url=API_URL)
