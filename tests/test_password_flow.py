"""
Unit tests for the password flow.
"""

import httpx
import pytest

from core.errors import ErrorKind
from flows import PasswordFlow


@pytest.fixture
def flow(http, store):
    return PasswordFlow(http, store)


class TestLogin:
    @pytest.mark.asyncio
    async def test_success(self, api, flow, cookie):
        api.add("POST", "/password/login", headers={"X-Auth-Token": "session-token"})

        result = await flow.login("u1", "secret")

        assert result.ok
        assert result.value is None
        assert api.body() == {"user_id": "u1", "password": "secret"}
        assert cookie.get() == "session-token"

    @pytest.mark.asyncio
    async def test_invalid_password(self, api, flow):
        api.add("POST", "/password/login", status=401, json={})

        result = await flow.login("u1", "bad")

        assert result.kind is ErrorKind.INVALID_PASSWORD
        assert flow.get_retry_after("u1") == 0

    @pytest.mark.asyncio
    async def test_rate_limited(self, api, flow):
        api.add("POST", "/password/login", status=429, json={}, headers={"X-Retry-After": "30"})

        result = await flow.login("u1", "bad")

        assert result.kind is ErrorKind.TOO_MANY_REQUESTS
        assert result.error.retry_after == 30
        assert 29 <= flow.get_retry_after("u1") <= 30

    @pytest.mark.asyncio
    async def test_retry_after_counts_down(self, api, flow, clock):
        api.add("POST", "/password/login", status=429, json={}, headers={"X-Retry-After": "30"})

        await flow.login("u1", "bad")
        clock.advance(10)

        assert flow.get_retry_after("u1") == 20

    @pytest.mark.asyncio
    async def test_unexpected_status(self, api, flow):
        api.add("POST", "/password/login", status=500, json={})
        result = await flow.login("u1", "pw")
        assert result.kind is ErrorKind.TECHNICAL

    @pytest.mark.asyncio
    async def test_timeout(self, api, flow):
        api.fail("POST", "/password/login", httpx.WriteTimeout)
        result = await flow.login("u1", "pw")
        assert result.kind is ErrorKind.TIMEOUT


class TestUpdate:
    @pytest.mark.asyncio
    async def test_success(self, api, flow):
        api.add("PUT", "/password")

        result = await flow.update("u1", "new-secret")

        assert result.ok
        assert api.requests[0].method == "PUT"
        assert api.body() == {"user_id": "u1", "password": "new-secret"}

    @pytest.mark.parametrize("status", [401, 429, 500])
    @pytest.mark.asyncio
    async def test_any_failure_is_technical(self, api, flow, status):
        api.add("PUT", "/password", status=status, json={}, headers={"X-Retry-After": "30"})

        result = await flow.update("u1", "new-secret")

        assert result.kind is ErrorKind.TECHNICAL
        assert flow.get_retry_after("u1") == 0
