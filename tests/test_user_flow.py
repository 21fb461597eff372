"""
Unit tests for the user and config flows.
"""

import httpx
import pytest

from core.errors import ErrorKind
from flows import ConfigFlow, UserFlow

USER = {"id": "u1", "email": "a@example.com", "webauthn_credentials": [{"id": "c1"}]}


@pytest.fixture
def users(http):
    return UserFlow(http)


class TestGetInfo:
    @pytest.mark.asyncio
    async def test_success(self, api, users):
        api.add("POST", "/user", json={"id": "u1", "verified": True, "has_webauthn_credential": False})

        result = await users.get_info("a@example.com")

        assert result.ok
        assert result.value.id == "u1"
        assert result.value.verified is True
        assert result.value.has_webauthn_credential is False
        assert api.body() == {"email": "a@example.com"}

    @pytest.mark.asyncio
    async def test_not_found(self, api, users):
        api.add("POST", "/user", status=404, json={})
        result = await users.get_info("nobody@example.com")
        assert result.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unexpected_status(self, api, users):
        api.add("POST", "/user", status=500, json={})
        result = await users.get_info("a@example.com")
        assert result.kind is ErrorKind.TECHNICAL


class TestCreate:
    @pytest.mark.asyncio
    async def test_success(self, api, users):
        api.add("POST", "/users", json={"id": "u1", "email": "a@example.com"})

        result = await users.create("a@example.com")

        assert result.value.id == "u1"
        assert result.value.webauthn_credentials == []

    @pytest.mark.asyncio
    async def test_conflict(self, api, users):
        api.add("POST", "/users", status=409, json={})
        result = await users.create("a@example.com")
        assert result.kind is ErrorKind.CONFLICT


class TestGetCurrent:
    @pytest.mark.asyncio
    async def test_two_step_lookup(self, api, users):
        api.add("GET", "/me", json={"id": "u1"})
        api.add("GET", "/users/u1", json=USER)

        result = await users.get_current()

        assert result.ok
        assert result.value.email == "a@example.com"
        assert [c.id for c in result.value.webauthn_credentials] == ["c1"]
        assert [r.url.path for r in api.requests] == ["/me", "/users/u1"]

    @pytest.mark.parametrize("status", [400, 401, 404])
    @pytest.mark.asyncio
    async def test_unauthorized_at_me(self, api, users, status):
        api.add("GET", "/me", status=status, json={})

        result = await users.get_current()

        assert result.kind is ErrorKind.UNAUTHORIZED
        assert len(api.requests) == 1

    @pytest.mark.parametrize("status", [400, 401, 404])
    @pytest.mark.asyncio
    async def test_unauthorized_at_user(self, api, users, status):
        api.add("GET", "/me", json={"id": "u1"})
        api.add("GET", "/users/u1", status=status, json={})

        result = await users.get_current()

        assert result.kind is ErrorKind.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_unexpected_status(self, api, users):
        api.add("GET", "/me", status=502, json={})
        result = await users.get_current()
        assert result.kind is ErrorKind.TECHNICAL

    @pytest.mark.asyncio
    async def test_malformed_me(self, api, users):
        api.add("GET", "/me", json={"user": "u1"})
        result = await users.get_current()
        assert result.kind is ErrorKind.TECHNICAL

    @pytest.mark.asyncio
    async def test_timeout_at_second_step(self, api, users):
        api.add("GET", "/me", json={"id": "u1"})
        api.fail("GET", "/users/u1", httpx.ReadTimeout)

        result = await users.get_current()

        assert result.kind is ErrorKind.TIMEOUT


class TestConfig:
    @pytest.mark.asyncio
    async def test_get(self, api, http):
        api.add("GET", "/.well-known/config", json={"password": {"enabled": True}, "extra": 1})

        result = await ConfigFlow(http).get()

        assert result.value.password.enabled is True

    @pytest.mark.asyncio
    async def test_defaults_for_missing_fields(self, api, http):
        api.add("GET", "/.well-known/config", json={})
        result = await ConfigFlow(http).get()
        assert result.value.password.enabled is False

    @pytest.mark.parametrize("status", [401, 404, 500])
    @pytest.mark.asyncio
    async def test_failure_is_technical(self, api, http, status):
        api.add("GET", "/.well-known/config", status=status, json={})
        result = await ConfigFlow(http).get()
        assert result.kind is ErrorKind.TECHNICAL
