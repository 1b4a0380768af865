"""Integration tests for registration and login."""

import secrets

import pytest
from httpx import AsyncClient

from core.rate_limit import limiter
from tests.conftest import RegisterFn


def _messages(response) -> list[str]:
    return [item["msg"] for item in response.json()["errors"]]


class TestRegisterAPI:
    """Tests for POST /api/v1/users."""

    @pytest.mark.asyncio
    async def test_register_returns_token(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users",
            json={"name": "Ada Lovelace", "email": "ada@example.com", "password": "secret123"},
        )

        assert response.status_code == 200
        assert isinstance(response.json()["token"], str)

    @pytest.mark.asyncio
    async def test_register_duplicate_email_any_case(
        self, client: AsyncClient, register: RegisterFn
    ):
        await register(email="ada@example.com")

        response = await client.post(
            "/api/v1/users",
            json={"name": "Other", "email": "ADA@Example.com", "password": "secret123"},
        )

        assert response.status_code == 400
        assert _messages(response) == ["User already exists"]

    @pytest.mark.asyncio
    async def test_register_reports_every_invalid_field(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/users",
            json={"name": " ", "email": "not-an-email", "password": "123"},
        )

        assert response.status_code == 400
        assert set(_messages(response)) == {
            "Name is required",
            "Please include a valid email",
            "Please enter a password with 6 or more characters",
        }

    @pytest.mark.asyncio
    async def test_register_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/v1/users", json={})

        assert response.status_code == 400
        params = {item["param"] for item in response.json()["errors"]}
        assert params == {"name", "email", "password"}


class TestLoginAPI:
    """Tests for POST /api/v1/auth."""

    @pytest.mark.asyncio
    async def test_login_returns_token(self, client: AsyncClient, register: RegisterFn):
        await register(email="ada@example.com", password="secret123")

        response = await client.post(
            "/api/v1/auth", json={"email": "Ada@example.com", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["token"]

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: AsyncClient, register: RegisterFn):
        await register(email="ada@example.com", password="secret123")

        response = await client.post(
            "/api/v1/auth", json={"email": "ada@example.com", "password": "secret999"}
        )

        assert response.status_code == 400
        assert _messages(response) == ["Invalid Credentials"]

    @pytest.mark.asyncio
    async def test_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth", json={"email": "nobody@example.com", "password": "secret123"}
        )

        assert response.status_code == 400
        assert _messages(response) == ["Invalid Credentials"]

    @pytest.mark.asyncio
    async def test_empty_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth", json={"email": "ada@example.com", "password": ""}
        )

        assert response.status_code == 400
        assert _messages(response) == ["Password is required"]


@pytest.fixture
def throttled():
    """Turn the rate limiter on for one test with empty buckets."""
    limiter.reset()
    limiter.enabled = True
    yield limiter
    limiter.enabled = False
    limiter.reset()


class TestLoginThrottle:
    """Login attempts are limited per client address."""

    @pytest.mark.asyncio
    async def test_rotating_auth_header_does_not_reset_limit(
        self, client: AsyncClient, throttled
    ):
        statuses = []
        for _ in range(12):
            response = await client.post(
                "/api/v1/auth",
                json={"email": "nobody@example.com", "password": "secret123"},
                headers={"x-auth-token": secrets.token_hex(16)},
            )
            statuses.append(response.status_code)

        assert statuses[:10] == [400] * 10
        assert statuses[10:] == [429, 429]
