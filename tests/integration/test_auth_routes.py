"""
Integration tests for authentication routes.

Tests cover:
- Successful login
- Uniform failure for unknown email and wrong password
- Login after account deletion
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient

LOGIN_URL = "/api/v1/auth/login"
PASSWORD = "Secret123!"


@pytest_asyncio.fixture
async def registered_account(async_client: AsyncClient) -> dict:
    """An account registered through the API."""
    response = await async_client.post(
        "/api/v1/accounts",
        json={
            "first_name": "Jane",
            "last_name": "Roe",
            "email": "jane@example.com",
            "password": PASSWORD,
        },
    )
    assert response.status_code == 201
    return response.json()


class TestLogin:
    """Test login endpoint."""

    @pytest.mark.asyncio
    async def test_login_success(self, async_client: AsyncClient, registered_account: dict):
        """Test successful login returns the account."""
        response = await async_client.post(
            LOGIN_URL, json={"email": "jane@example.com", "password": PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["account"]["id"] == registered_account["id"]
        assert data["account"]["access_levels"] == []

    @pytest.mark.asyncio
    async def test_login_failures_are_uniform(
        self, async_client: AsyncClient, registered_account: dict
    ):
        """Test unknown email and wrong password produce the same 401 response."""
        unknown = await async_client.post(
            LOGIN_URL, json={"email": "nobody@example.com", "password": PASSWORD}
        )
        wrong = await async_client.post(
            LOGIN_URL, json={"email": "jane@example.com", "password": "WrongPass1!"}
        )

        assert unknown.status_code == 401
        assert wrong.status_code == 401
        assert unknown.json()["error"] == wrong.json()["error"]
        assert wrong.json()["error"]["code"] == "INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_login_deleted_account(
        self, async_client: AsyncClient, registered_account: dict
    ):
        """Test a deleted account can no longer log in."""
        await async_client.delete(f"/api/v1/accounts/{registered_account['id']}")

        response = await async_client.post(
            LOGIN_URL, json={"email": "jane@example.com", "password": PASSWORD}
        )

        assert response.status_code == 401
