"""
Integration tests for account routes.

Tests cover:
- Account registration and duplicate email handling
- Request and business validation errors
- Get, update and soft delete
- Paginated listing
- Access level assignment, listing and removal
"""

import asyncio
import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient

ACCOUNTS_URL = "/api/v1/accounts"
ACCESS_LEVELS_URL = "/api/v1/access-levels"


def account_payload(**overrides) -> dict:
    payload = {
        "first_name": "Jane",
        "last_name": "Roe",
        "email": "jane@example.com",
        "phone_number": "+1-555-0100",
        "password": "Secret123!",
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def created_account(async_client: AsyncClient) -> dict:
    """An account registered through the API."""
    response = await async_client.post(ACCOUNTS_URL, json=account_payload())
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def created_levels(async_client: AsyncClient) -> dict[str, dict]:
    """Access levels "admin" and "viewer" created through the API."""
    levels = {}
    for name in ("viewer", "admin"):
        response = await async_client.post(ACCESS_LEVELS_URL, json={"name": name})
        assert response.status_code == 201
        levels[name] = response.json()
    return levels


# ============================================================================
# Registration Tests
# ============================================================================
class TestCreateAccount:
    """Test account registration endpoint."""

    @pytest.mark.asyncio
    async def test_create_account_success(self, async_client: AsyncClient):
        """Test successful registration."""
        response = await async_client.post(ACCOUNTS_URL, json=account_payload())

        assert response.status_code == 201
        data = response.json()

        assert data["email"] == "jane@example.com"
        assert data["first_name"] == "Jane"
        assert data["phone_number"] == "+1-555-0100"
        assert data["access_levels"] == []
        assert "password" not in data
        assert uuid.UUID(data["id"])
        assert "created_at" in data
        assert "updated_at" in data

    @pytest.mark.asyncio
    async def test_create_account_without_phone(self, async_client: AsyncClient):
        """Test a missing phone number is rendered as an empty string."""
        payload = account_payload()
        del payload["phone_number"]

        response = await async_client.post(ACCOUNTS_URL, json=payload)

        assert response.status_code == 201
        assert response.json()["phone_number"] == ""

    @pytest.mark.asyncio
    async def test_create_account_duplicate_email(
        self, async_client: AsyncClient, created_account: dict
    ):
        """Test registration with an email already in use fails."""
        response = await async_client.post(
            ACCOUNTS_URL, json=account_payload(first_name="Other")
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "ALREADY_EXISTS"
        assert "email" in data["error"]["message"].lower()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"first_name": ""},
            {"last_name": "   "},
            {"email": "jane.example.com"},
            {"password": "short"},
        ],
    )
    async def test_create_account_invalid_input(
        self, async_client: AsyncClient, overrides: dict
    ):
        """Test business validation failures return 400 and persist nothing."""
        response = await async_client.post(ACCOUNTS_URL, json=account_payload(**overrides))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

        listing = await async_client.get(ACCOUNTS_URL)
        assert listing.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_create_account_missing_field(self, async_client: AsyncClient):
        """Test a malformed request body is rejected with 400."""
        payload = account_payload()
        del payload["password"]

        response = await async_client.post(ACCOUNTS_URL, json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "VALIDATION_ERROR"
        assert data["meta"]["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_email_reusable_after_delete(
        self, async_client: AsyncClient, created_account: dict
    ):
        """Test a deleted account's email can be registered again."""
        await async_client.delete(f"{ACCOUNTS_URL}/{created_account['id']}")

        response = await async_client.post(ACCOUNTS_URL, json=account_payload())

        assert response.status_code == 201
        assert response.json()["id"] != created_account["id"]


# ============================================================================
# Get / Update / Delete Tests
# ============================================================================
class TestAccountLifecycle:
    """Test account retrieval, update and deletion endpoints."""

    @pytest.mark.asyncio
    async def test_get_account(self, async_client: AsyncClient, created_account: dict):
        """Test getting an account by ID."""
        response = await async_client.get(f"{ACCOUNTS_URL}/{created_account['id']}")

        assert response.status_code == 200
        assert response.json()["email"] == "jane@example.com"

    @pytest.mark.asyncio
    async def test_get_account_not_found(self, async_client: AsyncClient):
        """Test getting an unknown account returns 404."""
        response = await async_client.get(f"{ACCOUNTS_URL}/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_account_invalid_id(self, async_client: AsyncClient):
        """Test a malformed account ID is rejected with 400."""
        response = await async_client.get(f"{ACCOUNTS_URL}/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_update_account(self, async_client: AsyncClient, created_account: dict):
        """Test provided fields change and blank ones are ignored."""
        response = await async_client.put(
            f"{ACCOUNTS_URL}/{created_account['id']}",
            json={"first_name": "Janet", "last_name": "", "email": "janet@example.com"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["first_name"] == "Janet"
        assert data["last_name"] == "Roe"
        assert data["email"] == "janet@example.com"

        fetched = await async_client.get(f"{ACCOUNTS_URL}/{created_account['id']}")
        assert fetched.json()["first_name"] == "Janet"

    @pytest.mark.asyncio
    async def test_update_account_email_conflict(
        self, async_client: AsyncClient, created_account: dict
    ):
        """Test changing email to another account's email fails."""
        await async_client.post(ACCOUNTS_URL, json=account_payload(email="other@example.com"))

        response = await async_client.put(
            f"{ACCOUNTS_URL}/{created_account['id']}", json={"email": "other@example.com"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ALREADY_EXISTS"

    @pytest.mark.asyncio
    async def test_update_account_own_email(
        self, async_client: AsyncClient, created_account: dict
    ):
        """Test re-submitting the same email succeeds."""
        response = await async_client.put(
            f"{ACCOUNTS_URL}/{created_account['id']}", json={"email": "jane@example.com"}
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_account(self, async_client: AsyncClient, created_account: dict):
        """Test a deleted account is no longer visible."""
        url = f"{ACCOUNTS_URL}/{created_account['id']}"

        response = await async_client.delete(url)
        assert response.status_code == 200
        assert response.json()["message"] == "Account deleted successfully"

        assert (await async_client.get(url)).status_code == 404
        assert (await async_client.put(url, json={"first_name": "X"})).status_code == 404
        assert (await async_client.delete(url)).status_code == 404


# ============================================================================
# Listing Tests
# ============================================================================
class TestListAccounts:
    """Test account listing endpoint."""

    @pytest.mark.asyncio
    async def test_list_accounts_paginated(self, async_client: AsyncClient):
        """Test the page window and total count."""
        for i in range(5):
            await async_client.post(ACCOUNTS_URL, json=account_payload(email=f"user{i}@example.com"))

        response = await async_client.get(ACCOUNTS_URL, params={"page": 2, "page_size": 3})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        assert data["page"] == 2
        assert data["page_size"] == 3
        assert len(data["accounts"]) == 2

    @pytest.mark.asyncio
    async def test_list_accounts_newest_first(self, async_client: AsyncClient):
        """Test accounts are listed by creation time, newest first."""
        for i in range(3):
            await async_client.post(ACCOUNTS_URL, json=account_payload(email=f"user{i}@example.com"))
            await asyncio.sleep(0.01)

        response = await async_client.get(ACCOUNTS_URL)

        assert response.status_code == 200
        emails = [account["email"] for account in response.json()["accounts"]]
        assert emails == ["user2@example.com", "user1@example.com", "user0@example.com"]

    @pytest.mark.asyncio
    async def test_list_accounts_normalizes_pagination(
        self, async_client: AsyncClient, created_account: dict
    ):
        """Test out-of-range pagination falls back to defaults."""
        response = await async_client.get(ACCOUNTS_URL, params={"page": 0, "page_size": 500})

        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["page_size"] == 10
        assert [account["id"] for account in data["accounts"]] == [created_account["id"]]


# ============================================================================
# Access Level Assignment Tests
# ============================================================================
class TestAccountAccessLevels:
    """Test access level assignment endpoints."""

    @pytest.mark.asyncio
    async def test_create_then_assign(
        self,
        async_client: AsyncClient,
        created_account: dict,
        created_levels: dict[str, dict],
    ):
        """Test assigned access levels show up on the account, ordered by name."""
        url = f"{ACCOUNTS_URL}/{created_account['id']}"
        level_ids = [created_levels["viewer"]["id"], created_levels["admin"]["id"]]

        response = await async_client.post(
            f"{url}/access-levels", json={"access_level_ids": level_ids}
        )
        assert response.status_code == 200

        # Assigning again is a no-op
        response = await async_client.post(
            f"{url}/access-levels", json={"access_level_ids": level_ids}
        )
        assert response.status_code == 200

        levels = (await async_client.get(f"{url}/access-levels")).json()
        assert [level["name"] for level in levels] == ["admin", "viewer"]
        assert levels[0]["description"] == ""

        account = (await async_client.get(url)).json()
        assert [level["name"] for level in account["access_levels"]] == ["admin", "viewer"]

    @pytest.mark.asyncio
    async def test_assign_unknown_access_level(
        self,
        async_client: AsyncClient,
        created_account: dict,
        created_levels: dict[str, dict],
    ):
        """Test an unknown access level returns 404 and earlier assignments stay committed."""
        url = f"{ACCOUNTS_URL}/{created_account['id']}"

        response = await async_client.post(
            f"{url}/access-levels",
            json={"access_level_ids": [created_levels["admin"]["id"], 9999]},
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Access level 9999 not found"

        levels = (await async_client.get(f"{url}/access-levels")).json()
        assert [level["name"] for level in levels] == ["admin"]

    @pytest.mark.asyncio
    async def test_assign_to_unknown_account(
        self, async_client: AsyncClient, created_levels: dict[str, dict]
    ):
        """Test assigning to an unknown account returns 404."""
        response = await async_client.post(
            f"{ACCOUNTS_URL}/{uuid.uuid4()}/access-levels",
            json={"access_level_ids": [created_levels["admin"]["id"]]},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_assign_empty_list_rejected(
        self, async_client: AsyncClient, created_account: dict
    ):
        """Test an empty access level list is a validation error."""
        response = await async_client.post(
            f"{ACCOUNTS_URL}/{created_account['id']}/access-levels",
            json={"access_level_ids": []},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_remove_access_level(
        self,
        async_client: AsyncClient,
        created_account: dict,
        created_levels: dict[str, dict],
    ):
        """Test removal, idempotent re-removal and re-assignment."""
        url = f"{ACCOUNTS_URL}/{created_account['id']}"
        admin_id = created_levels["admin"]["id"]
        await async_client.post(f"{url}/access-levels", json={"access_level_ids": [admin_id]})

        response = await async_client.delete(f"{url}/access-levels/{admin_id}")
        assert response.status_code == 200
        assert (await async_client.get(f"{url}/access-levels")).json() == []

        response = await async_client.delete(f"{url}/access-levels/{admin_id}")
        assert response.status_code == 200

        await async_client.post(f"{url}/access-levels", json={"access_level_ids": [admin_id]})
        levels = (await async_client.get(f"{url}/access-levels")).json()
        assert [level["id"] for level in levels] == [admin_id]

    @pytest.mark.asyncio
    async def test_remove_never_assigned(
        self,
        async_client: AsyncClient,
        created_account: dict,
        created_levels: dict[str, dict],
    ):
        """Test removing an access level that was never assigned returns 404."""
        response = await async_client.delete(
            f"{ACCOUNTS_URL}/{created_account['id']}/access-levels/"
            f"{created_levels['viewer']['id']}"
        )

        assert response.status_code == 404
