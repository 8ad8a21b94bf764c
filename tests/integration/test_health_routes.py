"""
Integration tests for health check routes and request tracing headers.
"""

import pytest
from httpx import AsyncClient

from src.main import app


class TestHealthRoutes:
    """Test liveness and readiness endpoints."""

    @pytest.mark.asyncio
    async def test_health_check(self, async_client: AsyncClient):
        """Test the liveness endpoint."""
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_readiness_check_ready(self, async_client: AsyncClient):
        """Test readiness when the database answers."""
        response = await async_client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["database"] == "ok"

    @pytest.mark.asyncio
    async def test_readiness_check_without_database(self, async_client: AsyncClient):
        """Test readiness reports 503 when no database is configured."""
        app.state.sessionmaker = None

        response = await async_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"]["database"] == "unavailable"


class TestRequestTracing:
    """Test request ID and timing headers."""

    @pytest.mark.asyncio
    async def test_request_id_header(self, async_client: AsyncClient):
        """Test every response carries a distinct X-Request-ID."""
        first = await async_client.get("/health")
        second = await async_client.get("/health")

        assert first.headers["X-Request-ID"]
        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]
        assert "X-Response-Time" in first.headers

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, async_client: AsyncClient):
        """Test error responses echo the request ID."""
        response = await async_client.get("/api/v1/access-levels/9999")

        assert response.status_code == 404
        assert response.json()["meta"]["request_id"] == response.headers["X-Request-ID"]
