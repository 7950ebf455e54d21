"""Tests for health check endpoint."""

import pytest
from httpx import AsyncClient

from src.main import app


class TestHealthCheck:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_response_structure(self, client: AsyncClient):
        """Test health response has correct structure."""
        response = await client.get("/health")
        data = response.json()

        assert "status" in data
        assert "timestamp" in data
        assert "uptime_seconds" in data
        assert "version" in data
        assert set(data["checks"]) == {"supabase", "supabase_admin"}

    @pytest.mark.asyncio
    async def test_healthy_with_clients(self, client: AsyncClient):
        app.state.supabase = object()
        app.state.supabase_admin = object()
        try:
            response = await client.get("/health")
        finally:
            del app.state.supabase
            del app.state.supabase_admin

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_degraded_without_clients(self, client: AsyncClient):
        """Lifespan does not run under ASGITransport, so no clients exist."""
        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_cors_preflight(self, client: AsyncClient):
        response = await client.options(
            "/health",
            headers={
                "Origin": "http://localhost:4200",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:4200"
