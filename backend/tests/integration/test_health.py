"""
Integration tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient


@pytest.mark.anyio
class TestHealthEndpoints:

    async def test_liveness(self, client: AsyncClient):
        # Act
        response = await client.get("/health")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data

    async def test_health_needs_no_credentials(self, client: AsyncClient):
        response = await client.get("/health/ready")

        assert response.status_code == 200

    async def test_readiness_when_database_reachable(self, client: AsyncClient):
        # Act
        response = await client.get("/health/ready")

        # Assert
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["db"]["healthy"] is True
        assert data["checks"]["db"]["error"] is None

    async def test_readiness_when_database_down(self, client: AsyncClient):
        # Arrange
        with patch(
            "carmaint.api.routes.health.check_database",
            new=AsyncMock(return_value=False),
        ):
            # Act
            response = await client.get("/health/ready")

        # Assert
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["db"]["healthy"] is False
        assert data["checks"]["db"]["error"]

    async def test_responses_carry_request_id_and_security_headers(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "probe-1"})

        assert response.headers["X-Request-ID"] == "probe-1"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
