"""Tests for health endpoint and error rendering."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_unauthenticated_error_shape(client: AsyncClient):
    """Service errors use the structured error format."""
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

    data = response.json()
    assert data["error"]["code"] == "NOT_AUTHENTICATED"
    assert data["error"]["message"]
