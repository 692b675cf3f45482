"""Tests for health and root endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from app.config import settings

HEALTH = "app.api.v1.endpoints.health"


@pytest.mark.asyncio
async def test_ping(client: AsyncClient):
    response = await client.get("/api/v1/ping")

    assert response.status_code == 200
    assert response.json() == {"message": "pong"}
    assert response.headers["X-Request-ID"]
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/api/v1/ping", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": settings.app_version}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("db_ok", "redis_ok", "expected"),
    [(True, True, "healthy"), (False, True, "degraded"), (True, False, "degraded")],
)
async def test_detailed_health_check(client: AsyncClient, db_ok, redis_ok, expected):
    """Test overall status degrades when a dependency is down."""
    with (
        patch(
            "app.api.v1.endpoints.health.check_database_connection",
            AsyncMock(return_value=db_ok),
        ),
        patch(
            "app.api.v1.endpoints.health.check_redis_connection",
            AsyncMock(return_value=redis_ok),
        ),
    ):
        response = await client.get("/api/v1/health/detailed")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == expected
    assert data["mongodb"] == ("up" if db_ok else "down")
    assert data["redis"] == ("up" if redis_ok else "down")
    assert "environment" not in data


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("completion_key", "translation_key", "expected"),
    [
        ("or-key", "gt-key", ("configured", "configured")),
        ("or-key", "", ("configured", "missing")),
        ("", "", ("missing", "missing")),
    ],
)
async def test_detailed_health_reports_ai_keys(
    client: AsyncClient, completion_key, translation_key, expected
):
    """Test missing AI keys are reported without degrading the status."""
    with (
        patch(HEALTH + ".check_database_connection", AsyncMock(return_value=True)),
        patch(HEALTH + ".check_redis_connection", AsyncMock(return_value=True)),
        patch.object(settings, "openrouter_api_key", completion_key),
        patch.object(settings, "translation_api_key", translation_key),
    ):
        response = await client.get("/api/v1/health/detailed")

    data = response.json()
    assert data["status"] == "healthy"
    assert (data["completion"], data["translation"]) == expected


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: AsyncClient):
    response = await client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "HTTPException"
