"""Tests for health, backup and root endpoints."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

from httpx import AsyncClient

from taskdesk import __version__
from taskdesk.infrastructure.storage.sqlite import ConnectionPool

GET_POOL = "taskdesk.infrastructure.storage.sqlite.get_pool"


async def test_root_info(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "TaskDesk API"


async def test_root_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__


async def test_api_health_check(client: AsyncClient, pool: ConnectionPool):
    with patch(GET_POOL, AsyncMock(return_value=pool)):
        response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    assert data["screenshots"] is False
    assert "uptime_seconds" in data


async def test_api_health_degraded(client: AsyncClient):
    with patch(GET_POOL, AsyncMock(side_effect=RuntimeError("disk gone"))):
        response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "degraded"
    assert data["database"] == "unavailable"


async def test_request_id_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("ms")


class TestBackup:
    async def test_missing_database(self, client: AsyncClient):
        response = await client.get("/api/backup")
        assert response.status_code == 404
        assert response.json()["error_code"] == "BACKUP_NOT_FOUND"

    async def test_downloads_database(self, client: AsyncClient, isolated_settings: Path):
        isolated_settings.mkdir(parents=True, exist_ok=True)
        (isolated_settings / "taskdesk.db").write_bytes(b"SQLite format 3\x00")

        response = await client.get("/api/backup")

        assert response.status_code == 200
        assert response.content == b"SQLite format 3\x00"
        assert response.headers["cache-control"] == "no-store"
        assert "taskdesk.db" in response.headers["content-disposition"]
