"""Test the health check endpoint against the default (SQLite) engine."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture()
async def bare_client():
    """Client without DB override."""
    from screentime.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealth:
    async def test_health_check(self, bare_client):
        resp = await bare_client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["db"] == "ok"
        assert data["redis"] in ("ok", "unavailable")
        assert "Screen Time" in data["app"]
