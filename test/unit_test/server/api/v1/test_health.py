from datetime import datetime

import pytest
from httpx import AsyncClient

from quotely.server.core import constant

# Mark all tests in this module as async
pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == constant.PROJECT_NAME
    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None


async def test_health_check_under_api_prefix(client: AsyncClient):
    response = await client.get("http://localhost/api/v1/health")
    assert response.status_code == 200


async def test_version(client: AsyncClient):
    response = await client.get("http://localhost/version")
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == constant.API_VERSION
    assert data["schema_version"] == constant.SCHEMA_VERSION


async def test_requests_carry_process_time(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert "x-process-time" in response.headers
