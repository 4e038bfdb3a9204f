"""Health endpoint smoke test."""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from mama_app.api import deps
from mama_app.main import app

pytestmark = pytest.mark.asyncio


class _UnreachableDatabase:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionError("database is down"))


async def _unreachable_session() -> AsyncIterator[_UnreachableDatabase]:
    yield _UnreachableDatabase()


async def test_healthcheck_returns_ok(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "Mama App API"


async def test_healthcheck_reports_unreachable_database(client: AsyncClient) -> None:
    app.dependency_overrides[deps.get_db_session] = _unreachable_session
    try:
        response = await client.get("/api/v1/health")
    finally:
        app.dependency_overrides.pop(deps.get_db_session, None)
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "degraded"
    assert payload["database"] == "unavailable"


async def test_responses_carry_request_id_and_security_headers(
    client: AsyncClient,
) -> None:
    request_id = str(uuid.uuid4())
    response = await client.get("/", headers={"X-Request-ID": request_id})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == request_id
    assert "x-content-type-options" in response.headers
