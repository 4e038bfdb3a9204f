"""Mama tip endpoint tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_tips_are_public_to_read(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    assert (await client.get("/api/v1/mama-tips")).json() == []

    created = await client.post(
        "/api/v1/mama-tips",
        json={"name": "Hydration", "tip_content": "Drink plenty of water."},
        headers=app_context["headers"],
    )
    assert created.status_code == 201
    tip = created.json()
    assert tip["image_path"] == "tips/default-tip.png"

    listed = await client.get("/api/v1/mama-tips")
    assert listed.status_code == 200
    assert [item["id"] for item in listed.json()] == [tip["id"]]

    single = await client.get(f"/api/v1/mama-tips/{tip['id']}")
    assert single.status_code == 200
    assert single.json()["name"] == "Hydration"


async def test_missing_tip(client: AsyncClient) -> None:
    response = await client.get("/api/v1/mama-tips/99")
    assert response.status_code == 404
    assert response.json() == {"detail": "Tip not found"}


async def test_creating_tip_requires_bearer(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/mama-tips", json={"name": "Rest", "tip_content": "Sleep on your side."}
    )
    assert response.status_code == 401
