"""Journal endpoint tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

from conftest import bearer, login, register

pytestmark = pytest.mark.asyncio


async def test_create_list_and_delete_journal(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["headers"]
    user_id = app_context["user_id"]

    empty = await client.get(f"/api/v1/journals/{user_id}", headers=headers)
    assert empty.status_code == 404
    assert empty.json() == {"detail": "No journals found"}

    first = await client.post(
        "/api/v1/journals",
        json={"user_id": user_id, "content": "Felt the first kick today."},
        headers=headers,
    )
    assert first.status_code == 201
    second = await client.post(
        "/api/v1/journals",
        json={"user_id": user_id, "content": "Doctor visit went well."},
        headers=headers,
    )
    assert second.status_code == 201

    listed = await client.get(f"/api/v1/journals/{user_id}", headers=headers)
    assert listed.status_code == 200
    assert [entry["id"] for entry in listed.json()] == [
        second.json()["id"],
        first.json()["id"],
    ]

    deleted = await client.delete(
        f"/api/v1/journals/{first.json()['id']}", headers=headers
    )
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Journal deleted successfully"}

    missing = await client.delete(
        f"/api/v1/journals/{first.json()['id']}", headers=headers
    )
    assert missing.status_code == 404


async def test_journals_require_bearer(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/journals", json={"user_id": 1, "content": "hello"}
    )
    assert response.status_code == 401


async def test_journals_are_owner_scoped(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    owner_id = app_context["user_id"]
    created = await client.post(
        "/api/v1/journals",
        json={"user_id": owner_id, "content": "private"},
        headers=app_context["headers"],
    )
    journal_id = created.json()["id"]

    await register(client, username="intruder", email="intruder@x.com")
    intruder = bearer((await login(client, "intruder@x.com"))["access_token"])

    listed = await client.get(f"/api/v1/journals/{owner_id}", headers=intruder)
    assert listed.status_code == 403
    assert listed.json() == {"detail": "Insufficient permissions"}

    posted = await client.post(
        "/api/v1/journals",
        json={"user_id": owner_id, "content": "not yours"},
        headers=intruder,
    )
    assert posted.status_code == 403

    deleted = await client.delete(f"/api/v1/journals/{journal_id}", headers=intruder)
    assert deleted.status_code == 404


async def test_journal_content_is_required(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/v1/journals",
        json={"user_id": app_context["user_id"], "content": ""},
        headers=app_context["headers"],
    )
    assert response.status_code == 422
    assert "content" in response.json()["errors"]
