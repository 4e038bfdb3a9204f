"""Pregnancy profile endpoint tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest
from httpx import AsyncClient

from conftest import bearer, login, register

pytestmark = pytest.mark.asyncio


async def test_store_and_read_mama_data(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    headers = app_context["headers"]
    user_id = app_context["user_id"]

    missing = await client.get(f"/api/v1/mama-data/{user_id}", headers=headers)
    assert missing.status_code == 404

    due_date = (date.today() + timedelta(days=120)).isoformat()
    created = await client.post(
        "/api/v1/mama-data",
        json={
            "user_id": user_id,
            "first_child": True,
            "age_group": "25-34 years old",
            "due_date": due_date,
            "gestational_period": 22,
        },
        headers=headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["baby_gender"] == "i don't know yet"

    fetched = await client.get(f"/api/v1/mama-data/{user_id}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]
    assert fetched.json()["due_date"] == due_date


async def test_due_date_must_be_in_future(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/v1/mama-data",
        json={
            "user_id": app_context["user_id"],
            "age_group": "18-24 years old",
            "due_date": date.today().isoformat(),
            "gestational_period": 50,
        },
        headers=app_context["headers"],
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert errors["due_date"] == ["The due date must be a date after today."]
    assert "gestational_period" in errors


async def test_mama_data_is_owner_scoped(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    await register(client, username="intruder", email="intruder@x.com")
    intruder = bearer((await login(client, "intruder@x.com"))["access_token"])

    response = await client.get(
        f"/api/v1/mama-data/{app_context['user_id']}", headers=intruder
    )
    assert response.status_code == 403
