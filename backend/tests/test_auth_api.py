"""Registration, login, token and logout API tests."""

from __future__ import annotations

import warnings
from datetime import timedelta
from typing import Any

import pytest
from httpx import AsyncClient
from jose import jwt
from sqlalchemy import select

from conftest import bearer, login, register
from mama_app.core.config import get_settings
from mama_app.core.security import create_access_token
from mama_app.db.session import get_sessionmaker
from mama_app.models import User

pytestmark = pytest.mark.asyncio


async def _fetch_user(db_url: str, user_id: int) -> User:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        result = await session.execute(select(User).where(User.id == user_id))
        return result.scalar_one()


async def test_register_then_login(client: AsyncClient, db_url: str) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "username": "mama1",
            "email": "m@x.com",
            "password": "secret1",
            "password_confirmation": "secret1",
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User successfully registered"
    assert body["user"]["username"] == "mama1"
    assert body["user"]["email"] == "m@x.com"
    assert body["user"]["image_path"] == "image/default.png"
    assert "hashed_password" not in body["user"]
    assert "session_token" not in body["user"]

    stored = await _fetch_user(db_url, body["user"]["id"])
    assert stored.hashed_password != "secret1"
    assert stored.session_token is None

    ok = await client.post(
        "/api/v1/auth/login", json={"login": "m@x.com", "password": "secret1"}
    )
    assert ok.status_code == 200
    token_body = ok.json()
    assert token_body["token_type"] == "bearer"
    assert token_body["expires_in"] == 3600
    assert token_body["user"]["id"] == body["user"]["id"]
    claims = jwt.get_unverified_claims(token_body["access_token"])
    assert claims["sub"] == str(body["user"]["id"])

    stored = await _fetch_user(db_url, body["user"]["id"])
    assert stored.session_token == token_body["access_token"]

    wrong = await client.post(
        "/api/v1/auth/login", json={"login": "m@x.com", "password": "wrong"}
    )
    assert wrong.status_code == 401
    assert wrong.headers["WWW-Authenticate"] == "Bearer"


async def test_login_by_phone_number(client: AsyncClient) -> None:
    await register(client, username="phonemama", email=None, phone_number="0712345678")
    body = await login(client, "0712345678")
    assert body["user"]["phone_number"] == "0712345678"
    assert body["user"]["email"] is None


async def test_login_failures_are_indistinguishable(client: AsyncClient) -> None:
    await register(client)
    wrong_password = await client.post(
        "/api/v1/auth/login", json={"login": "m@x.com", "password": "nope123"}
    )
    unknown_user = await client.post(
        "/api/v1/auth/login", json={"login": "ghost@x.com", "password": "nope123"}
    )
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {
        "detail": "Invalid credentials"
    }


async def test_register_requires_email_or_phone(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "username": "nocontact",
            "password": "secret1",
            "password_confirmation": "secret1",
        },
    )
    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "The given data was invalid."
    assert body["errors"]["login"] == ["Either email or phone number is required"]


async def test_register_validation_errors(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "username": "mama2",
            "email": "not-an-email",
            "password": "abc",
            "password_confirmation": "abd",
        },
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert "email" in errors
    assert "password" in errors


async def test_register_rejects_mismatched_confirmation(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "username": "mama3",
            "email": "mama3@x.com",
            "password": "secret1",
            "password_confirmation": "secret2",
        },
    )
    assert response.status_code == 422
    assert response.json()["errors"]["password_confirmation"] == [
        "The password confirmation does not match."
    ]


async def test_register_rejects_duplicates(client: AsyncClient) -> None:
    await register(client, phone_number="0700000000")
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "username": "mama1",
            "email": "M@X.com",
            "phone_number": "0700000000",
            "password": "secret1",
            "password_confirmation": "secret1",
        },
    )
    assert response.status_code == 422
    errors = response.json()["errors"]
    assert errors["username"] == ["The username has already been taken."]
    assert errors["email"] == ["The email has already been taken."]
    assert errors["phone_number"] == ["The phone number has already been taken."]


async def test_user_profile_requires_valid_token(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    missing = await client.get("/api/v1/auth/user-profile")
    assert missing.status_code == 401
    assert missing.json() == {"detail": "Unauthenticated."}

    garbage = await client.get(
        "/api/v1/auth/user-profile", headers=bearer("not-a-token")
    )
    assert garbage.status_code == 401

    profile = await client.get(
        "/api/v1/auth/user-profile", headers=app_context["headers"]
    )
    assert profile.status_code == 200
    assert profile.json()["id"] == app_context["user_id"]


async def test_expired_token_is_rejected(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    expired = create_access_token(
        str(app_context["user_id"]), expires_delta=timedelta(seconds=-5)
    )

    profile = await client.get("/api/v1/auth/user-profile", headers=bearer(expired))
    assert profile.status_code == 401

    refreshed = await client.post("/api/v1/auth/refresh", headers=bearer(expired))
    assert refreshed.status_code == 401


async def test_token_signed_with_other_key_is_rejected(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    forged = jwt.encode(
        {"sub": str(app_context["user_id"])},
        "some-other-key",
        algorithm=get_settings().jwt_algorithm,
    )
    response = await client.get("/api/v1/auth/user-profile", headers=bearer(forged))
    assert response.status_code == 401


async def test_refresh_extends_expiry(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    old_claims = jwt.get_unverified_claims(app_context["token"])

    response = await client.post("/api/v1/auth/refresh", headers=app_context["headers"])
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["id"] == app_context["user_id"]

    new_claims = jwt.get_unverified_claims(body["access_token"])
    assert new_claims["sub"] == old_claims["sub"]
    assert new_claims["exp"] > old_claims["exp"]

    profile = await client.get(
        "/api/v1/auth/user-profile", headers=bearer(body["access_token"])
    )
    assert profile.status_code == 200


async def test_refresh_requires_token(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/refresh")
    assert response.status_code == 401


async def test_logout_clears_session_token(
    app_context: dict[str, Any], db_url: str
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    user_id = app_context["user_id"]

    response = await client.post("/api/v1/auth/logout", headers=app_context["headers"])
    assert response.status_code == 200
    assert response.json() == {"message": "Successfully logged out"}

    stored = await _fetch_user(db_url, user_id)
    assert stored.session_token is None

    # the liveness-guarded variant now rejects the user
    by_id = await client.post(
        f"/api/v1/auth/logout/{user_id}", headers=app_context["headers"]
    )
    assert by_id.status_code == 401

    # bearer logout is idempotent while the token is still valid
    again = await client.post("/api/v1/auth/logout", headers=app_context["headers"])
    assert again.status_code == 200


async def test_logout_by_user_id(app_context: dict[str, Any], db_url: str) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    user_id = app_context["user_id"]
    headers = app_context["headers"]

    anonymous = await client.post(f"/api/v1/auth/logout/{user_id}")
    assert anonymous.status_code == 401
    forged = await client.post(
        f"/api/v1/auth/logout/{user_id}", headers=bearer("garbage")
    )
    assert forged.status_code == 401
    stored = await _fetch_user(db_url, user_id)
    assert stored.session_token == app_context["token"]

    response = await client.post(f"/api/v1/auth/logout/{user_id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Successfully logged out"

    stored = await _fetch_user(db_url, user_id)
    assert stored.session_token is None

    second = await client.post(f"/api/v1/auth/logout/{user_id}", headers=headers)
    assert second.status_code == 401


async def test_logout_by_unknown_user_id(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    response = await client.post(
        "/api/v1/auth/logout/999", headers=app_context["headers"]
    )
    assert response.status_code == 401


async def test_logout_requires_bearer(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/logout")
    assert response.status_code == 401


async def test_logout_by_user_id_rejects_other_users_token(
    app_context: dict[str, Any], db_url: str
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]
    user_id = app_context["user_id"]
    await register(client, username="intruder", email="intruder@x.com")
    intruder = bearer((await login(client, "intruder@x.com"))["access_token"])

    response = await client.post(f"/api/v1/auth/logout/{user_id}", headers=intruder)
    assert response.status_code == 401

    stored = await _fetch_user(db_url, user_id)
    assert stored.session_token == app_context["token"]


async def test_validation_errors_use_current_status_constant(
    client: AsyncClient,
) -> None:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        response = await client.post("/api/v1/auth/register", json={})
        await register(client, username="mama9", email="mama9@x.com")
        conflict = await client.post(
            "/api/v1/auth/register",
            json={
                "username": "mama9",
                "email": "mama9@x.com",
                "password": "secret1",
                "password_confirmation": "secret1",
            },
        )
    assert response.status_code == conflict.status_code == 422
    assert not [w for w in caught if "HTTP_422" in str(w.message)]
