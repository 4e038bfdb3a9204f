"""Test fixtures for the mama app backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["DB_AUTO_CREATE"] = "false"
os.environ.pop("REDIS_URL", None)

from mama_app.core.config import get_settings
from mama_app.db.base import Base
from mama_app.db.session import dispose_engine, get_sessionmaker
from mama_app.main import app
import mama_app.models  # noqa: F401

DEFAULT_PASSWORD = "secret1"


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def db_session(
    reset_database: None, db_url: str
) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the per-test database."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        yield session


@pytest_asyncio.fixture()
async def client(reset_database: None) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


async def register(
    client: AsyncClient,
    *,
    username: str = "mama1",
    email: str | None = "m@x.com",
    phone_number: str | None = None,
    password: str = DEFAULT_PASSWORD,
) -> dict[str, Any]:
    """Register a user through the API and return the created user."""
    payload: dict[str, Any] = {
        "username": username,
        "password": password,
        "password_confirmation": password,
    }
    if email is not None:
        payload["email"] = email
    if phone_number is not None:
        payload["phone_number"] = phone_number
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["user"]


async def login(
    client: AsyncClient, login_value: str = "m@x.com", password: str = DEFAULT_PASSWORD
) -> dict[str, Any]:
    response = await client.post(
        "/api/v1/auth/login", json={"login": login_value, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def app_context(client: AsyncClient) -> dict[str, Any]:
    """Register and log in a default user."""
    user = await register(client)
    body = await login(client)
    return {
        "client": client,
        "user_id": user["id"],
        "token": body["access_token"],
        "headers": bearer(body["access_token"]),
    }
