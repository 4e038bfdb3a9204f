"""Common API dependencies."""

from __future__ import annotations

from typing import Annotated
from collections.abc import AsyncGenerator

from fastapi import Depends, Path
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.core.config import get_settings
from mama_app.core.exceptions import ForbiddenError, UnauthorizedError
from mama_app.core.security import verify_access_token
from mama_app.db.session import get_session
from mama_app.models.user import User
from mama_app.services import auth_service, user_service

settings = get_settings()

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_v1_prefix}/auth/login", auto_error=False
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_bearer_token(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> str:
    """Return the raw bearer token or fail with 401."""
    if not token:
        raise UnauthorizedError()
    return token


async def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User:
    """Authenticate request via bearer token."""
    return await auth_service.get_user_for_token(session, token)


async def require_live_session(
    user_id: Annotated[int, Path()],
    token: Annotated[str, Depends(get_bearer_token)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User:
    """Load the ``user_id`` path user for the holder of their current token.

    The bearer token must be valid, issued to ``user_id`` and equal to the
    token last mirrored by login. This is the only reader of
    ``User.session_token``: a token superseded by a later login, or presented
    after logout, is rejected.
    """
    if verify_access_token(token) != user_id:
        raise UnauthorizedError()
    user = await user_service.get_user(session, user_id)
    if user is None or not user.holds_session(token):
        raise UnauthorizedError()
    return user


def assert_owner(current_user: User, user_id: int) -> None:
    """Ensure a user-keyed request targets the caller's own records."""
    if current_user.id != user_id:
        raise ForbiddenError()
