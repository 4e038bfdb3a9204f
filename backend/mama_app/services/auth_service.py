"""Authentication service helpers.

This module owns the ``User.session_token`` mirror: ``login`` writes it and
``logout`` clears it. Reading it is left to ``api.deps.require_live_session``.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.core.exceptions import UnauthorizedError
from mama_app.core.security import (
    IssuedToken,
    get_password_hash,
    issue_access_token,
    refresh_access_token,
    verify_access_token,
    verify_password,
)
from mama_app.models.user import User
from mama_app.schemas.auth import RegistrationRequest
from mama_app.services import user_service

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    return get_password_hash("timing-equalizer")


async def register_user(session: AsyncSession, payload: RegistrationRequest) -> User:
    """Create an account from a registration payload."""
    user = await user_service.create_user(
        session,
        username=payload.username,
        email=payload.email,
        phone_number=payload.phone_number,
        password=payload.password,
    )
    logger.info("Registered user %s", user.id)
    return user


async def authenticate_user(
    session: AsyncSession, *, login: str, password: str
) -> User | None:
    """Validate credentials and return a user if correct."""
    user = await user_service.get_user_by_login(session, login)
    if user is None:
        # keep the response time of unknown identifiers close to a real check
        verify_password(password, _dummy_password_hash())
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def login(
    session: AsyncSession, *, login: str, password: str
) -> tuple[User, IssuedToken]:
    """Authenticate, issue a token and mirror it onto the user."""
    user = await authenticate_user(session, login=login, password=password)
    if user is None:
        raise UnauthorizedError(INVALID_CREDENTIALS)
    issued = issue_access_token(user.id)
    user.session_token = issued.access_token
    await session.commit()
    await session.refresh(user)
    logger.info("User %s logged in", user.id)
    return user, issued


async def logout(session: AsyncSession, user: User) -> None:
    """Clear the mirrored session token. Safe to call repeatedly."""
    if user.session_token is None:
        return
    user.session_token = None
    await session.commit()
    logger.info("User %s logged out", user.id)


async def get_user_for_token(session: AsyncSession, token: str) -> User:
    """Resolve a bearer token to its user or raise ``UnauthorizedError``."""
    user_id = verify_access_token(token)
    if user_id is None:
        raise UnauthorizedError()
    user = await user_service.get_user(session, user_id)
    if user is None:
        raise UnauthorizedError()
    return user


async def refresh(session: AsyncSession, token: str) -> tuple[User, IssuedToken]:
    """Exchange a still-valid token for one with a later expiry."""
    user = await get_user_for_token(session, token)
    issued = refresh_access_token(token)
    if issued is None:
        raise UnauthorizedError()
    return user, issued
