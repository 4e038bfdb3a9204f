"""Authentication endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    Request,
    Response,
    status,
)
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.api import deps
from mama_app.core.config import get_settings
from mama_app.core.security import IssuedToken
from mama_app.models.user import User
from mama_app.schemas.auth import (
    LoginRequest,
    PasswordResetRequest,
    PasswordResetVerify,
    RegistrationRequest,
    RegistrationResponse,
    TokenResponse,
)
from mama_app.schemas.common import MessageResponse
from mama_app.schemas.user import UserRead
from mama_app.security.redact import mask_login
from mama_app.services import (
    auth_service,
    notification_service,
    password_reset_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_settings = get_settings()

_DEF_LIMITS = _settings.rate_limit_default
_LOGIN_LIMITS = _settings.rate_limit_login

PASSWORD_RESET_REQUESTED = (
    "If an account matches the details provided, a reset code has been sent."
)


def _parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    window = window_str.strip().lower()
    seconds_map = {
        "second": 1,
        "seconds": 1,
        "minute": 60,
        "minutes": 60,
        "hour": 3600,
        "hours": 3600,
        "day": 86400,
        "days": 86400,
    }
    seconds = seconds_map.get(window, fallback[1])
    return count, seconds


_LOGIN_LIMIT = _parse_rate(_LOGIN_LIMITS, fallback=(10, 60))
_DEFAULT_LIMIT = _parse_rate(_DEF_LIMITS, fallback=(100, 60))


def _rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


_LOGIN_RATE_DEP = _rate_dependency(_LOGIN_LIMIT)
_DEFAULT_RATE_DEP = _rate_dependency(_DEFAULT_LIMIT)


def _token_response(user: User, issued: IssuedToken) -> TokenResponse:
    return TokenResponse(
        access_token=issued.access_token,
        expires_in=issued.expires_in,
        user=UserRead.model_validate(user),
    )


@router.post(
    "/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def register(
    payload: RegistrationRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    background_tasks: BackgroundTasks,
) -> RegistrationResponse:
    """Create an account identified by email and/or phone number."""
    user = await auth_service.register_user(session, payload)
    notification_service.notify_welcome(user, background_tasks)
    return RegistrationResponse(user=UserRead.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Obtain access token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login(
    payload: LoginRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> TokenResponse:
    """Validate credentials and issue a bearer token."""
    user, issued = await auth_service.login(
        session, login=payload.login, password=payload.password
    )
    return _token_response(user, issued)


@router.post("/logout", response_model=MessageResponse, summary="Log out")
async def logout(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MessageResponse:
    """Clear the caller's mirrored session token."""
    await auth_service.logout(session, current_user)
    return MessageResponse(message="Successfully logged out")


@router.post(
    "/logout/{user_id}",
    response_model=MessageResponse,
    summary="Log out a user by id",
)
async def logout_user(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    user: Annotated[User, Depends(deps.require_live_session)],
) -> MessageResponse:
    """Clear the session token of a user who currently has one."""
    await auth_service.logout(session, user)
    return MessageResponse(message="Successfully logged out")


@router.post("/refresh", response_model=TokenResponse, summary="Refresh token")
async def refresh(
    token: Annotated[str, Depends(deps.get_bearer_token)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> TokenResponse:
    """Exchange a valid bearer token for one with a later expiry."""
    user, issued = await auth_service.refresh(session, token)
    return _token_response(user, issued)


@router.get("/user-profile", response_model=UserRead, summary="Current user profile")
async def user_profile(
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> UserRead:
    """Return the authenticated user's profile."""
    return UserRead.model_validate(current_user)


@router.post(
    "/request-password-reset",
    response_model=MessageResponse,
    summary="Request password reset code",
    dependencies=[_LOGIN_RATE_DEP],
)
async def request_password_reset(
    payload: PasswordResetRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    background_tasks: BackgroundTasks,
) -> MessageResponse:
    """Send a one-time code; the reply never reveals whether the account exists."""
    dispatch = await password_reset_service.request_reset(session, login=payload.login)
    if dispatch is None:
        logger.info(
            "Password reset requested for unknown login %s", mask_login(payload.login)
        )
    else:
        notification_service.notify_password_reset_otp(dispatch, background_tasks)
        logger.info("Password reset code issued for user %s", dispatch.user.id)
    return MessageResponse(message=PASSWORD_RESET_REQUESTED)


@router.post(
    "/verify-otp-reset",
    response_model=MessageResponse,
    summary="Reset password with a one-time code",
    dependencies=[_LOGIN_RATE_DEP],
)
async def verify_otp_reset(
    payload: PasswordResetVerify,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> MessageResponse:
    await password_reset_service.verify_reset(
        session,
        login=payload.login,
        code=payload.otp,
        new_password=payload.new_password,
    )
    return MessageResponse(message="Password has been reset successfully")
