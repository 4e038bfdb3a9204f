"""User profile endpoints keyed by user id.

Every route here requires the addressed user to hold a live session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.api import deps
from mama_app.models.user import User
from mama_app.schemas.user import UserImageRead, UserRead, UserUpdate
from mama_app.services import user_service

router = APIRouter()


@router.get("/{user_id}", response_model=UserRead, summary="Get user details")
async def read_user(
    user: Annotated[User, Depends(deps.require_live_session)],
) -> UserRead:
    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead, summary="Update user profile")
async def update_user(
    payload: UserUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    user: Annotated[User, Depends(deps.require_live_session)],
) -> UserRead:
    """Update only the fields present in the request body."""
    updated = await user_service.update_user(session, user, payload)
    return UserRead.model_validate(updated)


@router.get(
    "/{user_id}/image", response_model=UserImageRead, summary="Get profile image path"
)
async def read_user_image(
    user: Annotated[User, Depends(deps.require_live_session)],
) -> UserImageRead:
    return UserImageRead(image_path=user.image_path)
