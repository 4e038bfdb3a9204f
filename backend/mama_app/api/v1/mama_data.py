"""Pregnancy profile endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.api import deps
from mama_app.core.exceptions import NotFoundError
from mama_app.models.user import User
from mama_app.schemas.mama_data import MamaDataCreate, MamaDataRead
from mama_app.services import mama_data_service

router = APIRouter()


@router.post(
    "",
    response_model=MamaDataRead,
    status_code=status.HTTP_201_CREATED,
    summary="Store pregnancy data",
)
async def create_mama_data(
    payload: MamaDataCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MamaDataRead:
    deps.assert_owner(current_user, payload.user_id)
    record = await mama_data_service.create_mama_data(session, payload)
    return MamaDataRead.model_validate(record)


@router.get("/{user_id}", response_model=MamaDataRead, summary="Get pregnancy data")
async def read_mama_data(
    user_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MamaDataRead:
    deps.assert_owner(current_user, user_id)
    record = await mama_data_service.get_latest_mama_data(session, user_id=user_id)
    if record is None:
        raise NotFoundError("Mama data not found")
    return MamaDataRead.model_validate(record)
