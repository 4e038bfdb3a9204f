"""Mama tip endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.api import deps
from mama_app.core.exceptions import NotFoundError
from mama_app.models.user import User
from mama_app.schemas.tip import TipCreate, TipRead
from mama_app.services import tip_service

router = APIRouter()


@router.get("", response_model=list[TipRead], summary="List tips")
async def list_tips(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[TipRead]:
    tips = await tip_service.list_tips(session)
    return [TipRead.model_validate(tip) for tip in tips]


@router.get("/{tip_id}", response_model=TipRead, summary="Get tip")
async def read_tip(
    tip_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> TipRead:
    tip = await tip_service.get_tip(session, tip_id)
    if tip is None:
        raise NotFoundError("Tip not found")
    return TipRead.model_validate(tip)


@router.post(
    "",
    response_model=TipRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create tip",
)
async def create_tip(
    payload: TipCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[User, Depends(deps.get_current_user)],
) -> TipRead:
    tip = await tip_service.create_tip(session, payload)
    return TipRead.model_validate(tip)
