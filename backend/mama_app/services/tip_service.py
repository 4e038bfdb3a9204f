"""Mama tip services."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.core.config import get_settings
from mama_app.models.mama_tip import MamaTip
from mama_app.schemas.tip import TipCreate


async def list_tips(session: AsyncSession) -> list[MamaTip]:
    result = await session.execute(select(MamaTip).order_by(MamaTip.id))
    return list(result.scalars().all())


async def get_tip(session: AsyncSession, tip_id: int) -> MamaTip | None:
    return await session.get(MamaTip, tip_id)


async def create_tip(session: AsyncSession, payload: TipCreate) -> MamaTip:
    tip = MamaTip(
        name=payload.name,
        tip_content=payload.tip_content,
        image_path=payload.image_path or get_settings().default_tip_image,
    )
    session.add(tip)
    await session.commit()
    await session.refresh(tip)
    return tip
