"""Pregnancy profile services."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.models.mama_data import MamaData
from mama_app.schemas.mama_data import MamaDataCreate


async def create_mama_data(session: AsyncSession, payload: MamaDataCreate) -> MamaData:
    """Store a pregnancy profile for the payload's user."""
    record = MamaData(**payload.model_dump())
    session.add(record)
    await session.commit()
    await session.refresh(record)
    return record


async def get_latest_mama_data(session: AsyncSession, *, user_id: int) -> MamaData | None:
    """Return the most recently stored profile for a user."""
    result = await session.execute(
        select(MamaData)
        .where(MamaData.user_id == user_id)
        .order_by(MamaData.created_at.desc(), MamaData.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()
