"""Journal services."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.models.journal import Journal
from mama_app.schemas.journal import JournalCreate


async def list_journals(session: AsyncSession, *, user_id: int) -> list[Journal]:
    result = await session.execute(
        select(Journal)
        .where(Journal.user_id == user_id)
        .order_by(Journal.created_at.desc(), Journal.id.desc())
    )
    return list(result.scalars().all())


async def get_journal(session: AsyncSession, journal_id: int) -> Journal | None:
    return await session.get(Journal, journal_id)


async def create_journal(session: AsyncSession, payload: JournalCreate) -> Journal:
    journal = Journal(user_id=payload.user_id, content=payload.content)
    session.add(journal)
    await session.commit()
    await session.refresh(journal)
    return journal


async def delete_journal(session: AsyncSession, journal: Journal) -> None:
    await session.delete(journal)
    await session.commit()
