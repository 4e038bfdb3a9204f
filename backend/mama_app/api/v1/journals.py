"""Journal endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.api import deps
from mama_app.core.exceptions import NotFoundError
from mama_app.models.user import User
from mama_app.schemas.common import MessageResponse
from mama_app.schemas.journal import JournalCreate, JournalRead
from mama_app.services import journal_service

router = APIRouter()


@router.post(
    "",
    response_model=JournalRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create journal entry",
)
async def create_journal(
    payload: JournalCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> JournalRead:
    deps.assert_owner(current_user, payload.user_id)
    journal = await journal_service.create_journal(session, payload)
    return JournalRead.model_validate(journal)


@router.get("/{user_id}", response_model=list[JournalRead], summary="List journals")
async def list_journals(
    user_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> list[JournalRead]:
    """Return a user's journal entries, newest first."""
    deps.assert_owner(current_user, user_id)
    journals = await journal_service.list_journals(session, user_id=user_id)
    if not journals:
        raise NotFoundError("No journals found")
    return [JournalRead.model_validate(journal) for journal in journals]


@router.delete(
    "/{journal_id}", response_model=MessageResponse, summary="Delete journal entry"
)
async def delete_journal(
    journal_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MessageResponse:
    journal = await journal_service.get_journal(session, journal_id)
    if journal is None or journal.user_id != current_user.id:
        raise NotFoundError("Journal not found")
    await journal_service.delete_journal(session, journal)
    return MessageResponse(message="Journal deleted successfully")
