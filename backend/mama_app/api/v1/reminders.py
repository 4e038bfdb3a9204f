"""Reminder endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.api import deps
from mama_app.core.exceptions import NotFoundError
from mama_app.models.reminder import Reminder
from mama_app.models.user import User
from mama_app.schemas.common import MessageResponse
from mama_app.schemas.reminder import (
    ReminderCreate,
    ReminderRead,
    ReminderStatusUpdate,
    ReminderUpdate,
)
from mama_app.services import reminder_service

router = APIRouter()


async def _get_owned_reminder(
    session: AsyncSession, reminder_id: int, current_user: User
) -> Reminder:
    reminder = await reminder_service.get_reminder(session, reminder_id)
    if reminder is None or reminder.user_id != current_user.id:
        raise NotFoundError("Reminder not found")
    return reminder


@router.get("/{user_id}", response_model=list[ReminderRead], summary="List reminders")
async def list_reminders(
    user_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> list[ReminderRead]:
    deps.assert_owner(current_user, user_id)
    reminders = await reminder_service.list_reminders(session, user_id=user_id)
    if not reminders:
        raise NotFoundError("No reminders found")
    return [ReminderRead.model_validate(reminder) for reminder in reminders]


@router.post(
    "",
    response_model=ReminderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create reminder",
)
async def create_reminder(
    payload: ReminderCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> ReminderRead:
    deps.assert_owner(current_user, payload.user_id)
    reminder = await reminder_service.create_reminder(session, payload)
    return ReminderRead.model_validate(reminder)


@router.put("/{reminder_id}", response_model=ReminderRead, summary="Update reminder")
async def update_reminder(
    reminder_id: int,
    payload: ReminderUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> ReminderRead:
    reminder = await _get_owned_reminder(session, reminder_id, current_user)
    updated = await reminder_service.update_reminder(session, reminder, payload)
    return ReminderRead.model_validate(updated)


@router.patch(
    "/{reminder_id}/status",
    response_model=ReminderRead,
    summary="Mark reminder done or pending",
)
async def update_reminder_status(
    reminder_id: int,
    payload: ReminderStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> ReminderRead:
    reminder = await _get_owned_reminder(session, reminder_id, current_user)
    updated = await reminder_service.set_reminder_status(
        session, reminder, status=payload.status
    )
    return ReminderRead.model_validate(updated)


@router.delete(
    "/{reminder_id}", response_model=MessageResponse, summary="Delete reminder"
)
async def delete_reminder(
    reminder_id: int,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MessageResponse:
    reminder = await _get_owned_reminder(session, reminder_id, current_user)
    await reminder_service.delete_reminder(session, reminder)
    return MessageResponse(message="Reminder deleted successfully")
