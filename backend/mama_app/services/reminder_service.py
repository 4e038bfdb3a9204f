"""Reminder services."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.core.exceptions import ValidationError
from mama_app.models.reminder import DoseUnit, Reminder, ReminderType
from mama_app.schemas.reminder import MedicineDetail, ReminderCreate, ReminderUpdate


def _coerce_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _dump_details(details: list[MedicineDetail] | None) -> list[dict[str, Any]] | None:
    if details is None:
        return None
    return [detail.model_dump() for detail in details]


def _check_type_rules(
    *,
    reminder_type: ReminderType,
    appointment: str | None,
    dose_unit: DoseUnit | None,
    medicine_details: list[dict[str, Any]] | None,
) -> None:
    """Enforce the fields each reminder type depends on."""
    errors: dict[str, list[str]] = {}
    if reminder_type is ReminderType.DOCTORS_APPOINTMENT and not appointment:
        errors["appointment"] = [
            "The appointment field is required when type is doctor's appointment."
        ]
    if reminder_type is ReminderType.MEDICINE:
        if dose_unit is None:
            errors["dose_unit"] = [
                "The dose unit field is required when type is medicine."
            ]
        if not medicine_details:
            errors["medicine_details"] = [
                "The medicine details field is required when type is medicine."
            ]
    if errors:
        raise ValidationError(errors)


async def list_reminders(session: AsyncSession, *, user_id: int) -> list[Reminder]:
    result = await session.execute(
        select(Reminder)
        .where(Reminder.user_id == user_id)
        .order_by(Reminder.reminder_time, Reminder.id)
    )
    return list(result.scalars().all())


async def get_reminder(session: AsyncSession, reminder_id: int) -> Reminder | None:
    return await session.get(Reminder, reminder_id)


async def create_reminder(session: AsyncSession, payload: ReminderCreate) -> Reminder:
    details = _dump_details(payload.medicine_details)
    _check_type_rules(
        reminder_type=payload.type,
        appointment=payload.appointment,
        dose_unit=payload.dose_unit,
        medicine_details=details,
    )
    reminder = Reminder(
        user_id=payload.user_id,
        type=payload.type,
        appointment=payload.appointment,
        reminder_time=_coerce_utc(payload.reminder_time),
        dose_unit=payload.dose_unit,
        medicine_details=details,
    )
    session.add(reminder)
    await session.commit()
    await session.refresh(reminder)
    return reminder


async def update_reminder(
    session: AsyncSession, reminder: Reminder, payload: ReminderUpdate
) -> Reminder:
    """Apply provided fields, re-checking type rules against the merged record."""
    changes = payload.model_dump(exclude_unset=True)
    if "type" in changes and changes["type"] is None:
        raise ValidationError.single("type", "The type field cannot be null.")
    if "reminder_time" in changes:
        if changes["reminder_time"] is None:
            raise ValidationError.single(
                "reminder_time", "The reminder time field cannot be null."
            )
        changes["reminder_time"] = _coerce_utc(payload.reminder_time)
    if "medicine_details" in changes:
        changes["medicine_details"] = _dump_details(payload.medicine_details)
    if "type" in changes:
        changes["type"] = payload.type
    if "dose_unit" in changes:
        changes["dose_unit"] = payload.dose_unit

    _check_type_rules(
        reminder_type=changes.get("type", reminder.type),
        appointment=changes.get("appointment", reminder.appointment),
        dose_unit=changes.get("dose_unit", reminder.dose_unit),
        medicine_details=changes.get("medicine_details", reminder.medicine_details),
    )
    for field, value in changes.items():
        setattr(reminder, field, value)
    await session.commit()
    await session.refresh(reminder)
    return reminder


async def set_reminder_status(
    session: AsyncSession, reminder: Reminder, *, status: bool
) -> Reminder:
    reminder.status = status
    await session.commit()
    await session.refresh(reminder)
    return reminder


async def delete_reminder(session: AsyncSession, reminder: Reminder) -> None:
    await session.delete(reminder)
    await session.commit()
