"""Reminder schemas.

Cross-field rules (an appointment for doctor's appointments, dose details for
medicine) are enforced in ``reminder_service`` so that partial updates are
checked against the stored record.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mama_app.models.reminder import DoseUnit, ReminderType


class MedicineDetail(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    dose: str = Field(min_length=1, max_length=100)


class ReminderCreate(BaseModel):
    user_id: int
    type: ReminderType
    appointment: str | None = Field(default=None, max_length=255)
    reminder_time: datetime
    dose_unit: DoseUnit | None = None
    medicine_details: list[MedicineDetail] | None = None


class ReminderUpdate(BaseModel):
    type: ReminderType | None = None
    appointment: str | None = Field(default=None, max_length=255)
    reminder_time: datetime | None = None
    dose_unit: DoseUnit | None = None
    medicine_details: list[MedicineDetail] | None = None


class ReminderStatusUpdate(BaseModel):
    status: bool


class ReminderRead(BaseModel):
    id: int
    user_id: int
    type: ReminderType
    appointment: str | None = None
    reminder_time: datetime
    dose_unit: DoseUnit | None = None
    medicine_details: list[MedicineDetail] | None = None
    status: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
