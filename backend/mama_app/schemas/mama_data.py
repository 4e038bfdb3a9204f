"""Pregnancy profile schemas."""
from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mama_app.models.mama_data import AgeGroup, BabyGender


class MamaDataCreate(BaseModel):
    user_id: int
    first_child: bool = False
    age_group: AgeGroup
    due_date: date | None = None
    gestational_period: int | None = Field(default=None, ge=1, le=42)
    baby_gender: BabyGender = BabyGender.UNKNOWN

    @field_validator("due_date")
    @classmethod
    def _due_date_in_future(cls, value: date | None) -> date | None:
        if value is not None and value <= date.today():
            raise ValueError("The due date must be a date after today.")
        return value


class MamaDataRead(BaseModel):
    id: int
    user_id: int
    first_child: bool
    age_group: AgeGroup
    due_date: date | None = None
    gestational_period: int | None = None
    baby_gender: BabyGender
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
