"""Mama tip schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TipCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    tip_content: str = Field(min_length=1)
    image_path: str | None = Field(default=None, max_length=255)


class TipRead(BaseModel):
    id: int
    name: str
    tip_content: str
    image_path: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
