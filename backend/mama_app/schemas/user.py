"""User-related schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from mama_app.schemas.common import blank_to_none, check_email_length


class UserRead(BaseModel):
    """Serialized user; never carries the password hash or session token."""

    id: int
    username: str
    email: str | None = None
    phone_number: str | None = None
    image_path: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpdate(BaseModel):
    """Partial profile update.

    Only fields present in the request body are applied; ``model_fields_set``
    tells an explicit ``null`` apart from an absent field.
    """

    username: str | None = Field(default=None, min_length=3, max_length=100)
    email: EmailStr | None = None
    phone_number: str | None = Field(default=None, max_length=32)
    password: str | None = Field(default=None, min_length=6)
    password_confirmation: str | None = None

    @field_validator("email", "phone_number", mode="before")
    @classmethod
    def _blank_contact(cls, value: object) -> object:
        return blank_to_none(value)

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str | None) -> str | None:
        return check_email_length(value)

    @field_validator("username", "phone_number")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else value


class UserImageRead(BaseModel):
    image_path: str
