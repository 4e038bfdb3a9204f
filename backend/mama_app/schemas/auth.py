"""Authentication schemas."""
from __future__ import annotations

from pydantic import (
    AliasChoices,
    BaseModel,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
)

from mama_app.schemas.common import blank_to_none, check_email_length
from mama_app.schemas.user import UserRead


class RegistrationRequest(BaseModel):
    """Self-service registration payload.

    Either ``email`` or ``phone_number`` must be supplied; the credential
    store enforces that rule together with uniqueness.
    """

    username: str = Field(min_length=3, max_length=100)
    email: EmailStr | None = None
    phone_number: str | None = Field(default=None, max_length=32)
    password: str = Field(min_length=6)
    password_confirmation: str

    @field_validator("email", "phone_number", mode="before")
    @classmethod
    def _blank_contact(cls, value: object) -> object:
        return blank_to_none(value)

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str | None) -> str | None:
        return check_email_length(value)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        return value.strip()

    @field_validator("password_confirmation")
    @classmethod
    def _confirmation_matches(cls, value: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("The password confirmation does not match.")
        return value


class RegistrationResponse(BaseModel):
    message: str = "User successfully registered"
    user: UserRead


class LoginRequest(BaseModel):
    """Login payload; ``login`` is an email address or phone number."""

    login: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    """Response body for issued bearer tokens."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRead


class PasswordResetRequest(BaseModel):
    """Request body to initiate a password reset."""

    login: str = Field(min_length=1)


class PasswordResetVerify(BaseModel):
    """Payload to finalize a password reset with a one-time code."""

    login: str = Field(min_length=1)
    otp: str = Field(
        pattern=r"^\d+$",
        min_length=4,
        max_length=10,
        validation_alias=AliasChoices("otp", "code"),
    )
    new_password: str = Field(
        min_length=6, validation_alias=AliasChoices("new_password", "newPassword")
    )
