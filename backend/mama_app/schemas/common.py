"""Shared response schemas."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only strings as missing values."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_email_length(value: str | None) -> str | None:
    if value is not None and len(value) > 100:
        raise ValueError("The email must not be greater than 100 characters.")
    return value
