"""Helpers for masking contact details in logs."""

from __future__ import annotations


def mask_email(value: str | None) -> str | None:
    if not value or "@" not in value:
        return value
    local, _, domain = value.partition("@")
    if not local:
        return "***@" + domain
    return f"{local[0]}***@{domain}"


def mask_phone(value: str | None) -> str | None:
    if not value:
        return value
    digits = [ch for ch in value if ch.isdigit()]
    if len(digits) < 4:
        return "***"
    return f"***-***-{''.join(digits[-4:])}"


def mask_login(value: str | None) -> str | None:
    """Mask a login identifier that may be an email or a phone number."""
    if value and "@" in value:
        return mask_email(value)
    return mask_phone(value)


__all__ = ["mask_email", "mask_login", "mask_phone"]
