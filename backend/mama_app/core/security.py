"""Security utilities for hashing and JWT handling."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from mama_app.core.config import get_settings

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class IssuedToken:
    """A freshly minted bearer token and its lifetime."""

    access_token: str
    expires_at: datetime
    expires_in: int


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its hash using bcrypt."""
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password), hashed_password.encode("utf-8")
        )
    except (ValueError, TypeError, AttributeError):  # malformed or missing hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage using bcrypt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def create_access_token(
    subject: str, expires_delta: timedelta | None = None, **extra: Any
) -> str:
    """Create a JWT access token."""
    return _encode(subject, expires_delta=expires_delta, **extra)[0]


def _encode(
    subject: str,
    *,
    expires_delta: timedelta | None = None,
    expires_at: datetime | None = None,
    **extra: Any,
) -> tuple[str, datetime]:
    settings = get_settings()
    issued_at = datetime.now(UTC)
    if expires_at is None:
        if expires_delta is None:
            expires_delta = timedelta(seconds=settings.access_token_ttl_seconds)
        expires_at = issued_at + expires_delta
    claims: dict[str, Any] = {
        "sub": subject,
        "iat": issued_at,
        "exp": expires_at,
        "jti": uuid.uuid4().hex,
    }
    claims.update(extra)
    token = jwt.encode(
        claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )
    return token, expires_at


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode a JWT token, raising JWTError on failure."""
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require_exp": True, "require_sub": True},
    )


def issue_access_token(user_id: int) -> IssuedToken:
    """Mint a bearer token bound to ``user_id``."""
    token, expires_at = _encode(str(user_id))
    return IssuedToken(
        access_token=token,
        expires_at=expires_at,
        expires_in=get_settings().access_token_ttl_seconds,
    )


def _subject_to_user_id(payload: dict[str, Any]) -> int | None:
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.isdigit():
        return None
    return int(subject)


def verify_access_token(token: str) -> int | None:
    """Return the user id carried by a valid token, or None.

    Any signature mismatch, expiry or malformed claim set yields None.
    """
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except JWTError:
        return None
    return _subject_to_user_id(payload)


def refresh_access_token(token: str) -> IssuedToken | None:
    """Issue a new token for the holder of a still-valid ``token``.

    The new expiry is always strictly later than the presented token's,
    even when both are minted within the same second.
    """
    try:
        payload = decode_access_token(token)
    except JWTError:
        return None
    user_id = _subject_to_user_id(payload)
    if user_id is None:
        return None

    settings = get_settings()
    previous_expiry = datetime.fromtimestamp(int(payload["exp"]), UTC)
    expires_at = max(
        datetime.now(UTC) + timedelta(seconds=settings.access_token_ttl_seconds),
        previous_expiry + timedelta(seconds=1),
    )
    new_token, expires_at = _encode(str(user_id), expires_at=expires_at)
    return IssuedToken(
        access_token=new_token,
        expires_at=expires_at,
        expires_in=settings.access_token_ttl_seconds,
    )
