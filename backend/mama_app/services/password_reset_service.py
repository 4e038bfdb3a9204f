"""Password reset services backed by one-time numeric codes."""
from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.core.config import get_settings
from mama_app.core.exceptions import OtpExpiredError, OtpInvalidError, ValidationError
from mama_app.core.security import get_password_hash
from mama_app.models.password_reset import PasswordResetOtp
from mama_app.models.user import User
from mama_app.services import user_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OtpDispatch:
    """A freshly issued code and the user it must be delivered to."""

    user: User
    code: str
    expires_at: datetime


def generate_otp_code(length: int | None = None) -> str:
    """Return a uniformly random zero-padded numeric code."""
    digits = length or get_settings().otp_length
    return str(secrets.randbelow(10**digits)).zfill(digits)


def _hash_code(code: str) -> str:
    # codes are low-entropy, so key the digest with the server secret
    key = get_settings().secret_key.encode("utf-8")
    return hmac.new(key, code.encode("utf-8"), hashlib.sha256).hexdigest()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


async def request_reset(session: AsyncSession, *, login: str) -> OtpDispatch | None:
    """Issue a new code for the account matching ``login``, if any.

    Outstanding codes for the same user are discarded so only the latest one
    can be redeemed.
    """
    user = await user_service.get_user_by_login(session, login)
    if user is None:
        return None

    await session.execute(
        delete(PasswordResetOtp).where(
            PasswordResetOtp.user_id == user.id,
            PasswordResetOtp.consumed_at.is_(None),
        )
    )

    code = generate_otp_code()
    now = datetime.now(UTC)
    expires_at = now + timedelta(minutes=get_settings().otp_expire_minutes)
    session.add(
        PasswordResetOtp(
            user_id=user.id,
            code_hash=_hash_code(code),
            created_at=now,
            expires_at=expires_at,
        )
    )
    await session.commit()
    return OtpDispatch(user=user, code=code, expires_at=expires_at)


async def _find_unconsumed_code(
    session: AsyncSession, *, user_id: int, code: str
) -> PasswordResetOtp | None:
    result = await session.execute(
        select(PasswordResetOtp)
        .where(
            PasswordResetOtp.user_id == user_id,
            PasswordResetOtp.code_hash == _hash_code(code),
            PasswordResetOtp.consumed_at.is_(None),
        )
        .order_by(PasswordResetOtp.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def verify_reset(
    session: AsyncSession, *, login: str, code: str, new_password: str
) -> User:
    """Redeem ``code`` and set ``new_password`` in a single transaction."""
    if len(new_password) < user_service.MIN_PASSWORD_LENGTH:
        raise ValidationError.single(
            "new_password",
            f"The new password must be at least {user_service.MIN_PASSWORD_LENGTH} characters.",
        )

    user = await user_service.get_user_by_login(session, login)
    if user is None:
        raise OtpInvalidError()

    record = await _find_unconsumed_code(session, user_id=user.id, code=code)
    if record is None:
        raise OtpInvalidError()

    now = datetime.now(UTC)
    if _as_utc(record.expires_at) <= now:
        raise OtpExpiredError()

    # Only one concurrent redemption can flip consumed_at from NULL.
    consumed = await session.execute(
        update(PasswordResetOtp)
        .where(
            PasswordResetOtp.id == record.id,
            PasswordResetOtp.consumed_at.is_(None),
            PasswordResetOtp.expires_at > now,
        )
        .values(consumed_at=now)
        .execution_options(synchronize_session=False)
    )
    if consumed.rowcount != 1:
        await session.rollback()
        raise OtpInvalidError()

    user.hashed_password = get_password_hash(new_password)
    await session.commit()
    logger.info("Password reset completed for user %s", user.id)
    return user
