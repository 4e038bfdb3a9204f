"""Password reset one-time code model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mama_app.db.base import Base
from mama_app.models.mixins import utcnow


if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from mama_app.models.user import User


class PasswordResetOtp(Base):
    """Stores hashed one-time codes that authorize a password reset."""

    __tablename__ = "password_reset_otps"
    __table_args__ = (Index("ix_password_reset_otps_user_code", "user_id", "code_hash"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    code_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    consumed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    user: Mapped["User"] = relationship("User")
