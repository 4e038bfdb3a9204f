"""User model for mama app identities."""
from __future__ import annotations

import hmac
from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mama_app.db.base import Base
from mama_app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from mama_app.models.journal import Journal
    from mama_app.models.mama_data import MamaData
    from mama_app.models.reminder import Reminder

DEFAULT_IMAGE_PATH = "image/default.png"


class User(TimestampMixin, Base):
    """User entity for authentication and authorization."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(100), unique=True)
    phone_number: Mapped[str | None] = mapped_column(String(32), unique=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    # Last token issued by login; cleared by logout.
    session_token: Mapped[str | None] = mapped_column(Text)
    image_path: Mapped[str] = mapped_column(
        String(255), nullable=False, default=DEFAULT_IMAGE_PATH
    )

    journals: Mapped[list["Journal"]] = relationship(
        "Journal", back_populates="user", cascade="all, delete-orphan"
    )
    reminders: Mapped[list["Reminder"]] = relationship(
        "Reminder", back_populates="user", cascade="all, delete-orphan"
    )
    mama_data: Mapped[list["MamaData"]] = relationship(
        "MamaData", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def has_live_session(self) -> bool:
        return bool(self.session_token)

    def holds_session(self, token: str) -> bool:
        """Return True when ``token`` is the one mirrored by the last login."""
        if not self.session_token or not token:
            return False
        return hmac.compare_digest(
            self.session_token.encode("utf-8"), token.encode("utf-8")
        )
