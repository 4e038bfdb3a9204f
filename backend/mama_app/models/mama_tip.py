"""Informational tip model."""
from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mama_app.db.base import Base
from mama_app.models.mixins import TimestampMixin


class MamaTip(TimestampMixin, Base):
    """Editorial tip shown to all users."""

    __tablename__ = "mama_tips"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    tip_content: Mapped[str] = mapped_column(Text, nullable=False)
    image_path: Mapped[str] = mapped_column(String(255), nullable=False)
