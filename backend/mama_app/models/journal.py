"""Journal entry model."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mama_app.db.base import Base
from mama_app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from mama_app.models.user import User


class Journal(TimestampMixin, Base):
    """Free-text diary entry written by a user."""

    __tablename__ = "journals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped["User"] = relationship("User", back_populates="journals")
