"""Reminder model for appointments, medicine and tests."""
from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mama_app.db.base import Base
from mama_app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from mama_app.models.user import User


class ReminderType(str, enum.Enum):
    DOCTORS_APPOINTMENT = "doctor's appointment"
    MEDICINE = "medicine"
    MEDICAL_TESTS = "medical tests"


class DoseUnit(str, enum.Enum):
    TABLETS = "tablets"
    DROPS = "drops"
    CAPSULE = "capsule"


class Reminder(TimestampMixin, Base):
    """Scheduled reminder owned by a user."""

    __tablename__ = "reminders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[ReminderType] = mapped_column(
        Enum(ReminderType, values_callable=lambda enum_cls: [m.value for m in enum_cls]),
        nullable=False,
    )
    appointment: Mapped[str | None] = mapped_column(String(255))
    reminder_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    dose_unit: Mapped[DoseUnit | None] = mapped_column(
        Enum(DoseUnit, values_callable=lambda enum_cls: [m.value for m in enum_cls])
    )
    medicine_details: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    user: Mapped["User"] = relationship("User", back_populates="reminders")
