"""Pregnancy profile ("mama data") model."""
from __future__ import annotations

import enum
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mama_app.db.base import Base
from mama_app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from mama_app.models.user import User


class AgeGroup(str, enum.Enum):
    FROM_18_TO_24 = "18-24 years old"
    FROM_25_TO_34 = "25-34 years old"
    FROM_35_TO_44 = "35-44 years old"
    OVER_44 = "44 years old or above"


class BabyGender(str, enum.Enum):
    BOY = "boy"
    GIRL = "girl"
    UNKNOWN = "i don't know yet"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class MamaData(TimestampMixin, Base):
    """Pregnancy details captured during onboarding."""

    __tablename__ = "mama_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_child: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    age_group: Mapped[AgeGroup] = mapped_column(
        Enum(AgeGroup, values_callable=_enum_values), nullable=False
    )
    due_date: Mapped[date | None] = mapped_column(Date)
    gestational_period: Mapped[int | None] = mapped_column(Integer)
    baby_gender: Mapped[BabyGender] = mapped_column(
        Enum(BabyGender, values_callable=_enum_values),
        nullable=False,
        default=BabyGender.UNKNOWN,
    )

    user: Mapped["User"] = relationship("User", back_populates="mama_data")
