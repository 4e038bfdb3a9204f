"""ORM models package export."""

from mama_app.models.journal import Journal
from mama_app.models.mama_data import AgeGroup, BabyGender, MamaData
from mama_app.models.mama_tip import MamaTip
from mama_app.models.password_reset import PasswordResetOtp
from mama_app.models.reminder import DoseUnit, Reminder, ReminderType
from mama_app.models.user import DEFAULT_IMAGE_PATH, User

__all__ = [
    "AgeGroup",
    "BabyGender",
    "DEFAULT_IMAGE_PATH",
    "DoseUnit",
    "Journal",
    "MamaData",
    "MamaTip",
    "PasswordResetOtp",
    "Reminder",
    "ReminderType",
    "User",
]
