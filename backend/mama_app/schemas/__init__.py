"""Schema exports."""

from mama_app.schemas.auth import (
    LoginRequest,
    PasswordResetRequest,
    PasswordResetVerify,
    RegistrationRequest,
    RegistrationResponse,
    TokenResponse,
)
from mama_app.schemas.common import MessageResponse
from mama_app.schemas.journal import JournalCreate, JournalRead
from mama_app.schemas.mama_data import MamaDataCreate, MamaDataRead
from mama_app.schemas.reminder import (
    MedicineDetail,
    ReminderCreate,
    ReminderRead,
    ReminderStatusUpdate,
    ReminderUpdate,
)
from mama_app.schemas.tip import TipCreate, TipRead
from mama_app.schemas.user import UserImageRead, UserRead, UserUpdate

__all__ = [
    "JournalCreate",
    "JournalRead",
    "LoginRequest",
    "MamaDataCreate",
    "MamaDataRead",
    "MedicineDetail",
    "MessageResponse",
    "PasswordResetRequest",
    "PasswordResetVerify",
    "RegistrationRequest",
    "RegistrationResponse",
    "ReminderCreate",
    "ReminderRead",
    "ReminderStatusUpdate",
    "ReminderUpdate",
    "TipCreate",
    "TipRead",
    "UserImageRead",
    "UserRead",
    "UserUpdate",
]
