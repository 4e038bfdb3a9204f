"""Service layer exports."""
from mama_app.services import (
    auth_service,
    journal_service,
    mama_data_service,
    notification_service,
    password_reset_service,
    reminder_service,
    tip_service,
    user_service,
)

__all__ = [
    "auth_service",
    "journal_service",
    "mama_data_service",
    "notification_service",
    "password_reset_service",
    "reminder_service",
    "tip_service",
    "user_service",
]
