"""Versioned API router."""

from fastapi import APIRouter

from . import (
    auth,
    health,
    journals,
    mama_data,
    reminders,
    tips,
    users,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(mama_data.router, prefix="/mama-data", tags=["mama-data"])
router.include_router(journals.router, prefix="/journals", tags=["journals"])
router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
router.include_router(tips.router, prefix="/mama-tips", tags=["mama-tips"])

__all__ = ["router"]
