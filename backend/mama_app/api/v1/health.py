"""Health check endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mama_app.api import deps
from mama_app.core.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


async def _database_status(session: AsyncSession) -> str:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return "unavailable"
    return "ok"


@router.get("", summary="Service health status")
async def healthcheck(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> dict[str, str]:
    """Report service metadata and whether the database answers."""
    settings = get_settings()
    database = await _database_status(session)
    return {
        "status": "ok" if database == "ok" else "degraded",
        "service": settings.app_name,
        "database": database,
        "environment": settings.app_env,
        "timestamp": datetime.now(UTC).isoformat(),
    }
