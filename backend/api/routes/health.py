"""Health check endpoints.

Provides:
- Basic liveness probe (/health)
- Database connectivity check (/health/ready)
"""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logging

from app.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=dict[str, Any])
async def root() -> dict[str, Any]:
    """
    Get API root information and version.
    Used as a simple liveness probe.
    """
    settings = get_settings()
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "ok",
    }


@router.get("/ready", response_model=dict[str, Any])
async def readiness() -> Any:
    """
    Readiness check: pings the database.
    Returns 503 if it is unreachable.
    """
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError
    from db import database

    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        db_status = "ok"
    except (SQLAlchemyError, OSError) as e:
        logger.error("Database health check failed: %s", e)
        db_status = "unavailable"

    body = {"status": "ok" if db_status == "ok" else "degraded", "checks": {"database": db_status}}
    return JSONResponse(status_code=200 if db_status == "ok" else 503, content=body)
