"""
Health check endpoint.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db, check_db_connection
from app.schemas.dashboard import HealthCheck

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheck)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns system status and database reachability.
    """
    db_healthy = await check_db_connection(db)

    return HealthCheck(
        status="healthy" if db_healthy else "degraded",
        version=settings.app_version,
        database=db_healthy,
        timestamp=datetime.now(timezone.utc)
    )
