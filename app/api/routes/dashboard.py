"""
Dashboard API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.schemas.dashboard import DashboardMetrics
from app.services import reports

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(get_current_user)]
)


@router.get("/metrics", response_model=DashboardMetrics)
async def get_dashboard_metrics(db: AsyncSession = Depends(get_db)):
    """
    Key figures for the dashboard, computed per request.

    Monthly figures count from the first day of the current UTC month.
    """
    return await reports.dashboard_metrics(db)
