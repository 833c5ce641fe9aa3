"""Analytics router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_profile
from ...database import get_db
from ...models import Profile
from .schemas import DashboardResponse
from .service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    """Dependency injection for AnalyticsService"""
    return AnalyticsService(db)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    current_profile: Profile = Depends(get_current_profile),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Platform totals, top mentors and mentor utilization"""
    return service.get_dashboard()
