from fastapi import APIRouter, Depends

from src.core.auth_middleware import get_current_user
from src.services.analytics import AnalyticsService

analytics_router = APIRouter()


@analytics_router.get("/")
async def get_my_analytics(
    analytics_service: AnalyticsService = Depends(AnalyticsService),
    token: dict = Depends(get_current_user),
):
    """Аналитика текущего студента: средний и лучший балл, предметы, главы, динамика"""
    return {"analytics": await analytics_service.get_student_analytics(token.get("sub"))}
