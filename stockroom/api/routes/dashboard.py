"""Dashboard endpoint."""

from fastapi import APIRouter, Depends

from stockroom.api.dependencies import get_dashboard_stats_use_case
from stockroom.application.dto.responses import DashboardStatsResponse
from stockroom.application.use_cases.get_dashboard_stats import GetDashboardStatsUseCase

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> DashboardStatsResponse:
    """Counters, most urgent stock alerts and the latest movements."""
    stats = await use_case.execute()
    return use_case.to_response(stats)
