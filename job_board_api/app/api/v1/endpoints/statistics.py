"""
Statistics endpoint for API v1.

Returns the dashboard counters scoped to the caller; see
``StatisticsService`` for how each account kind is scoped.
"""

from fastapi import APIRouter, Depends

from job_board_api.app.core.security import Actor, get_current_user
from job_board_api.app.schemas.stats import StatsRead
from job_board_api.app.services.statistics_service import StatisticsService


router = APIRouter()


@router.get("", response_model=StatsRead)
async def get_stats(current_user: Actor = Depends(get_current_user)) -> StatsRead:
    return await StatisticsService.get_stats(current_user.id)
