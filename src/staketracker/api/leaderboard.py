from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from staketracker.api.deps import get_stats_service
from staketracker.api.pagination import leaderboard_size
from staketracker.api.schemas.cashouts import LeaderboardResponse
from staketracker.stats.summary import StatsService

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])

StatsDep = Annotated[StatsService, Depends(get_stats_service)]


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(stats: StatsDep, size: Optional[str] = Query(None)) -> LeaderboardResponse:
    """Highest positive multipliers across all accounts, with account names attached."""
    n = leaderboard_size(size)
    rows = await stats.leaderboard(n)
    return LeaderboardResponse(size=n, rows=rows)
