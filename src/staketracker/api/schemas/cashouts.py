from pydantic import BaseModel

from staketracker.domain.models.cashout import NormalizedCashout


class IngestResponse(BaseModel):
    ok: bool = True


class LeaderboardResponse(BaseModel):
    size: int
    rows: list[NormalizedCashout]
