from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from staketracker.api.deps import get_db, get_stats_service
from staketracker.api.pagination import page_params
from staketracker.api.schemas.accounts import AccountList, AccountResponse
from staketracker.db.repos.account_repo import AccountRepo
from staketracker.domain.models.stats import AccountSummary, CashoutPage
from staketracker.stats.summary import StatsService

router = APIRouter(prefix="/api/accounts", tags=["accounts"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
StatsDep = Annotated[StatsService, Depends(get_stats_service)]


@router.get("", response_model=AccountList)
async def list_accounts(db: DbDep) -> AccountList:
    accounts = await AccountRepo(db).list_all()
    return AccountList(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        total=len(accounts),
    )


@router.get("/{account_id}/summary", response_model=AccountSummary)
async def get_account_summary(account_id: str, stats: StatsDep) -> AccountSummary:
    """Top 3 multipliers plus USD/crypto totals."""
    return await stats.summarize(account_id)


@router.get("/{account_id}/cashouts", response_model=CashoutPage)
async def list_account_cashouts(
    account_id: str,
    stats: StatsDep,
    page: Optional[str] = Query(None),
    size: Optional[str] = Query(None),
) -> CashoutPage:
    page_no, page_size = page_params(page, size)
    return await stats.list_cashouts(account_id, page_no, page_size)
