"""StatsService — per-account summary, paginated history and global leaderboard."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from staketracker.db.repos.account_repo import AccountRepo
from staketracker.db.repos.cashout_repo import CashoutRepo
from staketracker.domain.models.cashout import NormalizedCashout
from staketracker.domain.models.stats import AccountSummary, AccountTotals, CashoutPage
from staketracker.stats.normalizer import CashoutNormalizer, RateSource

logger = logging.getLogger(__name__)

TOP_N = 3


class StatsService:
    def __init__(
        self,
        session: AsyncSession,
        rates: RateSource,
        default_currency: str = "ltc",
    ) -> None:
        self._cashouts = CashoutRepo(session)
        self._accounts = AccountRepo(session)
        self._rates = rates
        self._normalizer = CashoutNormalizer(rates)
        self._default_currency = default_currency

    async def summarize(self, account_id: str) -> AccountSummary:
        top_rows = await self._cashouts.top_by_multiplier(account_id, limit=TOP_N)
        top3 = await self._normalizer.normalize_many(top_rows)
        totals = await self._totals(account_id)
        return AccountSummary(top3=top3, totals=totals)

    async def _totals(self, account_id: str) -> AccountTotals:
        agg = await self._cashouts.get_totals(account_id)
        payout_usd = agg["total_payout_usd"]
        amount_usd = agg["total_amount_usd"]
        payout_crypto = agg["total_payout_crypto"]
        amount_crypto = agg["total_amount_crypto"]

        # Rows captured before USD was stored sum to 0; estimate from crypto at one current rate.
        needs_payout = payout_usd == 0 and payout_crypto > 0
        needs_amount = amount_usd == 0 and amount_crypto > 0
        if needs_payout or needs_amount:
            currency = await self._fallback_currency(account_id)
            rate = await self._rates.fetch_usd_rate(currency)
            if rate is None:
                logger.info("No %s rate for account %s totals, USD stays 0", currency, account_id)
            else:
                if needs_payout:
                    payout_usd = payout_crypto * rate
                if needs_amount:
                    amount_usd = amount_crypto * rate

        return AccountTotals(
            total_bets=agg["total_bets"],
            max_mult=agg["max_mult"],
            total_payout=round(payout_usd, 2),
            total_amount=round(amount_usd, 2),
            total_payout_crypto=payout_crypto,
            total_amount_crypto=amount_crypto,
        )

    async def _fallback_currency(self, account_id: str) -> str:
        latest = await self._cashouts.latest_for_account(account_id)
        if latest is not None and latest.currency:
            return latest.currency
        return self._default_currency

    async def list_cashouts(self, account_id: str, page: int, size: int) -> CashoutPage:
        rows, total = await self._cashouts.list_for_account(account_id, limit=size, offset=(page - 1) * size)
        normalized = await self._normalizer.normalize_many(rows)
        return CashoutPage(page=page, size=size, total=total, rows=normalized)

    async def leaderboard(self, size: int) -> list[NormalizedCashout]:
        rows = await self._cashouts.leaderboard(limit=size)
        names = await self._accounts.get_display_names(list(dict.fromkeys(r.account_id for r in rows)))
        return await self._normalizer.normalize_many(rows, account_names=names)
