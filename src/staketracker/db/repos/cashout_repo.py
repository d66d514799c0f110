import json
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from staketracker.db.models.cashout import Cashout
from staketracker.domain.models.cashout import CashoutRecord


class CashoutRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, cashout_id: str) -> Optional[Cashout]:
        result = await self._session.execute(select(Cashout).where(Cashout.id == cashout_id))
        return result.scalar_one_or_none()

    async def upsert(self, record: CashoutRecord, captured_at: datetime) -> Cashout:
        """Insert-if-absent on id, otherwise overwrite every mutable column."""
        cashout = await self.get_by_id(record.id)
        if cashout is None:
            try:
                async with self._session.begin_nested():
                    cashout = Cashout(id=record.id, captured_at=captured_at)
                    self._apply(cashout, record, captured_at)
                    self._session.add(cashout)
                return cashout
            except IntegrityError:
                cashout = await self.get_by_id(record.id)
                if cashout is None:
                    raise

        self._apply(cashout, record, captured_at)
        await self._session.flush()
        return cashout

    @staticmethod
    def _apply(cashout: Cashout, record: CashoutRecord, captured_at: datetime) -> None:
        cashout.account_id = record.account_id
        cashout.game = record.game
        cashout.currency = record.currency
        cashout.amount = record.amount
        cashout.payout = record.payout
        cashout.amount_multiplier = record.amount_multiplier
        cashout.payout_multiplier = record.payout_multiplier
        cashout.amount_usd = record.amount_usd
        cashout.payout_usd = record.payout_usd
        cashout.upstream_updated_at = record.updated_at
        cashout.raw_json = json.dumps(record.raw, default=str)
        cashout.captured_at = captured_at

    async def top_by_multiplier(self, account_id: str, limit: int = 3) -> list[Cashout]:
        result = await self._session.execute(
            select(Cashout)
            .where(Cashout.account_id == account_id)
            .order_by(Cashout.payout_multiplier.desc(), Cashout.captured_at.desc(), Cashout.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def latest_for_account(self, account_id: str) -> Optional[Cashout]:
        result = await self._session.execute(
            select(Cashout)
            .where(Cashout.account_id == account_id)
            .order_by(Cashout.captured_at.desc(), Cashout.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_totals(self, account_id: str) -> dict[str, Any]:
        """Count, max multiplier, and USD/crypto sums across all of an account's cashouts."""
        result = await self._session.execute(
            select(
                func.count(Cashout.id).label("total_bets"),
                func.coalesce(func.max(Cashout.payout_multiplier), 0.0).label("max_mult"),
                func.coalesce(func.sum(Cashout.payout_usd), 0.0).label("total_payout_usd"),
                func.coalesce(func.sum(Cashout.amount_usd), 0.0).label("total_amount_usd"),
                func.coalesce(func.sum(Cashout.payout), 0.0).label("total_payout_crypto"),
                func.coalesce(func.sum(Cashout.amount), 0.0).label("total_amount_crypto"),
            ).where(Cashout.account_id == account_id)
        )
        row = result.one()
        return {
            "total_bets": row.total_bets or 0,
            "max_mult": float(row.max_mult or 0),
            "total_payout_usd": float(row.total_payout_usd or 0),
            "total_amount_usd": float(row.total_amount_usd or 0),
            "total_payout_crypto": float(row.total_payout_crypto or 0),
            "total_amount_crypto": float(row.total_amount_crypto or 0),
        }

    async def list_for_account(
        self,
        account_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Cashout], int]:
        count_q = select(func.count()).select_from(Cashout).where(Cashout.account_id == account_id)
        total_result = await self._session.execute(count_q)
        total = total_result.scalar_one()

        result = await self._session.execute(
            select(Cashout)
            .where(Cashout.account_id == account_id)
            .order_by(Cashout.captured_at.desc(), Cashout.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    async def leaderboard(self, limit: int = 10) -> list[Cashout]:
        """Highest positive payout multipliers across all accounts."""
        result = await self._session.execute(
            select(Cashout)
            .where(Cashout.payout_multiplier > 0)
            .order_by(Cashout.payout_multiplier.desc(), Cashout.captured_at.desc(), Cashout.id)
            .limit(limit)
        )
        return list(result.scalars().all())
