"""CashoutNormalizer — expresses stored cashouts in USD."""

import asyncio
import logging
import math
from typing import Any, Protocol, Sequence

from staketracker.db.models.cashout import Cashout
from staketracker.domain.models.cashout import NormalizedCashout

logger = logging.getLogger(__name__)


class RateSource(Protocol):
    async def fetch_usd_rate(self, symbol: str | None) -> float | None: ...


def to_number(value: Any) -> float:
    """Coerce to a finite float; None, junk and NaN become 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _stored_usd(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _needs_rate(row: Cashout) -> bool:
    return _stored_usd(row.amount_usd) is None or _stored_usd(row.payout_usd) is None


class CashoutNormalizer:
    """Stored USD values win; missing ones are backfilled as crypto × current rate, else 0."""

    def __init__(self, rates: RateSource) -> None:
        self._rates = rates

    async def normalize(self, row: Cashout, account_name: str | None = None) -> NormalizedCashout:
        rate = await self._rates.fetch_usd_rate(row.currency) if _needs_rate(row) else None
        return self._resolve(row, rate, account_name)

    async def normalize_many(
        self,
        rows: Sequence[Cashout],
        account_names: dict[str, str] | None = None,
    ) -> list[NormalizedCashout]:
        """Normalize rows in input order.

        Each distinct currency that still needs a rate is fetched once, up front.
        A failed fetch resolves to no rate for every row of that currency.
        """
        currencies = list(dict.fromkeys(row.currency for row in rows if _needs_rate(row)))
        fetched = await asyncio.gather(*(self._rates.fetch_usd_rate(c) for c in currencies))
        rates = dict(zip(currencies, fetched))

        names = account_names or {}
        return [self._resolve(row, rates.get(row.currency), names.get(row.account_id)) for row in rows]

    @staticmethod
    def _resolve(row: Cashout, rate: float | None, account_name: str | None) -> NormalizedCashout:
        amount_crypto = to_number(row.amount)
        payout_crypto = to_number(row.payout)
        amount_usd = _stored_usd(row.amount_usd)
        payout_usd = _stored_usd(row.payout_usd)

        if amount_usd is None or payout_usd is None:
            if rate is None:
                logger.debug("No USD rate for %s, cashout %s falls back to 0", row.currency, row.id)
                rate = 0.0
            if amount_usd is None:
                amount_usd = amount_crypto * rate
            if payout_usd is None:
                payout_usd = payout_crypto * rate

        return NormalizedCashout(
            id=row.id,
            account_id=row.account_id,
            game=row.game,
            currency=row.currency,
            amount=amount_usd,
            payout=payout_usd,
            amount_usd=amount_usd,
            payout_usd=payout_usd,
            amount_crypto=amount_crypto,
            payout_crypto=payout_crypto,
            amount_multiplier=to_number(row.amount_multiplier),
            payout_multiplier=to_number(row.payout_multiplier),
            updated_at=row.upstream_updated_at,
            captured_at=row.captured_at,
            account_name=account_name,
        )
