"""IngestionService — idempotent account + cashout upsert."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from staketracker.db.repos.account_repo import AccountRepo
from staketracker.db.repos.cashout_repo import CashoutRepo
from staketracker.domain.models.cashout import CashoutRecord
from staketracker.ingest.payloads import reconcile_payload

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IngestionService:
    """Reconcile a payload and upsert it. Caller owns the commit."""

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = _utcnow) -> None:
        self._accounts = AccountRepo(session)
        self._cashouts = CashoutRepo(session)
        self._clock = clock

    async def ingest(self, body: Any) -> CashoutRecord:
        # Validation happens before any write
        record = reconcile_payload(body)

        await self._accounts.upsert(record.account_id, record.account_name)
        await self._cashouts.upsert(record, captured_at=self._clock())

        logger.info(
            "Ingested cashout %s for account %s (%s, x%s)",
            record.id, record.account_id, record.currency, record.payout_multiplier,
        )
        return record
