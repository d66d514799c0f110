"""Domain types for ingested and USD-normalized cashouts."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CashoutRecord(BaseModel):
    """Canonical ingestion record. Both accepted payload shapes reconcile to this."""

    id: str
    account_id: str
    account_name: Optional[str] = None
    game: Optional[str] = None
    currency: Optional[str] = None
    amount: float = 0.0
    payout: float = 0.0
    amount_multiplier: float = 0.0
    payout_multiplier: float = 0.0
    amount_usd: Optional[float] = None  # None = client did not send a valid value
    payout_usd: Optional[float] = None
    updated_at: Optional[str] = None  # upstream timestamp, opaque
    raw: dict[str, Any] = {}


class NormalizedCashout(BaseModel):
    """Response-ready cashout: ``amount``/``payout`` are USD, originals kept as ``*_crypto``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    account_id: str
    game: Optional[str] = None
    currency: Optional[str] = None
    amount: float = 0.0
    payout: float = 0.0
    amount_usd: float = Field(0.0, alias="amountUSD")
    payout_usd: float = Field(0.0, alias="payoutUSD")
    amount_crypto: float = 0.0
    payout_crypto: float = 0.0
    amount_multiplier: float = 0.0
    payout_multiplier: float = 0.0
    updated_at: Optional[str] = None
    captured_at: Optional[datetime] = None
    account_name: Optional[str] = None
