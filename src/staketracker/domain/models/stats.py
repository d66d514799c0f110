"""Domain types for per-account statistics."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from staketracker.domain.models.cashout import NormalizedCashout


class AccountTotals(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_bets: int = 0
    max_mult: float = 0.0
    total_payout: float = 0.0  # USD, 2dp
    total_amount: float = 0.0  # USD, 2dp
    total_payout_crypto: float = 0.0
    total_amount_crypto: float = 0.0


class AccountSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    top3: list[NormalizedCashout] = []
    totals: AccountTotals = AccountTotals()


class CashoutPage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    size: int
    total: int
    rows: list[NormalizedCashout]
