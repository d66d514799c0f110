"""Tests for CashoutNormalizer — stored USD precedence, backfill, degradation."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from staketracker.db.models.cashout import Cashout
from staketracker.infra.price.cache import PriceCache
from staketracker.infra.price.coingecko import CoinGeckoRateFetcher
from staketracker.stats.normalizer import CashoutNormalizer, to_number


def _row(**kwargs) -> Cashout:
    defaults = {
        "id": "c1",
        "account_id": "u1",
        "game": "mines",
        "currency": "ltc",
        "amount": 2.0,
        "payout": 5.0,
        "amount_multiplier": 1.0,
        "payout_multiplier": 2.5,
    }
    defaults.update(kwargs)
    return Cashout(**defaults)


class TestToNumber:
    def test_values(self):
        assert to_number(None) == 0.0
        assert to_number("abc") == 0.0
        assert to_number("1.5") == 1.5
        assert to_number(float("nan")) == 0.0
        assert to_number(True) == 0.0
        assert to_number(3) == 3.0


class TestNormalize:
    async def test_stored_usd_wins_without_fetch(self, rates):
        normalizer = CashoutNormalizer(rates)

        result = await normalizer.normalize(_row(amount_usd=10.0, payout_usd=20.0))

        assert result.amount == 10.0
        assert result.payout == 20.0
        assert result.amount_crypto == 2.0
        assert result.payout_crypto == 5.0
        assert rates.calls == []

    async def test_backfill_from_rate(self, rates):
        normalizer = CashoutNormalizer(rates)

        result = await normalizer.normalize(_row())

        assert result.amount_usd == 100.0  # 2 ltc * 50
        assert result.payout_usd == 250.0
        assert result.amount == 100.0
        assert result.payout == 250.0
        assert rates.calls == ["ltc"]

    async def test_partial_stored_usd_keeps_stored_field(self, rates):
        normalizer = CashoutNormalizer(rates)

        result = await normalizer.normalize(_row(amount_usd=90.0))

        assert result.amount == 90.0
        assert result.payout == 250.0

    async def test_unknown_currency_degrades_to_zero(self, rates):
        normalizer = CashoutNormalizer(rates)

        result = await normalizer.normalize(_row(currency="zzz"))

        assert result.amount_usd == 0.0
        assert result.payout_usd == 0.0
        assert result.amount_crypto == 2.0

    async def test_missing_crypto_values_default_to_zero(self, rates):
        normalizer = CashoutNormalizer(rates)

        result = await normalizer.normalize(_row(amount=None, payout=None))

        assert result.amount_crypto == 0.0
        assert result.payout == 0.0

    async def test_serializes_camel_case(self, rates):
        normalizer = CashoutNormalizer(rates)

        data = (await normalizer.normalize(_row())).model_dump(by_alias=True)

        assert data["amountUSD"] == 100.0
        assert data["payoutCrypto"] == 5.0
        assert data["payoutMultiplier"] == 2.5
        assert data["accountId"] == "u1"


class TestNormalizeMany:
    async def test_preserves_input_order(self):
        class SlowRates:
            async def fetch_usd_rate(self, symbol):
                # btc resolves last
                await asyncio.sleep(0.01 if symbol == "btc" else 0)
                return {"btc": 2.0, "ltc": 1.0}.get(symbol)

        rows = [_row(id="a", currency="btc"), _row(id="b", currency="ltc"), _row(id="c", currency="btc")]
        result = await CashoutNormalizer(SlowRates()).normalize_many(rows)

        assert [r.id for r in result] == ["a", "b", "c"]
        assert [r.amount for r in result] == [4.0, 2.0, 4.0]

    async def test_fetches_once_per_currency(self, rates):
        normalizer = CashoutNormalizer(rates)
        rows = (
            [_row(id=f"l{i}") for i in range(5)]
            + [_row(id=f"z{i}", currency="zzz") for i in range(3)]
            + [_row(id="stored", amount_usd=1.0, payout_usd=1.0, currency="btc")]
        )

        await normalizer.normalize_many(rows)

        assert rates.calls.count("ltc") == 1
        assert rates.calls.count("zzz") == 1
        assert "btc" not in rates.calls

    async def test_provider_outage_costs_one_request(self):
        mock_http = MagicMock()
        mock_http.get = AsyncMock(return_value=MagicMock(status_code=503))
        fetcher = CoinGeckoRateFetcher(http_client=mock_http, cache=PriceCache(ttl_ms=60_000))
        rows = [_row(id=str(i)) for i in range(50)]

        result = await CashoutNormalizer(fetcher).normalize_many(rows)

        assert mock_http.get.await_count == 1
        assert len(result) == 50
        assert all(r.amount_usd == 0.0 and r.payout_usd == 0.0 for r in result)
        assert [r.amount_crypto for r in result] == [2.0] * 50

    async def test_attaches_account_names(self, rates):
        normalizer = CashoutNormalizer(rates)

        result = await normalizer.normalize_many([_row()], account_names={"u1": "alice"})

        assert result[0].account_name == "alice"

    async def test_empty(self, rates):
        assert await CashoutNormalizer(rates).normalize_many([]) == []
