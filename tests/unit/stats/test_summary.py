"""Tests for StatsService — totals fallback, top 3, history paging, leaderboard."""

import pytest

from staketracker.ingest.service import IngestionService
from staketracker.stats.summary import StatsService


def _flat(cashout_id: str, account_id: str = "u1", **kwargs) -> dict:
    body = {
        "id": cashout_id,
        "accountId": account_id,
        "currency": "ltc",
        "amount": 1,
        "payout": 1,
        "payoutMultiplier": 1,
    }
    body.update(kwargs)
    return body


@pytest.fixture()
def ingest(session, clock):
    service = IngestionService(session, clock=clock)

    async def _ingest(*bodies: dict) -> None:
        for body in bodies:
            await service.ingest(body)
        await session.commit()

    return _ingest


class TestSummarize:
    async def test_fallback_estimates_from_crypto_sum(self, session, ingest, rates):
        rates.rates["ltc"] = 10.0
        await ingest(
            _flat("a", payout=1, amount=0.5, payoutMultiplier=2),
            _flat("b", payout=2, amount=0.5, payoutMultiplier=4),
            _flat("c", payout=3, amount=1, payoutMultiplier=3),
        )

        summary = await StatsService(session, rates).summarize("u1")

        assert summary.totals.total_bets == 3
        assert summary.totals.max_mult == 4
        assert summary.totals.total_payout == pytest.approx(60.0)
        assert summary.totals.total_amount == pytest.approx(20.0)
        assert summary.totals.total_payout_crypto == pytest.approx(6.0)

    async def test_stored_usd_sums_are_used(self, session, ingest, rates):
        await ingest(
            _flat("a", payout=1, amountUSD=10, payoutUSD=20.123),
            _flat("b", payout=2, amountUSD=5, payoutUSD=30),
        )

        summary = await StatsService(session, rates).summarize("u1")

        assert summary.totals.total_payout == 50.12
        assert summary.totals.total_amount == 15.0
        assert rates.calls.count("ltc") == 0

    async def test_fallback_uses_latest_records_currency(self, session, ingest, rates):
        await ingest(_flat("a", currency="ltc", payout=1), _flat("b", currency="btc", payout=1, amount=0))

        summary = await StatsService(session, rates).summarize("u1")

        # crypto sum 2 re-rated at the btc rate of the most recent capture
        assert summary.totals.total_payout == 120000.0
        assert "btc" in rates.calls

    async def test_fallback_without_rate_stays_zero(self, session, ingest, rates):
        await ingest(_flat("a", currency="zzz", payout=4))

        summary = await StatsService(session, rates).summarize("u1")

        assert summary.totals.total_payout == 0.0
        assert summary.totals.total_payout_crypto == 4.0

    async def test_empty_account(self, session, rates):
        summary = await StatsService(session, rates).summarize("nobody")

        assert summary.top3 == []
        assert summary.totals.total_bets == 0
        assert summary.totals.total_payout == 0.0
        assert rates.calls == []

    async def test_top3_by_multiplier_normalized(self, session, ingest, rates):
        await ingest(*[_flat(f"c{m}", payoutMultiplier=m, payout=m) for m in (1, 5, 3, 9, 2)])

        summary = await StatsService(session, rates).summarize("u1")

        assert [r.id for r in summary.top3] == ["c9", "c5", "c3"]
        assert summary.top3[0].payout == 450.0  # 9 ltc * 50
        assert summary.top3[0].payout_crypto == 9.0

    async def test_default_currency_when_latest_has_none(self, session, ingest, rates):
        await ingest(_flat("a", currency=None, payout=2))

        summary = await StatsService(session, rates, default_currency="btc").summarize("u1")

        assert summary.totals.total_payout == 120000.0


class TestListCashouts:
    async def test_paging_newest_first(self, session, ingest, rates):
        await ingest(*[_flat(f"c{i}") for i in range(5)])
        service = StatsService(session, rates)

        first = await service.list_cashouts("u1", page=1, size=2)
        last = await service.list_cashouts("u1", page=3, size=2)

        assert first.total == 5
        assert [r.id for r in first.rows] == ["c4", "c3"]
        assert [r.id for r in last.rows] == ["c0"]
        assert first.rows[0].amount == 50.0


class TestLeaderboard:
    async def test_excludes_non_positive_and_sorts_desc(self, session, ingest, rates):
        await ingest(
            _flat("a", account_id="u1", payoutMultiplier=0),
            _flat("b", account_id="u1", payoutMultiplier=-1),
            _flat("c", account_id="u2", accountName="bob", payoutMultiplier=3),
            _flat("d", account_id="u1", payoutMultiplier=12.5),
            _flat("e", account_id="u3", payoutMultiplier=7),
        )

        rows = await StatsService(session, rates).leaderboard(10)

        assert [r.id for r in rows] == ["d", "e", "c"]
        mults = [r.payout_multiplier for r in rows]
        assert all(x > y for x, y in zip(mults, mults[1:]))
        names = {r.id: r.account_name for r in rows}
        assert names == {"d": "u1", "e": "u3", "c": "bob"}

    async def test_respects_size(self, session, ingest, rates):
        await ingest(*[_flat(f"c{i}", payoutMultiplier=i + 1) for i in range(6)])

        rows = await StatsService(session, rates).leaderboard(2)

        assert [r.id for r in rows] == ["c5", "c4"]
