"""Tests for the in-process PriceCache freshness window."""

from staketracker.infra.price.cache import PriceCache


class TestPriceCache:
    def test_miss_returns_none(self):
        cache = PriceCache(ttl_ms=60_000, clock=lambda: 0)
        assert cache.get("ltc") is None

    def test_fresh_quote_is_served(self):
        cache = PriceCache(ttl_ms=60_000)
        cache.put("ltc", 71.5, now=1_000)
        assert cache.get("ltc", now=1_000) == 71.5
        assert cache.get("ltc", now=60_999) == 71.5

    def test_quote_at_window_edge_is_stale(self):
        cache = PriceCache(ttl_ms=60_000)
        cache.put("ltc", 71.5, now=1_000)
        assert cache.get("ltc", now=61_000) is None
        assert cache.get("ltc", now=500_000) is None

    def test_overwrite_refreshes_timestamp(self):
        cache = PriceCache(ttl_ms=60_000)
        cache.put("btc", 60_000.0, now=0)
        cache.put("btc", 61_000.0, now=50_000)
        assert cache.get("btc", now=100_000) == 61_000.0

    def test_injected_clock_used_by_default(self):
        now = [0.0]
        cache = PriceCache(ttl_ms=1_000, clock=lambda: now[0])
        cache.put("eth", 3000.0)
        now[0] = 999
        assert cache.get("eth") == 3000.0
        now[0] = 1_000
        assert cache.get("eth") is None

    def test_symbols_are_case_insensitive(self):
        cache = PriceCache(ttl_ms=60_000, clock=lambda: 0)
        cache.put("LTC", 70.0)
        assert cache.get("ltc") == 70.0
        assert len(cache) == 1

    def test_clear(self):
        cache = PriceCache(ttl_ms=60_000, clock=lambda: 0)
        cache.put("ltc", 70.0)
        cache.clear()
        assert cache.get("ltc") is None
