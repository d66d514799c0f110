"""In-process USD quote cache with a freshness window."""

import time
from dataclasses import dataclass
from typing import Callable


def _wall_clock_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class PriceQuote:
    rate: float  # USD per unit
    fetched_at: float  # epoch ms


class PriceCache:
    """Latest USD rate per symbol. Quotes at or past ``ttl_ms`` are never served.

    Process-wide, never persisted. Concurrent refreshes of the same symbol are
    last-write-wins.
    """

    def __init__(self, ttl_ms: int = 60_000, clock: Callable[[], float] = _wall_clock_ms) -> None:
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._quotes: dict[str, PriceQuote] = {}

    def get(self, symbol: str, now: float | None = None) -> float | None:
        quote = self._quotes.get(symbol.lower())
        if quote is None:
            return None
        if now is None:
            now = self._clock()
        if now - quote.fetched_at >= self._ttl_ms:
            return None
        return quote.rate

    def put(self, symbol: str, rate: float, now: float | None = None) -> None:
        if now is None:
            now = self._clock()
        self._quotes[symbol.lower()] = PriceQuote(rate=rate, fetched_at=now)

    def clear(self) -> None:
        self._quotes.clear()

    def __len__(self) -> int:
        return len(self._quotes)
