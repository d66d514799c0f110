"""CoinGecko rate fetcher — current USD quote per wallet currency, cached in-process."""

import logging
import math

import httpx

from staketracker.infra.http.rate_limited_client import RateLimitedClient
from staketracker.infra.price.cache import PriceCache

logger = logging.getLogger(__name__)

# Wallet currency code (lowercase) → CoinGecko ID
SYMBOL_TO_COINGECKO: dict[str, str] = {
    "ltc": "litecoin",
    "btc": "bitcoin",
    "eth": "ethereum",
    "doge": "dogecoin",
    "bch": "bitcoin-cash",
    "xrp": "ripple",
    "usdt": "tether",
    "usdc": "usd-coin",
    "trx": "tron",
    "sol": "solana",
    "bnb": "binancecoin",
    "ada": "cardano",
    "matic": "matic-network",
}

BASE_URL = "https://api.coingecko.com"


class CoinGeckoRateFetcher:
    """Fetch the current USD rate for a currency code.

    Every failure mode (unknown symbol, transport error, non-200, bad body)
    comes back as ``None``. One outbound attempt per cache miss, no retries.
    """

    def __init__(
        self,
        http_client: RateLimitedClient,
        cache: PriceCache,
        api_key: str = "",
        base_url: str = BASE_URL,
    ) -> None:
        self._http = http_client
        self._cache = cache
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    @staticmethod
    def supports(symbol: str | None) -> bool:
        return bool(symbol) and symbol.lower() in SYMBOL_TO_COINGECKO

    async def fetch_usd_rate(self, symbol: str | None) -> float | None:
        if not self.supports(symbol):
            return None
        symbol = symbol.lower()

        cached = self._cache.get(symbol)
        if cached is not None:
            return cached

        coingecko_id = SYMBOL_TO_COINGECKO[symbol]
        params: dict[str, str] = {"ids": coingecko_id, "vs_currencies": "usd"}
        if self._api_key:
            params["x_cg_demo_api_key"] = self._api_key

        url = f"{self._base_url}/api/v3/simple/price"
        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("CoinGecko request failed for %s: %s", symbol, exc)
            return None

        if response.status_code != 200:
            logger.warning("CoinGecko returned %d for %s", response.status_code, symbol)
            return None

        try:
            data = response.json()
        except ValueError:
            logger.warning("CoinGecko returned non-JSON body for %s", symbol)
            return None

        rate = _extract_usd(data, coingecko_id)
        if rate is None:
            logger.warning("CoinGecko response for %s has no usable usd field", symbol)
            return None

        self._cache.put(symbol, rate)
        logger.debug("Refreshed %s rate: %s USD", symbol, rate)
        return rate


def _extract_usd(data: object, coingecko_id: str) -> float | None:
    if not isinstance(data, dict):
        return None
    entry = data.get(coingecko_id)
    if not isinstance(entry, dict):
        return None
    value = entry.get("usd")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    rate = float(value)
    if not math.isfinite(rate) or rate <= 0:
        return None
    return rate
