from dependency_injector import containers, providers

from staketracker.config import Settings
from staketracker.db.session import build_engine, build_session_factory
from staketracker.infra.http.rate_limited_client import RateLimitedClient
from staketracker.infra.price.cache import PriceCache
from staketracker.infra.price.coingecko import CoinGeckoRateFetcher


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["staketracker.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.price_rate_per_second,
        timeout=settings.provided.price_timeout_seconds,
    )

    price_cache = providers.Singleton(
        PriceCache,
        ttl_ms=settings.provided.price_cache_ttl_ms,
    )

    rate_fetcher = providers.Singleton(
        CoinGeckoRateFetcher,
        http_client=http_client,
        cache=price_cache,
        api_key=settings.provided.coingecko_api_key,
        base_url=settings.provided.coingecko_base_url,
    )
