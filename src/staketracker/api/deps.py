import hmac
from typing import AsyncGenerator, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from staketracker.config import Settings
from staketracker.container import Container
from staketracker.infra.price.coingecko import CoinGeckoRateFetcher
from staketracker.stats.summary import StatsService


@inject
async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_rate_fetcher(
    fetcher: CoinGeckoRateFetcher = Depends(Provide[Container.rate_fetcher]),
) -> CoinGeckoRateFetcher:
    return fetcher


async def require_api_key(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Bearer token must match the configured API key."""
    token = (authorization or "").strip()
    if token[:7].lower() == "bearer ":
        token = token[7:].strip()
    if not token or not hmac.compare_digest(token.encode(), settings.api_key.encode()):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_stats_service(
    db: AsyncSession = Depends(get_db),
    rates: CoinGeckoRateFetcher = Depends(get_rate_fetcher),
    settings: Settings = Depends(get_settings),
) -> StatsService:
    return StatsService(db, rates, default_currency=settings.default_currency)
