from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from staketracker.db.session import Base
import staketracker.db.models  # noqa: F401  register all models


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture()
async def session(engine) -> AsyncSession:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        yield sess


class StepClock:
    """Deterministic capture clock: each call is one second after the previous."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


class FakeRates:
    """Rate source stub with a fixed table and a call log."""

    def __init__(self, rates: dict[str, float] | None = None) -> None:
        self.rates = rates or {}
        self.calls: list[str | None] = []

    async def fetch_usd_rate(self, symbol):
        self.calls.append(symbol)
        if symbol is None:
            return None
        return self.rates.get(symbol.lower())


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def rates() -> FakeRates:
    return FakeRates({"ltc": 50.0, "btc": 60000.0})
