"""Post demo cashouts to a running StakeTracker API.

Usage:
    PYTHONPATH=src python scripts/seed_cashouts.py [base_url]

Idempotent: cashout ids are fixed, so re-running refreshes the same rows.
Sends both accepted payload shapes, then prints the resulting summary and
leaderboard.
"""

import asyncio
import logging
import sys

import httpx

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("seed_cashouts")
logging.getLogger("httpx").setLevel(logging.WARNING)

DEFAULT_BASE_URL = "http://localhost:8000"

NESTED = [
    {
        "minesCashout": {
            "id": "demo-cashout-1",
            "game": "Mines",
            "currency": "LTC",
            "amount": 0.5,
            "payout": 1.25,
            "amountMultiplier": 1,
            "payoutMultiplier": 2.5,
            "updatedAt": "Mon, 19 Oct 2026 10:00:00 GMT",
        },
        "user": {"id": "demo-user-1", "name": "demo_alpha"},
    },
    {
        "minesCashout": {
            "id": "demo-cashout-2",
            "game": "mines",
            "currency": "btc",
            "amount": 0.001,
            "payout": 0.024,
            "amountMultiplier": 1,
            "payoutMultiplier": 24,
            "amountUSD": 67.1,
            "payoutUSD": 1610.4,
        },
        "user": {"id": "demo-user-1", "name": "demo_alpha"},
    },
]

FLAT = [
    {
        "id": "demo-cashout-3",
        "accountId": "demo-user-2",
        "accountName": "demo_beta",
        "game": "mines",
        "currency": "doge",
        "amount": 100,
        "payout": 730,
        "amountMultiplier": 1,
        "payoutMultiplier": 7.3,
    },
]


async def main() -> None:
    from staketracker.config import settings

    base_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_BASE_URL
    headers = {"Authorization": f"Bearer {settings.api_key}"}

    async with httpx.AsyncClient(base_url=base_url, headers=headers, timeout=30.0) as client:
        for body in NESTED:
            res = await client.post("/api/cashouts", json=body)
            res.raise_for_status()
            logger.info("nested %s -> %s", body["minesCashout"]["id"], res.json())
        for body in FLAT:
            res = await client.post("/api/ingest", json=body)
            res.raise_for_status()
            logger.info("flat %s -> %s", body["id"], res.json())

        summary = await client.get("/api/accounts/demo-user-1/summary")
        logger.info("summary demo-user-1: %s", summary.json()["totals"])

        board = await client.get("/api/leaderboard", params={"size": 5})
        for row in board.json()["rows"]:
            logger.info("  x%-8s %-12s %s", row["payoutMultiplier"], row["accountName"], row["payout"])


if __name__ == "__main__":
    asyncio.run(main())
