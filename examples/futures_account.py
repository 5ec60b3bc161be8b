#!/usr/bin/env python3
"""
Example: Fetch and display MEXC futures account information.

This example demonstrates how to:
1. Create a futures client from environment variables
2. Fetch asset balances and open positions
3. Display request statistics

Prerequisites:
- Set MEXC_API_KEY and MEXC_API_SECRET (environment or .env file)
- pip install -e .

Usage:
    python examples/futures_account.py
"""

import asyncio
import logging

from mexc_client import MexcFuturesClient

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    async with MexcFuturesClient.from_env() as client:
        latency = await client.ping()
        logger.info(f"Futures API latency: {latency * 1000:.1f} ms")

        for balance in await client.get_futures_account():
            if balance.equity:
                logger.info(
                    f"{balance.currency}: equity {balance.equity}, "
                    f"available {balance.available_balance}"
                )

        positions = await client.get_open_positions()
        if not positions:
            logger.info("No open positions")
        for position in positions:
            logger.info(
                f"{position.symbol} {position.position_type} x{position.leverage} "
                f"{position.open_type.name}: {position.hold_vol} @ {position.hold_avg_price}"
            )

        stats = client.get_statistics()
        logger.info(
            f"{stats.total_requests} requests, avg {stats.avg_duration_ms:.1f} ms"
        )


if __name__ == "__main__":
    asyncio.run(main())
