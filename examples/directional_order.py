#!/usr/bin/env python3
"""
Example: Move a futures bucket towards a direction.

Closes any opposite position in the (symbol, leverage, margin mode) bucket
up to the requested volume, then opens the remainder. The close is
acknowledged before the open is sent.

Prerequisites:
- Set MEXC_API_KEY, MEXC_API_SECRET and MEXC_WEB_TOKEN (environment or .env file)
- pip install -e .

Usage:
    python examples/directional_order.py ETH_USDT long 0.1 20
"""

import argparse
import asyncio
import logging

from mexc_client import (
    DirectionalTarget,
    MexcFuturesClient,
    OpenType,
    PositionType,
)
from mexc_client.utils import contract_units

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main(symbol: str, direction: PositionType, quantity: str, leverage: int):
    async with MexcFuturesClient.from_env() as client:
        contract = await client.get_contract_details(symbol)
        volume = contract_units(quantity, contract.contract_size)
        logger.info(f"{quantity} {contract.base_coin} = {volume} contracts of {symbol}")

        target = DirectionalTarget(
            symbol=symbol,
            volume=volume,
            leverage=leverage,
            open_type=OpenType.CROSS,
            direction=direction,
        )
        result = await client.submit_directional_orders(target)

        for receipt in result.receipts:
            logger.info(f"Order {receipt.order_id} accepted at {receipt.timestamp}")
        if not result.success:
            logger.error(f"Stopped at {result.failed_instruction}: {result.error}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("symbol")
    parser.add_argument("direction", choices=["long", "short"])
    parser.add_argument("quantity", help="Base asset quantity")
    parser.add_argument("leverage", type=int)
    args = parser.parse_args()

    asyncio.run(
        main(args.symbol, PositionType[args.direction.upper()], args.quantity, args.leverage)
    )
