# -*- coding: utf-8 -*-
"""
Tests for OrderSubmitter.
"""

import asyncio

import aiohttp
import pytest

from mexc_client.http_client import ExchangeApiError
from mexc_client.models import (
    OpenType,
    OrderDirection,
    OrderInstruction,
    OrderReceipt,
)
from mexc_client.submitter import OrderSubmitter, group_by_bucket


def instruction(direction: OrderDirection, volume: int, symbol: str = "ETH_USDT") -> OrderInstruction:
    return OrderInstruction(
        symbol=symbol,
        direction=direction,
        volume=volume,
        leverage=20,
        open_type=OpenType.CROSS,
    )


class RecordingExchange:
    """Fake order endpoint recording call order and in-flight overlap."""

    def __init__(self, failures=None, delays=None):
        self.events = []
        self.failures = failures or {}
        self.delays = delays or {}
        self._next_id = 0

    async def submit(self, order: OrderInstruction) -> OrderReceipt:
        key = (order.symbol, order.direction)
        self.events.append(("start", key))
        await asyncio.sleep(self.delays.get(key, 0))
        self.events.append(("end", key))
        if key in self.failures:
            raise self.failures[key]
        self._next_id += 1
        return OrderReceipt(order_id=f"{order.symbol}-{order.direction.name}", timestamp=self._next_id)


class TestSubmit:
    """Test ordering and result assembly."""

    @pytest.mark.asyncio
    async def test_empty_list(self):
        exchange = RecordingExchange()
        result = await OrderSubmitter(exchange.submit).submit([])
        assert result.success
        assert result.receipts == ()
        assert exchange.events == []

    @pytest.mark.asyncio
    async def test_close_completes_before_open(self):
        exchange = RecordingExchange(delays={("ETH_USDT", OrderDirection.CLOSE_SHORT): 0.01})
        plan = [instruction(OrderDirection.CLOSE_SHORT, 50), instruction(OrderDirection.OPEN_LONG, 50)]

        result = await OrderSubmitter(exchange.submit).submit(plan)

        assert exchange.events == [
            ("start", ("ETH_USDT", OrderDirection.CLOSE_SHORT)),
            ("end", ("ETH_USDT", OrderDirection.CLOSE_SHORT)),
            ("start", ("ETH_USDT", OrderDirection.OPEN_LONG)),
            ("end", ("ETH_USDT", OrderDirection.OPEN_LONG)),
        ]
        assert [r.order_id for r in result.receipts] == ["ETH_USDT-CLOSE_SHORT", "ETH_USDT-OPEN_LONG"]
        assert result.success

    @pytest.mark.asyncio
    async def test_buckets_run_concurrently(self):
        exchange = RecordingExchange(
            delays={
                ("ETH_USDT", OrderDirection.OPEN_LONG): 0.02,
                ("BTC_USDT", OrderDirection.OPEN_SHORT): 0.02,
            }
        )
        plan = [
            instruction(OrderDirection.OPEN_LONG, 1, "ETH_USDT"),
            instruction(OrderDirection.OPEN_SHORT, 1, "BTC_USDT"),
        ]

        result = await OrderSubmitter(exchange.submit).submit(plan)

        # Both started before either finished
        assert [kind for kind, _ in exchange.events[:2]] == ["start", "start"]
        assert [r.order_id for r in result.receipts] == ["ETH_USDT-OPEN_LONG", "BTC_USDT-OPEN_SHORT"]

    @pytest.mark.asyncio
    async def test_failed_close_skips_open(self):
        error = ExchangeApiError("insufficient balance", code=2005)
        exchange = RecordingExchange(failures={("ETH_USDT", OrderDirection.CLOSE_SHORT): error})
        plan = [instruction(OrderDirection.CLOSE_SHORT, 50), instruction(OrderDirection.OPEN_LONG, 50)]

        result = await OrderSubmitter(exchange.submit).submit(plan)

        assert not result.success
        assert result.error is error
        assert result.failed_instruction == plan[0]
        assert result.receipts == ()
        assert ("start", ("ETH_USDT", OrderDirection.OPEN_LONG)) not in exchange.events

    @pytest.mark.asyncio
    async def test_failed_open_keeps_close_receipt(self):
        error = aiohttp.ClientConnectionError("reset")
        exchange = RecordingExchange(failures={("ETH_USDT", OrderDirection.OPEN_LONG): error})
        plan = [instruction(OrderDirection.CLOSE_SHORT, 50), instruction(OrderDirection.OPEN_LONG, 50)]

        result = await OrderSubmitter(exchange.submit).submit(plan)

        assert [r.order_id for r in result.receipts] == ["ETH_USDT-CLOSE_SHORT"]
        assert result.error is error
        assert result.failed_instruction == plan[1]
        with pytest.raises(aiohttp.ClientConnectionError):
            result.raise_for_error()

    @pytest.mark.asyncio
    async def test_failure_in_one_bucket_does_not_stop_others(self):
        error = asyncio.TimeoutError()
        exchange = RecordingExchange(failures={("ETH_USDT", OrderDirection.OPEN_LONG): error})
        plan = [
            instruction(OrderDirection.OPEN_LONG, 1, "ETH_USDT"),
            instruction(OrderDirection.OPEN_SHORT, 1, "BTC_USDT"),
        ]

        result = await OrderSubmitter(exchange.submit).submit(plan)

        assert [r.order_id for r in result.receipts] == ["BTC_USDT-OPEN_SHORT"]
        assert result.failed_instruction == plan[0]

    @pytest.mark.asyncio
    async def test_first_failure_by_instruction_order(self):
        first_error = ExchangeApiError("first")
        second_error = ExchangeApiError("second")
        exchange = RecordingExchange(
            failures={
                ("ETH_USDT", OrderDirection.OPEN_LONG): first_error,
                ("BTC_USDT", OrderDirection.OPEN_SHORT): second_error,
            },
            delays={("ETH_USDT", OrderDirection.OPEN_LONG): 0.02},
        )
        plan = [
            instruction(OrderDirection.OPEN_LONG, 1, "ETH_USDT"),
            instruction(OrderDirection.OPEN_SHORT, 1, "BTC_USDT"),
        ]

        result = await OrderSubmitter(exchange.submit).submit(plan)

        assert result.error is first_error

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        async def broken(order):
            raise KeyError("bug")

        plan = [
            instruction(OrderDirection.OPEN_LONG, 1, "ETH_USDT"),
            instruction(OrderDirection.OPEN_SHORT, 1, "BTC_USDT"),
        ]
        with pytest.raises(ExceptionGroup):
            await OrderSubmitter(broken).submit(plan)


    @pytest.mark.asyncio
    async def test_invalid_symbol_rejected_before_any_submission(self):
        exchange = RecordingExchange(delays={("ETH_USDT", OrderDirection.OPEN_LONG): 0.01})

        with pytest.raises(ValueError, match="Invalid symbol"):
            plan = [
                instruction(OrderDirection.OPEN_LONG, 1, "ETH_USDT"),
                instruction(OrderDirection.OPEN_SHORT, 1, "BTC-USDT"),
            ]
            await OrderSubmitter(exchange.submit).submit(plan)

        assert exchange.events == []

class TestGroupByBucket:
    """Test bucket grouping."""

    def test_first_appearance_order(self):
        plan = [
            instruction(OrderDirection.CLOSE_SHORT, 1, "ETH_USDT"),
            instruction(OrderDirection.OPEN_LONG, 1, "BTC_USDT"),
            instruction(OrderDirection.OPEN_LONG, 1, "ETH_USDT"),
        ]
        groups = group_by_bucket(plan)
        assert list(groups.values()) == [[0, 2], [1]]
