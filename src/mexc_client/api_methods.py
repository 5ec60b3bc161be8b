"""
API method implementations for MEXC client.

One coroutine per endpoint: build the signed request, execute it and decode
the payload into immutable records. Decoding is done by the pure ``parse_*``
functions of this module, which raise ResponseDecodeError on malformed data.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from aiohttp import ClientSession

from .http_client import HttpClient, ResponseDecodeError
from .models.futures import (
    ContractInfo,
    FuturesBalance,
    FuturesOrder,
    FuturesOrderType,
    FuturesPosition,
    OpenType,
    OrderDirection,
    PositionType,
)
from .models.orders import OrderInstruction, OrderReceipt, validate_symbol
from .models.spot import (
    Account,
    AccountBalance,
    CancelledOrder,
    ExchangeInfo,
    Level,
    Orderbook,
    OrderSide,
    SpotOrder,
    SpotOrderReceipt,
    SpotOrderType,
    SymbolInfo,
)
from .request_builder import RequestBuilder
from .utils import require, to_bool, to_decimal, to_enum, to_int, to_str

logger = logging.getLogger(__name__)


# Futures decoding

def parse_position(data: Dict[str, Any]) -> FuturesPosition:
    """Decode an open position record."""
    return FuturesPosition(
        position_id=to_int(data, "positionId"),
        symbol=to_str(data, "symbol"),
        position_type=to_enum(data, "positionType", PositionType),
        open_type=to_enum(data, "openType", OpenType),
        leverage=to_int(data, "leverage"),
        hold_vol=to_int(data, "holdVol"),
        hold_avg_price=to_decimal(data, "holdAvgPrice"),
        open_avg_price=to_decimal(data, "openAvgPrice"),
        liquidate_price=to_decimal(data, "liquidatePrice"),
        frozen_vol=to_decimal(data, "frozenVol"),
        close_vol=to_decimal(data, "closeVol"),
        im=to_decimal(data, "im"),
        oim=to_decimal(data, "oim"),
        realised=to_decimal(data, "realised"),
        margin_ratio=to_decimal(data, "marginRatio"),
        state=to_int(data, "state"),
        create_time=to_int(data, "createTime"),
        update_time=to_int(data, "updateTime"),
    )


def parse_balance(data: Dict[str, Any]) -> FuturesBalance:
    """Decode a futures asset balance."""
    return FuturesBalance(
        currency=to_str(data, "currency"),
        position_margin=to_decimal(data, "positionMargin"),
        available_balance=to_decimal(data, "availableBalance"),
        cash_balance=to_decimal(data, "cashBalance"),
        frozen_balance=to_decimal(data, "frozenBalance"),
        equity=to_decimal(data, "equity"),
        unrealized=to_decimal(data, "unrealized"),
        bonus=to_decimal(data, "bonus"),
    )


def parse_contract(data: Dict[str, Any]) -> ContractInfo:
    """Decode a contract specification."""
    return ContractInfo(
        symbol=to_str(data, "symbol"),
        display_name_en=to_str(data, "displayNameEn"),
        base_coin=to_str(data, "baseCoin"),
        quote_coin=to_str(data, "quoteCoin"),
        settle_coin=to_str(data, "settleCoin"),
        contract_size=to_decimal(data, "contractSize"),
        min_leverage=to_int(data, "minLeverage"),
        max_leverage=to_int(data, "maxLeverage"),
        price_scale=to_int(data, "priceScale"),
        vol_scale=to_int(data, "volScale"),
        price_unit=to_decimal(data, "priceUnit"),
        vol_unit=to_decimal(data, "volUnit"),
        min_vol=to_decimal(data, "minVol"),
        max_vol=to_decimal(data, "maxVol"),
        taker_fee_rate=to_decimal(data, "takerFeeRate"),
        maker_fee_rate=to_decimal(data, "makerFeeRate"),
        initial_margin_rate=to_decimal(data, "initialMarginRate"),
        maintenance_margin_rate=to_decimal(data, "maintenanceMarginRate"),
        state=to_int(data, "state"),
        api_allowed=to_bool(data, "apiAllowed"),
    )


def parse_futures_order(data: Dict[str, Any]) -> FuturesOrder:
    """Decode an order returned by the order query endpoint."""
    return FuturesOrder(
        order_id=to_str(data, "orderId"),
        symbol=to_str(data, "symbol"),
        side=to_enum(data, "side", OrderDirection),
        order_type=to_enum(data, "orderType", FuturesOrderType),
        open_type=to_enum(data, "openType", OpenType),
        price=to_decimal(data, "price"),
        vol=to_int(data, "vol"),
        leverage=to_int(data, "leverage"),
        deal_avg_price=to_decimal(data, "dealAvgPrice"),
        deal_vol=to_int(data, "dealVol"),
        order_margin=to_decimal(data, "orderMargin"),
        taker_fee=to_decimal(data, "takerFee"),
        maker_fee=to_decimal(data, "makerFee"),
        profit=to_decimal(data, "profit"),
        fee_currency=to_str(data, "feeCurrency"),
        state=to_int(data, "state"),
        category=to_int(data, "category"),
        external_oid=to_str(data, "externalOid"),
        error_code=to_int(data, "errorCode"),
        position_id=to_int(data, "positionId"),
        create_time=to_int(data, "createTime"),
        update_time=to_int(data, "updateTime"),
    )


def parse_receipt(data: Dict[str, Any]) -> OrderReceipt:
    """Decode the acknowledgement of the web order endpoint."""
    return OrderReceipt(order_id=to_str(data, "orderId"), timestamp=to_int(data, "ts"))


def _parse_list(payload: Any, parser) -> list:
    if not isinstance(payload, list):
        raise ResponseDecodeError(f"Expected a list, got {type(payload).__name__}")
    return [parser(item) for item in payload]


# Spot decoding

def parse_symbol_info(data: Dict[str, Any]) -> SymbolInfo:
    return SymbolInfo(
        symbol=to_str(data, "symbol"),
        status=to_str(data, "status"),
        base_asset=to_str(data, "baseAsset"),
        quote_asset=to_str(data, "quoteAsset"),
        base_asset_precision=to_int(data, "baseAssetPrecision"),
        quote_asset_precision=to_int(data, "quoteAssetPrecision"),
        base_size_precision=to_decimal(data, "baseSizePrecision"),
        quote_amount_precision=to_decimal(data, "quoteAmountPrecision"),
        maker_commission=to_decimal(data, "makerCommission"),
        taker_commission=to_decimal(data, "takerCommission"),
        max_quote_amount=to_decimal(data, "maxQuoteAmount"),
        is_spot_trading_allowed=to_bool(data, "isSpotTradingAllowed"),
        is_margin_trading_allowed=to_bool(data, "isMarginTradingAllowed"),
        order_types=list(data.get("orderTypes") or []),
        permissions=list(data.get("permissions") or []),
        full_name=data.get("fullName"),
    )


def parse_exchange_info(data: Dict[str, Any]) -> ExchangeInfo:
    return ExchangeInfo(
        timestamp=to_int(data, "serverTime"),
        symbols=_parse_list(require(data, "symbols"), parse_symbol_info),
    )


def _parse_levels(levels: Any, side: str) -> List[Level]:
    if not isinstance(levels, list):
        raise ResponseDecodeError(f"Expected a list of {side}, got {type(levels).__name__}")
    parsed = []
    for level in levels:
        if not isinstance(level, (list, tuple)) or len(level) < 2:
            raise ResponseDecodeError(f"Malformed {side} level: {level!r}")
        pair = {"px": level[0], "sz": level[1]}
        parsed.append(Level(px=to_decimal(pair, "px"), sz=to_decimal(pair, "sz")))
    return parsed


def parse_orderbook(data: Dict[str, Any]) -> Orderbook:
    """Decode a depth snapshot; levels arrive as ``[price, size]`` string pairs."""
    return Orderbook(
        timestamp=to_int(data, "timestamp"),
        bids=_parse_levels(require(data, "bids"), "bids"),
        asks=_parse_levels(require(data, "asks"), "asks"),
    )


def parse_account_balance(data: Dict[str, Any]) -> AccountBalance:
    return AccountBalance(
        asset=to_str(data, "asset"),
        free=to_decimal(data, "free"),
        locked=to_decimal(data, "locked"),
    )


def parse_account(data: Dict[str, Any]) -> Account:
    return Account(
        account_type=to_str(data, "accountType"),
        can_trade=to_bool(data, "canTrade"),
        can_deposit=to_bool(data, "canDeposit"),
        can_withdraw=to_bool(data, "canWithdraw"),
        permissions=list(data.get("permissions") or []),
        balances=_parse_list(require(data, "balances"), parse_account_balance),
    )


def parse_spot_receipt(data: Dict[str, Any]) -> SpotOrderReceipt:
    return SpotOrderReceipt(
        symbol=to_str(data, "symbol"),
        order_id=to_str(data, "orderId"),
        order_list_id=to_int(data, "orderListId"),
        price=to_decimal(data, "price"),
        orig_qty=to_decimal(data, "origQty"),
        order_type=to_enum(data, "type", SpotOrderType),
        side=to_enum(data, "side", OrderSide),
        transact_time=to_int(data, "transactTime"),
    )


def parse_cancelled_order(data: Dict[str, Any]) -> CancelledOrder:
    return CancelledOrder(
        symbol=to_str(data, "symbol"),
        order_id=to_str(data, "orderId"),
        price=to_decimal(data, "price"),
        orig_qty=to_decimal(data, "origQty"),
        executed_qty=to_decimal(data, "executedQty"),
        cummulative_quote_qty=to_decimal(data, "cummulativeQuoteQty"),
        order_type=to_enum(data, "type", SpotOrderType),
        side=to_enum(data, "side", OrderSide),
    )


class FuturesAPIMethods:
    """Futures endpoint implementations."""

    def __init__(self, http_client: HttpClient, builder: RequestBuilder):
        self._http_client = http_client
        self._builder = builder

    async def ping(self, session: ClientSession) -> None:
        await self._http_client.request(session, self._builder.futures_ping())

    async def get_assets(self, session: ClientSession) -> List[FuturesBalance]:
        """Get all futures account assets."""
        data = await self._http_client.request_envelope(session, self._builder.futures_assets())
        return _parse_list(data, parse_balance)

    async def get_asset(self, session: ClientSession, currency: str) -> FuturesBalance:
        """Get the futures balance of a single currency."""
        data = await self._http_client.request_envelope(
            session, self._builder.futures_asset(currency)
        )
        return parse_balance(data)

    async def get_open_positions(self, session: ClientSession) -> List[FuturesPosition]:
        """Get every open position across all buckets."""
        data = await self._http_client.request_envelope(
            session, self._builder.futures_open_positions()
        )
        return _parse_list(data, parse_position)

    async def get_index_price(self, session: ClientSession, symbol: str) -> Decimal:
        data = await self._http_client.request_envelope(
            session, self._builder.futures_index_price(symbol)
        )
        return to_decimal(data, "indexPrice")

    async def get_contract_detail(self, session: ClientSession, symbol: str) -> ContractInfo:
        data = await self._http_client.request_envelope(
            session, self._builder.futures_contract_detail(symbol)
        )
        return parse_contract(data)

    async def query_order(self, session: ClientSession, order_id: str) -> FuturesOrder:
        data = await self._http_client.request_envelope(
            session, self._builder.futures_query_order(order_id)
        )
        return parse_futures_order(data)

    async def create_order(
        self, session: ClientSession, instruction: OrderInstruction
    ) -> OrderReceipt:
        """Submit one order through the web order endpoint."""
        request = self._builder.futures_create_order(instruction)
        data = await self._http_client.request_envelope(session, request)
        receipt = parse_receipt(data)
        logger.info(
            f"Order {receipt.order_id} accepted: {instruction.direction.name} "
            f"{instruction.volume} {instruction.symbol} x{instruction.leverage}"
        )
        return receipt


class SpotAPIMethods:
    """Spot endpoint implementations."""

    def __init__(self, http_client: HttpClient, builder: RequestBuilder):
        self._http_client = http_client
        self._builder = builder

    async def ping(self, session: ClientSession) -> None:
        await self._http_client.request(session, self._builder.spot_ping())

    async def get_server_time(self, session: ClientSession) -> int:
        """Server time in milliseconds."""
        data = await self._http_client.request(session, self._builder.spot_server_time())
        return to_int(data, "serverTime")

    async def get_exchange_info(
        self, session: ClientSession, symbol: Optional[str] = None
    ) -> ExchangeInfo:
        data = await self._http_client.request(session, self._builder.spot_exchange_info(symbol))
        return parse_exchange_info(data)

    async def get_orderbook(
        self, session: ClientSession, symbol: str, limit: Optional[int] = None
    ) -> Orderbook:
        data = await self._http_client.request(session, self._builder.spot_depth(symbol, limit))
        return parse_orderbook(data)

    async def get_account(
        self, session: ClientSession, recv_window: Optional[int] = None
    ) -> Account:
        data = await self._http_client.request(session, self._builder.spot_account(recv_window))
        return parse_account(data)

    async def submit_order(
        self,
        session: ClientSession,
        symbol: str,
        side: OrderSide,
        order_type: SpotOrderType,
        quantity: Decimal,
        price: Optional[Decimal] = None,
        recv_window: Optional[int] = None,
    ) -> SpotOrderReceipt:
        """Place a spot order."""
        if not validate_symbol(symbol):
            raise ValueError(f"Invalid symbol: {symbol}")

        request = self._builder.spot_new_order(
            symbol, side, order_type, quantity, price, recv_window
        )
        data = await self._http_client.request(session, request)
        receipt = parse_spot_receipt(data)
        logger.info(
            f"Spot order {receipt.order_id} accepted: {side.value} {quantity} {symbol}"
        )
        return receipt

    async def batch_orders(
        self,
        session: ClientSession,
        orders: List[SpotOrder],
        recv_window: Optional[int] = None,
    ) -> List[SpotOrderReceipt]:
        """Place several spot orders in one request."""
        request = self._builder.spot_batch_orders(orders, recv_window)
        data = await self._http_client.request(session, request)
        receipts = _parse_list(data, parse_spot_receipt)
        logger.info(f"Batch of {len(receipts)} spot orders accepted")
        return receipts

    async def cancel_order(
        self,
        session: ClientSession,
        symbol: str,
        order_id: str,
        recv_window: Optional[int] = None,
    ) -> CancelledOrder:
        request = self._builder.spot_cancel_order(symbol, order_id, recv_window)
        data = await self._http_client.request(session, request)
        return parse_cancelled_order(data)

    async def cancel_all_orders(
        self,
        session: ClientSession,
        symbol: str,
        recv_window: Optional[int] = None,
    ) -> List[CancelledOrder]:
        request = self._builder.spot_cancel_all_orders(symbol, recv_window)
        data = await self._http_client.request(session, request)
        return _parse_list(data, parse_cancelled_order)
