# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing MEXC client.
"""

import pytest
from decimal import Decimal
from typing import Any, Dict, List

from mexc_client.auth import ApiCredentials, MexcSigner
from mexc_client.futures_client import MexcFuturesClient
from mexc_client.models import (
    ConnectionConfig,
    FuturesPosition,
    OpenType,
    PositionType,
)
from mexc_client.request_builder import RequestBuilder
from mexc_client.spot_client import MexcSpotClient


TEST_API_KEY = "mx0vglTestApiKey"
TEST_API_SECRET = "mexcTestSecretKey0123456789"
TEST_WEB_TOKEN = "WEB4f1c2e3d"
TEST_TIMESTAMP = 1700000000000


def make_position(
    symbol: str = "ETH_USDT",
    position_type: PositionType = PositionType.LONG,
    hold_vol: int = 50,
    leverage: int = 20,
    open_type: OpenType = OpenType.CROSS,
    position_id: int = 1,
) -> FuturesPosition:
    """Build an open position snapshot with neutral informational fields."""
    return FuturesPosition(
        position_id=position_id,
        symbol=symbol,
        position_type=position_type,
        open_type=open_type,
        leverage=leverage,
        hold_vol=hold_vol,
        hold_avg_price=Decimal("3500"),
        open_avg_price=Decimal("3500"),
        liquidate_price=Decimal("0"),
        frozen_vol=Decimal("0"),
        close_vol=Decimal("0"),
        im=Decimal("10"),
        oim=Decimal("10"),
        realised=Decimal("0"),
        margin_ratio=Decimal("0.01"),
        state=1,
        create_time=TEST_TIMESTAMP,
        update_time=TEST_TIMESTAMP,
    )


@pytest.fixture
def position_factory():
    """Factory for FuturesPosition snapshots."""
    return make_position


# Configuration fixtures
@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Configuration carrying every credential."""
    return ConnectionConfig(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        web_token=TEST_WEB_TOKEN,
    )


@pytest.fixture
def public_config() -> ConnectionConfig:
    """Configuration without credentials."""
    return ConnectionConfig()


@pytest.fixture
def credentials() -> ApiCredentials:
    return ApiCredentials(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        web_token=TEST_WEB_TOKEN,
    )


@pytest.fixture
def signer(credentials) -> MexcSigner:
    return MexcSigner(credentials)


@pytest.fixture
def request_builder(connection_config, signer) -> RequestBuilder:
    return RequestBuilder(connection_config, signer)


# Client fixtures
@pytest.fixture
def futures_client(connection_config) -> MexcFuturesClient:
    return MexcFuturesClient(connection_config)


@pytest.fixture
def spot_client(connection_config) -> MexcSpotClient:
    return MexcSpotClient(connection_config)


# Mock data fixtures
@pytest.fixture
def position_response_data() -> Dict[str, Any]:
    """Single open position as returned by the futures API."""
    return {
        "positionId": 1394650,
        "symbol": "ETH_USDT",
        "positionType": 2,
        "openType": 1,
        "state": 1,
        "holdVol": 25,
        "frozenVol": 0,
        "closeVol": 0,
        "holdAvgPrice": 3650.13,
        "openAvgPrice": 3650.13,
        "closeAvgPrice": 0,
        "liquidatePrice": 3990.4,
        "oim": 9.125325,
        "im": 9.125325,
        "holdFee": 0,
        "realised": -0.0547,
        "leverage": 10,
        "marginRatio": 0.0123,
        "createTime": 1700000000000,
        "updateTime": 1700000001000,
        "autoAddIm": False,
    }


@pytest.fixture
def balance_response_data() -> Dict[str, Any]:
    return {
        "currency": "USDT",
        "positionMargin": 9.1253,
        "availableBalance": 990.87,
        "cashBalance": 990.87,
        "frozenBalance": 0,
        "equity": 1000.0,
        "unrealized": 0.0,
        "bonus": 0,
    }


@pytest.fixture
def contract_response_data() -> Dict[str, Any]:
    return {
        "symbol": "ETH_USDT",
        "displayNameEn": "ETH_USDT PERPETUAL",
        "baseCoin": "ETH",
        "quoteCoin": "USDT",
        "settleCoin": "USDT",
        "contractSize": 0.01,
        "minLeverage": 1,
        "maxLeverage": 200,
        "priceScale": 2,
        "volScale": 0,
        "priceUnit": 0.01,
        "volUnit": 1,
        "minVol": 1,
        "maxVol": 1500000,
        "takerFeeRate": 0.0002,
        "makerFeeRate": 0,
        "initialMarginRate": 0.005,
        "maintenanceMarginRate": 0.003,
        "state": 0,
        "apiAllowed": False,
    }


@pytest.fixture
def futures_order_response_data() -> Dict[str, Any]:
    return {
        "orderId": "575758889245571072",
        "symbol": "ETH_USDT",
        "positionId": 1394650,
        "price": 3650.13,
        "vol": 25,
        "leverage": 10,
        "side": 3,
        "category": 1,
        "orderType": 1,
        "dealAvgPrice": 3650.13,
        "dealVol": 25,
        "orderMargin": 9.125,
        "takerFee": 0.018,
        "makerFee": 0,
        "profit": 0,
        "feeCurrency": "USDT",
        "openType": 1,
        "state": 3,
        "externalOid": "_m_4b6f7a",
        "errorCode": 0,
        "usedMargin": 9.125,
        "createTime": 1700000000000,
        "updateTime": 1700000000100,
    }


@pytest.fixture
def exchange_info_response_data() -> Dict[str, Any]:
    return {
        "timezone": "CST",
        "serverTime": 1700000000000,
        "symbols": [
            {
                "symbol": "BTCUSDT",
                "status": "1",
                "baseAsset": "BTC",
                "baseAssetPrecision": 6,
                "quoteAsset": "USDT",
                "quotePrecision": 2,
                "quoteAssetPrecision": 2,
                "baseCommissionPrecision": 6,
                "quoteCommissionPrecision": 2,
                "orderTypes": ["LIMIT", "MARKET", "LIMIT_MAKER"],
                "isSpotTradingAllowed": True,
                "isMarginTradingAllowed": False,
                "quoteAmountPrecision": "5.000000000000000000",
                "baseSizePrecision": "0.000001",
                "permissions": ["SPOT"],
                "filters": [],
                "maxQuoteAmount": "2000000.000000000000000000",
                "makerCommission": "0",
                "takerCommission": "0.0005",
                "fullName": "Bitcoin",
            }
        ],
    }


@pytest.fixture
def depth_response_data() -> Dict[str, Any]:
    return {
        "lastUpdateId": 3949291,
        "timestamp": 1700000000000,
        "bids": [["36500.01", "0.5"], ["36500.00", "1.25"]],
        "asks": [["36500.02", "0.3"]],
    }


@pytest.fixture
def account_response_data() -> Dict[str, Any]:
    return {
        "accountType": "SPOT",
        "canTrade": True,
        "canDeposit": True,
        "canWithdraw": True,
        "permissions": ["SPOT"],
        "balances": [
            {"asset": "USDT", "free": "1000.5", "locked": "0"},
            {"asset": "BTC", "free": "0.01", "locked": "0.002"},
        ],
        "updateTime": None,
    }


@pytest.fixture
def spot_receipt_response_data() -> Dict[str, Any]:
    return {
        "symbol": "BTCUSDT",
        "orderId": "C02__443776347957968896",
        "orderListId": -1,
        "price": "30000",
        "origQty": "0.001",
        "type": "LIMIT",
        "side": "BUY",
        "transactTime": 1700000000000,
    }


@pytest.fixture
def cancelled_orders_response_data() -> List[Dict[str, Any]]:
    return [
        {
            "symbol": "BTCUSDT",
            "origClientOrderId": "",
            "orderId": "C02__443776347957968896",
            "clientOrderId": "",
            "price": "30000",
            "origQty": "0.001",
            "executedQty": "0",
            "cummulativeQuoteQty": "0",
            "status": "CANCELED",
            "timeInForce": "",
            "type": "LIMIT",
            "side": "BUY",
        }
    ]
