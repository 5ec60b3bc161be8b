"""
MEXC spot client.

Public market data needs no credentials; account and order endpoints are
signed with the query-string scheme and need the API key and secret.
"""

import logging
import time
from decimal import Decimal
from typing import List, Optional

from .api_methods import SpotAPIMethods
from .base_client import BaseClient
from .models.config import ConnectionConfig
from .models.requests import SigningScheme
from .models.spot import (
    Account,
    CancelledOrder,
    ExchangeInfo,
    Orderbook,
    OrderSide,
    SpotOrder,
    SpotOrderReceipt,
    SpotOrderType,
)

logger = logging.getLogger(__name__)


class MexcSpotClient(BaseClient):
    """Client for the MEXC spot REST API."""

    def __init__(self, config: ConnectionConfig):
        super().__init__(config)
        self._api_methods = SpotAPIMethods(self._http_client, self._builder)

    # Market data
    async def ping(self) -> float:
        """Round-trip latency of the ping endpoint, in seconds."""
        start = time.perf_counter()
        await self._execute_with_monitoring(
            self._api_methods.ping, "GET", "/api/v3/ping", SigningScheme.PUBLIC
        )
        return time.perf_counter() - start

    async def get_server_time(self) -> int:
        """Server time in milliseconds."""
        return await self._execute_with_monitoring(
            self._api_methods.get_server_time, "GET", "/api/v3/time", SigningScheme.PUBLIC
        )

    async def get_exchange_info(self) -> ExchangeInfo:
        """Metadata of every listed symbol."""
        return await self._execute_with_monitoring(
            self._api_methods.get_exchange_info, "GET", "/api/v3/exchangeInfo", SigningScheme.PUBLIC
        )

    async def get_symbol_info(self, symbol: str) -> ExchangeInfo:
        """Metadata of a single symbol."""
        return await self._execute_with_monitoring(
            self._api_methods.get_exchange_info,
            "GET",
            "/api/v3/exchangeInfo",
            SigningScheme.PUBLIC,
            symbol,
        )

    async def get_orderbook(self, symbol: str, limit: Optional[int] = None) -> Orderbook:
        """
        Get order book depth.

        Args:
            symbol: Spot symbol (e.g., "BTCUSDT")
            limit: Levels per side; the exchange defaults to 100 and caps at 5000
        """
        return await self._execute_with_monitoring(
            self._api_methods.get_orderbook, "GET", "/api/v3/depth", SigningScheme.PUBLIC,
            symbol, limit,
        )

    # Account
    async def get_account(self, recv_window: Optional[int] = None) -> Account:
        """Get spot account information and balances."""
        self._signer.ensure(SigningScheme.QUERY)
        return await self._execute_with_monitoring(
            self._api_methods.get_account, "GET", "/api/v3/account", SigningScheme.QUERY,
            recv_window,
        )

    # Orders
    async def submit_order(
        self,
        symbol: str,
        side: OrderSide,
        order_type: SpotOrderType,
        quantity: Decimal,
        price: Optional[Decimal] = None,
        recv_window: Optional[int] = None,
    ) -> SpotOrderReceipt:
        """Place a spot order."""
        self._signer.ensure(SigningScheme.QUERY)
        return await self._execute_with_monitoring(
            self._api_methods.submit_order, "POST", "/api/v3/order", SigningScheme.QUERY,
            symbol, side, order_type, quantity, price, recv_window,
        )

    async def batch_orders(
        self,
        orders: List[SpotOrder],
        recv_window: Optional[int] = None,
    ) -> List[SpotOrderReceipt]:
        """Place several orders in one signed request."""
        self._signer.ensure(SigningScheme.QUERY)
        return await self._execute_with_monitoring(
            self._api_methods.batch_orders, "POST", "/api/v3/batchOrders", SigningScheme.QUERY,
            orders, recv_window,
        )

    async def cancel_order(
        self,
        symbol: str,
        order_id: str,
        recv_window: Optional[int] = None,
    ) -> CancelledOrder:
        self._signer.ensure(SigningScheme.QUERY)
        return await self._execute_with_monitoring(
            self._api_methods.cancel_order, "DELETE", "/api/v3/order", SigningScheme.QUERY,
            symbol, order_id, recv_window,
        )

    async def cancel_all_orders(
        self,
        symbol: str,
        recv_window: Optional[int] = None,
    ) -> List[CancelledOrder]:
        """Cancel every open order on ``symbol``."""
        self._signer.ensure(SigningScheme.QUERY)
        return await self._execute_with_monitoring(
            self._api_methods.cancel_all_orders, "DELETE", "/api/v3/openOrders", SigningScheme.QUERY,
            symbol, recv_window,
        )
