"""
MEXC futures client.

Private REST endpoints are signed with the header scheme (API key and
secret). Order creation goes through the web endpoint and needs the web
user token. Directional submission reads the open positions, reconciles
them against the target and submits the resulting orders close-before-open.
"""

import asyncio
import logging
import time
from decimal import Decimal
from typing import List, Optional, Sequence

from .api_methods import FuturesAPIMethods
from .base_client import BaseClient
from .models.config import ConnectionConfig
from .models.futures import ContractInfo, FuturesBalance, FuturesOrder, FuturesPosition
from .models.orders import DirectionalTarget, OrderInstruction, OrderReceipt, SubmissionResult
from .models.requests import SigningScheme
from .reconciler import PositionReconciler
from .submitter import OrderSubmitter

logger = logging.getLogger(__name__)


class MexcFuturesClient(BaseClient):
    """
    Client for the MEXC futures API.

    Example:
        async with MexcFuturesClient.from_env() as client:
            target = DirectionalTarget("ETH_USDT", 10, 20, OpenType.CROSS, PositionType.LONG)
            result = await client.submit_directional_orders(target)
            result.raise_for_error()
    """

    def __init__(self, config: ConnectionConfig):
        super().__init__(config)
        self._api_methods = FuturesAPIMethods(self._http_client, self._builder)
        self._reconciler = PositionReconciler()
        self._submitter = OrderSubmitter(self.submit_order)

    # Market data
    async def ping(self) -> float:
        """Round-trip latency of the contract ping endpoint, in seconds."""
        start = time.perf_counter()
        await self._execute_with_monitoring(
            self._api_methods.ping, "GET", "/api/v1/contract/ping", SigningScheme.PUBLIC
        )
        return time.perf_counter() - start

    async def get_fair_price(self, symbol: str) -> Decimal:
        """Index price of ``symbol``."""
        return await self._execute_with_monitoring(
            self._api_methods.get_index_price,
            "GET",
            "/api/v1/contract/index_price",
            SigningScheme.PUBLIC,
            symbol,
        )

    async def get_contract_details(self, symbol: str) -> ContractInfo:
        """Contract specification of ``symbol`` (contract size, scales, fees)."""
        return await self._execute_with_monitoring(
            self._api_methods.get_contract_detail,
            "GET",
            "/api/v1/contract/detail",
            SigningScheme.PUBLIC,
            symbol,
        )

    # Account
    async def get_futures_account(self) -> List[FuturesBalance]:
        """Balances of every futures asset."""
        self._signer.ensure(SigningScheme.HEADER)
        return await self._execute_with_monitoring(
            self._api_methods.get_assets,
            "GET",
            "/api/v1/private/account/assets",
            SigningScheme.HEADER,
        )

    async def get_account_asset(self, currency: str) -> FuturesBalance:
        self._signer.ensure(SigningScheme.HEADER)
        return await self._execute_with_monitoring(
            self._api_methods.get_asset,
            "GET",
            "/api/v1/private/account/asset",
            SigningScheme.HEADER,
            currency,
        )

    async def get_open_positions(self) -> List[FuturesPosition]:
        self._signer.ensure(SigningScheme.HEADER)
        return await self._execute_with_monitoring(
            self._api_methods.get_open_positions,
            "GET",
            "/api/v1/private/position/open_positions",
            SigningScheme.HEADER,
        )

    async def query_order(self, order_id: str) -> FuturesOrder:
        self._signer.ensure(SigningScheme.HEADER)
        return await self._execute_with_monitoring(
            self._api_methods.query_order,
            "GET",
            "/api/v1/private/order/get",
            SigningScheme.HEADER,
            order_id,
        )

    # Orders
    async def submit_order(self, instruction: OrderInstruction) -> OrderReceipt:
        """Submit a single order through the web order endpoint."""
        self._signer.ensure(SigningScheme.WEB_ORDER)
        return await self._execute_with_monitoring(
            self._api_methods.create_order,
            "POST",
            "/api/v1/private/order/create",
            SigningScheme.WEB_ORDER,
            instruction,
        )

    async def submit_directional_orders(self, target: DirectionalTarget) -> SubmissionResult:
        """
        Move one bucket towards ``target``.

        Open positions are fetched fresh, an opposite position is closed up to
        the target volume, and any remaining volume is opened in the target
        direction. The close is acknowledged before the open is sent.

        Raises:
            MissingCredentialError: API key/secret or web token not configured
        """
        self._signer.ensure(SigningScheme.HEADER)
        self._signer.ensure(SigningScheme.WEB_ORDER)

        if target.volume == 0:
            return SubmissionResult()

        positions = await self.get_open_positions()
        instructions = self._reconciler.reconcile(positions, target)
        logger.info(
            f"{target.direction} {target.volume} {target.symbol} x{target.leverage}: "
            f"{len(instructions)} order(s) to submit"
        )
        return await self._submitter.submit(instructions)

    async def submit_directional_orders_many(
        self, targets: Sequence[DirectionalTarget]
    ) -> List[SubmissionResult]:
        """
        Reconcile several targets against one position snapshot.

        Targets must address distinct buckets. Each target's orders keep
        close-before-open ordering; targets are submitted concurrently.

        Returns:
            One result per target, in the order given
        """
        buckets = [target.bucket for target in targets]
        if len(set(buckets)) != len(buckets):
            raise ValueError("Targets must address distinct (symbol, leverage, open type) buckets")

        self._signer.ensure(SigningScheme.HEADER)
        self._signer.ensure(SigningScheme.WEB_ORDER)

        if not any(target.volume for target in targets):
            return [SubmissionResult() for _ in targets]

        index = self._reconciler.index_positions(await self.get_open_positions())
        plans = [self._reconciler.reconcile_indexed(index, target) for target in targets]

        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._submitter.submit(plan)) for plan in plans]

        return [task.result() for task in tasks]

    # Websocket control statements
    def create_websocket_login_statement(self, timestamp: Optional[int] = None) -> str:
        """Signed ``login`` message for the futures websocket."""
        return self._builder.ws_login(timestamp)

    def create_websocket_ping_statement(self) -> str:
        return self._builder.ws_ping()
