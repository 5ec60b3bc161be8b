"""
Request construction for MEXC endpoints.

Maps every logical operation to a SignedRequest using the signing scheme of
its endpoint family. The binding is static:

- spot account and trading endpoints: SigningScheme.QUERY
- private futures REST endpoints: SigningScheme.HEADER
- futures order creation: SigningScheme.WEB_ORDER
- futures websocket login: SigningScheme.WS_LOGIN
- ping, server time, metadata, depth, index price: SigningScheme.PUBLIC

Every builder accepts an explicit ``timestamp`` (milliseconds); when omitted
the current time is used. Requests are built fresh per call.
"""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from .auth import MexcSigner, canonical_json, ping_statement
from .models.config import ConnectionConfig
from .models.orders import OrderInstruction
from .models.requests import SignedRequest, SigningScheme
from .models.spot import OrderSide, SpotOrder, SpotOrderType
from .utils import format_decimal, get_timestamp


class RequestBuilder:
    """Builds signed requests for spot and futures endpoints."""

    def __init__(self, config: ConnectionConfig, signer: MexcSigner):
        """Initialize request builder with configuration and signer."""
        self._config = config
        self.signer = signer

    # Spot public endpoints
    def spot_ping(self) -> SignedRequest:
        return self._public("GET", f"{self._config.spot_base_url}/api/v3/ping")

    def spot_server_time(self) -> SignedRequest:
        return self._public("GET", f"{self._config.spot_base_url}/api/v3/time")

    def spot_exchange_info(self, symbol: Optional[str] = None) -> SignedRequest:
        url = f"{self._config.spot_base_url}/api/v3/exchangeInfo"
        if symbol is not None:
            url = f"{url}?symbol={quote(symbol)}"
        return self._public("GET", url)

    def spot_depth(self, symbol: str, limit: Optional[int] = None) -> SignedRequest:
        query = f"symbol={quote(symbol)}"
        if limit is not None:
            query = f"{query}&limit={limit}"
        return self._public("GET", f"{self._config.spot_base_url}/api/v3/depth?{query}")

    # Spot signed endpoints
    def spot_account(
        self,
        recv_window: Optional[int] = None,
        timestamp: Optional[int] = None,
    ) -> SignedRequest:
        return self._spot_signed("GET", "/api/v3/account", [], recv_window, timestamp)

    def spot_new_order(
        self,
        symbol: str,
        side: OrderSide,
        order_type: SpotOrderType,
        quantity,
        price=None,
        recv_window: Optional[int] = None,
        timestamp: Optional[int] = None,
    ) -> SignedRequest:
        params = [
            ("symbol", symbol),
            ("side", side.value),
            ("type", order_type.value),
            ("quantity", format_decimal(quantity)),
        ]
        if price is not None:
            params.append(("price", format_decimal(price)))
        return self._spot_signed("POST", "/api/v3/order", params, recv_window, timestamp)

    def spot_batch_orders(
        self,
        orders: List[SpotOrder],
        recv_window: Optional[int] = None,
        timestamp: Optional[int] = None,
    ) -> SignedRequest:
        if not orders:
            raise ValueError("No orders in batch")

        batch = [
            {
                "symbol": order.symbol,
                "price": format_decimal(order.price),
                "quantity": format_decimal(order.quantity),
                "side": order.side.value,
                "type": order.order_type.value,
            }
            for order in orders
        ]
        # Entry keys keep insertion order; the encoded form is what gets signed
        encoded = urlencode({"batchOrders": _compact_json(batch)})
        return self._spot_signed(
            "POST", "/api/v3/batchOrders", [encoded], recv_window, timestamp
        )

    def spot_cancel_order(
        self,
        symbol: str,
        order_id: str,
        recv_window: Optional[int] = None,
        timestamp: Optional[int] = None,
    ) -> SignedRequest:
        params = [("symbol", symbol), ("orderId", order_id)]
        return self._spot_signed("DELETE", "/api/v3/order", params, recv_window, timestamp)

    def spot_cancel_all_orders(
        self,
        symbol: str,
        recv_window: Optional[int] = None,
        timestamp: Optional[int] = None,
    ) -> SignedRequest:
        params = [("symbol", symbol)]
        return self._spot_signed("DELETE", "/api/v3/openOrders", params, recv_window, timestamp)

    # Futures public endpoints
    def futures_ping(self) -> SignedRequest:
        return self._public("GET", f"{self._config.futures_base_url}/api/v1/contract/ping")

    def futures_index_price(self, symbol: str) -> SignedRequest:
        return self._public(
            "GET",
            f"{self._config.futures_base_url}/api/v1/contract/index_price/{quote(symbol)}",
        )

    def futures_contract_detail(self, symbol: str) -> SignedRequest:
        return self._public(
            "GET",
            f"{self._config.futures_base_url}/api/v1/contract/detail?symbol={quote(symbol)}",
        )

    # Futures signed endpoints
    def futures_assets(self, timestamp: Optional[int] = None) -> SignedRequest:
        return self._futures_signed("/api/v1/private/account/assets", timestamp)

    def futures_asset(self, currency: str, timestamp: Optional[int] = None) -> SignedRequest:
        return self._futures_signed(f"/api/v1/private/account/asset/{quote(currency)}", timestamp)

    def futures_open_positions(self, timestamp: Optional[int] = None) -> SignedRequest:
        return self._futures_signed("/api/v1/private/position/open_positions", timestamp)

    def futures_query_order(self, order_id: str, timestamp: Optional[int] = None) -> SignedRequest:
        return self._futures_signed(f"/api/v1/private/order/get/{quote(order_id)}", timestamp)

    def futures_create_order(
        self,
        instruction: OrderInstruction,
        timestamp: Optional[int] = None,
    ) -> SignedRequest:
        """Order creation through the web endpoint (session token authenticated)."""
        timestamp = get_timestamp() if timestamp is None else timestamp
        body = canonical_json(order_body(instruction))
        headers = self.signer.web_order_headers(timestamp, body)

        return SignedRequest(
            method="POST",
            url=f"{self._config.web_base_url}/api/v1/private/order/create",
            scheme=SigningScheme.WEB_ORDER,
            headers=headers,
            body=body,
            signature=headers["x-mxc-sign"],
        )

    # Futures websocket control statements
    def ws_login(self, timestamp: Optional[int] = None) -> str:
        timestamp = get_timestamp() if timestamp is None else timestamp
        return self.signer.login_statement(timestamp)

    def ws_ping(self) -> str:
        return ping_statement()

    def _public(self, method: str, url: str) -> SignedRequest:
        return SignedRequest(method=method, url=url, scheme=SigningScheme.PUBLIC)

    def _spot_signed(
        self,
        method: str,
        path: str,
        params: List[Any],
        recv_window: Optional[int],
        timestamp: Optional[int],
    ) -> SignedRequest:
        """Assemble, in order: params, recvWindow, timestamp; then sign."""
        recv_window = self._config.recv_window if recv_window is None else recv_window
        timestamp = get_timestamp() if timestamp is None else timestamp

        parts = [p if isinstance(p, str) else f"{p[0]}={quote(str(p[1]), safe='')}" for p in params]
        parts.append(f"recvWindow={recv_window}")
        parts.append(f"timestamp={timestamp}")
        query = "&".join(parts)

        signed_query = self.signer.sign_query(query)
        return SignedRequest(
            method=method,
            url=f"{self._config.spot_base_url}{path}?{signed_query}",
            scheme=SigningScheme.QUERY,
            headers=dict(self.signer.spot_key_header()),
            signature=signed_query.rsplit("=", 1)[1],
        )

    def _futures_signed(
        self,
        path: str,
        timestamp: Optional[int],
        sign_params: Optional[str] = None,
    ) -> SignedRequest:
        timestamp = get_timestamp() if timestamp is None else timestamp
        headers = self.signer.futures_headers(timestamp, sign_params)

        return SignedRequest(
            method="GET",
            url=f"{self._config.futures_base_url}{path}",
            scheme=SigningScheme.HEADER,
            headers=headers,
            signature=headers["Signature"],
        )


def order_body(instruction: OrderInstruction) -> Dict[str, Any]:
    """JSON body of the web order-creation endpoint."""
    body: Dict[str, Any] = {
        "symbol": instruction.symbol,
        "side": int(instruction.direction),
        "openType": int(instruction.open_type),
        "type": int(instruction.order_type),
        "vol": instruction.volume,
        "leverage": instruction.leverage,
        "marketCeiling": False,
        "priceProtect": "0",
        "reduceOnly": False,
    }
    if instruction.price is not None:
        body["price"] = format_decimal(instruction.price)
    return body


def _compact_json(payload: Any) -> str:
    return json.dumps(payload, separators=(",", ":"))
