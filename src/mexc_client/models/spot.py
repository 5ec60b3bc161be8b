"""
Spot-related models for MEXC client.

Immutable data structures for spot market metadata, accounts and orders.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class OrderSide(Enum):
    """Spot order side."""
    BUY = "BUY"
    SELL = "SELL"


class SpotOrderType(Enum):
    """Spot order type."""
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    LIMIT_MAKER = "LIMIT_MAKER"
    IMMEDIATE_OR_CANCEL = "IMMEDIATE_OR_CANCEL"
    FILL_OR_KILL = "FILL_OR_KILL"


@dataclass(frozen=True)
class SymbolInfo:
    """Spot symbol metadata."""
    symbol: str
    status: str
    base_asset: str
    quote_asset: str
    base_asset_precision: int
    quote_asset_precision: int
    base_size_precision: Decimal
    quote_amount_precision: Decimal
    maker_commission: Decimal
    taker_commission: Decimal
    max_quote_amount: Decimal
    is_spot_trading_allowed: bool
    is_margin_trading_allowed: bool
    order_types: List[str]
    permissions: List[str]
    full_name: Optional[str] = None


@dataclass(frozen=True)
class ExchangeInfo:
    """Exchange metadata snapshot."""
    timestamp: int
    symbols: List[SymbolInfo]


@dataclass(frozen=True)
class Level:
    """Single price level of an order book."""
    px: Decimal
    sz: Decimal


@dataclass(frozen=True)
class Orderbook:
    """Order book depth snapshot."""
    timestamp: int
    bids: List[Level]
    asks: List[Level]

    @property
    def best_bid(self) -> Optional[Level]:
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> Optional[Level]:
        return self.asks[0] if self.asks else None


@dataclass(frozen=True)
class AccountBalance:
    """Spot balance for a single asset."""
    asset: str
    free: Decimal
    locked: Decimal


@dataclass(frozen=True)
class Account:
    """Spot account information."""
    account_type: str
    can_trade: bool
    can_deposit: bool
    can_withdraw: bool
    permissions: List[str]
    balances: List[AccountBalance]

    def balance(self, asset: str) -> Optional[AccountBalance]:
        """Return the balance entry for ``asset``, if present."""
        for entry in self.balances:
            if entry.asset == asset:
                return entry
        return None


@dataclass(frozen=True)
class SpotOrder:
    """Entry of a batch order request."""
    symbol: str
    side: OrderSide
    order_type: SpotOrderType
    price: Decimal
    quantity: Decimal


@dataclass(frozen=True)
class SpotOrderReceipt:
    """Acknowledgement of a placed spot order."""
    symbol: str
    order_id: str
    order_list_id: int
    price: Decimal
    orig_qty: Decimal
    order_type: SpotOrderType
    side: OrderSide
    transact_time: int


@dataclass(frozen=True)
class CancelledOrder:
    """Spot order removed from the book."""
    symbol: str
    order_id: str
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    cummulative_quote_qty: Decimal
    order_type: SpotOrderType
    side: OrderSide
