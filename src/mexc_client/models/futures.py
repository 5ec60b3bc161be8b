"""
Futures-related models for MEXC client.

Immutable data structures for contract positions, balances and orders.
Enum values are the numeric codes used on the wire.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Any, NamedTuple, Optional


class PositionType(IntEnum):
    """Direction of a futures position."""
    LONG = 1
    SHORT = 2

    def inverse(self) -> "PositionType":
        """Return the opposite direction."""
        return PositionType.SHORT if self is PositionType.LONG else PositionType.LONG

    def __str__(self) -> str:
        return self.name.capitalize()


class OrderDirection(IntEnum):
    """Order side; closing sides net against an existing position."""
    OPEN_LONG = 1
    CLOSE_SHORT = 2
    OPEN_SHORT = 3
    CLOSE_LONG = 4

    @property
    def is_close(self) -> bool:
        return self in (OrderDirection.CLOSE_SHORT, OrderDirection.CLOSE_LONG)

    @property
    def position_type(self) -> PositionType:
        """Direction the order pushes the book towards."""
        if self in (OrderDirection.OPEN_LONG, OrderDirection.CLOSE_SHORT):
            return PositionType.LONG
        return PositionType.SHORT

    @classmethod
    def opening(cls, direction: PositionType) -> "OrderDirection":
        """Side that opens a new position in ``direction``."""
        return cls.OPEN_LONG if direction is PositionType.LONG else cls.OPEN_SHORT

    @classmethod
    def closing(cls, existing: PositionType) -> "OrderDirection":
        """Side that closes an existing position held in ``existing``."""
        return cls.CLOSE_LONG if existing is PositionType.LONG else cls.CLOSE_SHORT


class OpenType(IntEnum):
    """Margin mode."""
    ISOLATED = 1
    CROSS = 2


class FuturesOrderType(IntEnum):
    """Futures order type codes."""
    LIMIT = 1
    POST_ONLY = 2
    IMMEDIATE_OR_CANCEL = 3
    FILL_OR_KILL = 4
    MARKET = 5
    MARKET_TO_LIMIT = 6


class PositionBucket(NamedTuple):
    """Identity of a position: the exchange tracks each tuple independently."""
    symbol: str
    leverage: int
    open_type: OpenType


@dataclass(frozen=True)
class FuturesResponse:
    """Envelope shared by every futures REST response."""
    success: bool
    code: int
    data: Optional[Any] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class FuturesPosition:
    """Open position snapshot."""
    position_id: int
    symbol: str
    position_type: PositionType
    open_type: OpenType
    leverage: int
    hold_vol: int  # contract units
    hold_avg_price: Decimal
    open_avg_price: Decimal
    liquidate_price: Decimal
    frozen_vol: Decimal
    close_vol: Decimal
    im: Decimal
    oim: Decimal
    realised: Decimal
    margin_ratio: Decimal
    state: int
    create_time: int
    update_time: int

    @property
    def bucket(self) -> PositionBucket:
        return PositionBucket(self.symbol, self.leverage, self.open_type)


@dataclass(frozen=True)
class FuturesBalance:
    """Futures account asset balance."""
    currency: str
    position_margin: Decimal
    available_balance: Decimal
    cash_balance: Decimal
    frozen_balance: Decimal
    equity: Decimal
    unrealized: Decimal
    bonus: Decimal


@dataclass(frozen=True)
class ContractInfo:
    """Contract specification."""
    symbol: str
    display_name_en: str
    base_coin: str
    quote_coin: str
    settle_coin: str
    contract_size: Decimal  # base asset per contract unit
    min_leverage: int
    max_leverage: int
    price_scale: int
    vol_scale: int
    price_unit: Decimal
    vol_unit: Decimal
    min_vol: Decimal
    max_vol: Decimal
    taker_fee_rate: Decimal
    maker_fee_rate: Decimal
    initial_margin_rate: Decimal
    maintenance_margin_rate: Decimal
    state: int
    api_allowed: bool


@dataclass(frozen=True)
class FuturesOrder:
    """Order details returned by the order query endpoint."""
    order_id: str
    symbol: str
    side: OrderDirection
    order_type: FuturesOrderType
    open_type: OpenType
    price: Decimal
    vol: int
    leverage: int
    deal_avg_price: Decimal
    deal_vol: int
    order_margin: Decimal
    taker_fee: Decimal
    maker_fee: Decimal
    profit: Decimal
    fee_currency: str
    state: int
    category: int
    external_oid: str
    error_code: int
    position_id: int
    create_time: int
    update_time: int
