"""
Order-related models for MEXC client.

Immutable data structures for futures order submission.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from .futures import (
    FuturesOrderType,
    OpenType,
    OrderDirection,
    PositionBucket,
    PositionType,
)


def validate_symbol(symbol: str) -> bool:
    """Validate symbol format."""
    if not symbol or not isinstance(symbol, str):
        return False
    return len(symbol) <= 30 and symbol.replace("_", "").isalnum()


@dataclass(frozen=True)
class OrderInstruction:
    """A single futures order to submit through the web order endpoint."""
    symbol: str
    direction: OrderDirection
    volume: int  # contract units
    leverage: int
    open_type: OpenType
    order_type: FuturesOrderType = FuturesOrderType.MARKET
    price: Optional[Decimal] = None

    def __post_init__(self):
        """Reject instructions the exchange must never see."""
        if not validate_symbol(self.symbol):
            raise ValueError(f"Invalid symbol: {self.symbol!r}")
        if self.volume <= 0:
            raise ValueError(f"Order volume must be positive, got {self.volume}")
        if self.leverage <= 0:
            raise ValueError(f"Leverage must be positive, got {self.leverage}")
        if self.price is not None and self.price <= 0:
            raise ValueError(f"Price must be positive, got {self.price}")

    @property
    def bucket(self) -> PositionBucket:
        return PositionBucket(self.symbol, self.leverage, self.open_type)


@dataclass(frozen=True)
class DirectionalTarget:
    """
    Request to move exposure in one bucket towards a direction.

    Attributes:
        symbol: Contract symbol (e.g., "ETH_USDT")
        volume: Contract units to trade in ``direction``; an opposite position is
            unwound first and the remainder opened
        leverage: Leverage of the bucket
        open_type: Margin mode of the bucket
        direction: Target direction
        order_type: Order type used for every emitted instruction
        price: Limit price, None for market orders
    """
    symbol: str
    volume: int
    leverage: int
    open_type: OpenType
    direction: PositionType
    order_type: FuturesOrderType = FuturesOrderType.MARKET
    price: Optional[Decimal] = None

    def __post_init__(self):
        if not validate_symbol(self.symbol):
            raise ValueError(f"Invalid symbol: {self.symbol!r}")
        if self.volume < 0:
            raise ValueError(f"Target volume cannot be negative, got {self.volume}")
        if self.leverage <= 0:
            raise ValueError(f"Leverage must be positive, got {self.leverage}")

    @property
    def bucket(self) -> PositionBucket:
        return PositionBucket(self.symbol, self.leverage, self.open_type)


@dataclass(frozen=True)
class OrderReceipt:
    """Exchange acknowledgement of a submitted futures order."""
    order_id: str
    timestamp: int


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of submitting an instruction list.

    Attributes:
        receipts: Receipts of the instructions that were accepted, in instruction order
        error: First failure by instruction order, None if everything was accepted
        failed_instruction: Instruction that raised ``error``
    """
    receipts: Tuple[OrderReceipt, ...] = field(default_factory=tuple)
    error: Optional[BaseException] = None
    failed_instruction: Optional[OrderInstruction] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Re-raise the captured failure, if any."""
        if self.error is not None:
            raise self.error
