"""
Data models for MEXC client.

This package contains all data structures used throughout the MEXC client,
following the state-first principle with immutable data structures.
"""

from .config import ConnectionConfig
from .requests import SigningScheme, SignedRequest
from .futures import (
    PositionType,
    OrderDirection,
    OpenType,
    FuturesOrderType,
    PositionBucket,
    FuturesResponse,
    FuturesPosition,
    FuturesBalance,
    ContractInfo,
    FuturesOrder,
)
from .orders import OrderInstruction, DirectionalTarget, OrderReceipt, SubmissionResult
from .spot import (
    OrderSide,
    SpotOrderType,
    SymbolInfo,
    ExchangeInfo,
    Level,
    Orderbook,
    AccountBalance,
    Account,
    SpotOrder,
    SpotOrderReceipt,
    CancelledOrder,
)

__all__ = [
    # Configuration
    "ConnectionConfig",
    # Requests
    "SigningScheme",
    "SignedRequest",
    # Futures
    "PositionType",
    "OrderDirection",
    "OpenType",
    "FuturesOrderType",
    "PositionBucket",
    "FuturesResponse",
    "FuturesPosition",
    "FuturesBalance",
    "ContractInfo",
    "FuturesOrder",
    # Orders
    "OrderInstruction",
    "DirectionalTarget",
    "OrderReceipt",
    "SubmissionResult",
    # Spot
    "OrderSide",
    "SpotOrderType",
    "SymbolInfo",
    "ExchangeInfo",
    "Level",
    "Orderbook",
    "AccountBalance",
    "Account",
    "SpotOrder",
    "SpotOrderReceipt",
    "CancelledOrder",
]
