"""
MEXC Client - Python client for the MEXC spot and futures APIs.

Provides request signing for every MEXC authentication scheme, typed
spot and futures clients, and directional futures order submission with
position reconciliation.
"""

from .auth import ApiCredentials, MexcSigner, MissingCredentialError
from .futures_client import MexcFuturesClient
from .http_client import ExchangeApiError, HttpClientError, ResponseDecodeError
from .models import (
    # Configuration
    ConnectionConfig,
    # Requests
    SigningScheme,
    SignedRequest,
    # Futures
    PositionType,
    OrderDirection,
    OpenType,
    FuturesOrderType,
    PositionBucket,
    FuturesPosition,
    FuturesBalance,
    ContractInfo,
    FuturesOrder,
    # Orders
    OrderInstruction,
    DirectionalTarget,
    OrderReceipt,
    SubmissionResult,
    # Spot
    OrderSide,
    SpotOrderType,
    ExchangeInfo,
    Orderbook,
    Account,
    SpotOrder,
    SpotOrderReceipt,
    CancelledOrder,
)
from .reconciler import PositionReconciler
from .request_builder import RequestBuilder
from .spot_client import MexcSpotClient
from .submitter import OrderSubmitter

__all__ = [
    # Main Clients
    "MexcSpotClient",
    "MexcFuturesClient",
    # Signing and requests
    "ApiCredentials",
    "MexcSigner",
    "RequestBuilder",
    "SigningScheme",
    "SignedRequest",
    # Order flow
    "PositionReconciler",
    "OrderSubmitter",
    # Errors
    "MissingCredentialError",
    "HttpClientError",
    "ExchangeApiError",
    "ResponseDecodeError",
    # Models
    "ConnectionConfig",
    "PositionType",
    "OrderDirection",
    "OpenType",
    "FuturesOrderType",
    "PositionBucket",
    "FuturesPosition",
    "FuturesBalance",
    "ContractInfo",
    "FuturesOrder",
    "OrderInstruction",
    "DirectionalTarget",
    "OrderReceipt",
    "SubmissionResult",
    "OrderSide",
    "SpotOrderType",
    "ExchangeInfo",
    "Orderbook",
    "Account",
    "SpotOrder",
    "SpotOrderReceipt",
    "CancelledOrder",
]

__version__ = "0.1.0"
