"""
Request models for MEXC client.

A SignedRequest is built fresh for every call and never reused: signatures
are bound to a millisecond timestamp and rejected by the exchange once the
receive window has passed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class SigningScheme(Enum):
    """Authentication scheme attached to an endpoint family."""
    PUBLIC = "public"  # unauthenticated market/metadata endpoints
    QUERY = "query"  # spot: HMAC-SHA256 appended to the query string
    HEADER = "header"  # futures REST: HMAC-SHA256 in ApiKey/Request-Time/Signature headers
    WEB_ORDER = "web_order"  # futures order creation: dual MD5 over the web token
    WS_LOGIN = "ws_login"  # futures websocket login statement


@dataclass(frozen=True)
class SignedRequest:
    """Fully formed HTTP request ready for the transport."""
    method: str
    url: str
    scheme: SigningScheme
    headers: Dict[str, str] = field(default_factory=dict, repr=False)
    body: Optional[str] = None
    signature: Optional[str] = field(default=None, repr=False)

    @property
    def is_signed(self) -> bool:
        """Whether the request carries a signature."""
        return self.scheme is not SigningScheme.PUBLIC
