"""
Authentication and signing utilities for MEXC API.

MEXC uses four incompatible schemes depending on the endpoint family:

- spot REST: HMAC-SHA256 over the query string, appended as ``signature``
- futures REST: HMAC-SHA256 over ``api_key + timestamp [+ params]`` in headers
- futures web order creation: two chained MD5 digests over the web user token
- futures websocket login: the futures REST HMAC without parameters

Each scheme is a pure module-level function; ``MexcSigner`` binds them to a
set of credentials and fails fast when a scheme's credential is missing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple
import hashlib
import hmac
import json

from .constants import (
    PARTIAL_HASH_OFFSET,
    SPOT_API_KEY_HEADER,
    WEB_ORIGIN,
    WEB_REFERER,
    WEB_USER_AGENT,
)
from .models.requests import SigningScheme


class MissingCredentialError(ValueError):
    """Raised when a signing scheme needs a credential that was not configured."""

    def __init__(self, credential: str, scheme: SigningScheme):
        super().__init__(f"Missing {credential} required for {scheme.value} signing")
        self.credential = credential
        self.scheme = scheme


@dataclass(frozen=True)
class ApiCredentials:
    """Container for API credentials"""
    api_key: Optional[str] = None
    api_secret: Optional[str] = field(default=None, repr=False)
    web_token: Optional[str] = field(default=None, repr=False)


# Credentials each scheme needs, by attribute name on ApiCredentials
REQUIRED_CREDENTIALS: Dict[SigningScheme, Tuple[str, ...]] = {
    SigningScheme.PUBLIC: (),
    SigningScheme.QUERY: ("api_key", "api_secret"),
    SigningScheme.HEADER: ("api_key", "api_secret"),
    SigningScheme.WEB_ORDER: ("web_token",),
    SigningScheme.WS_LOGIN: ("api_key", "api_secret"),
}


def hmac_sha256_hex(secret: str, message: str) -> str:
    """Hex-encoded HMAC-SHA256 of ``message`` keyed by ``secret``."""
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256
    ).hexdigest()


def md5_hex(message: str) -> str:
    """Lower-case hex MD5 digest of ``message``."""
    return hashlib.md5(message.encode("utf-8")).hexdigest()


def canonical_json(payload: Any) -> str:
    """Serialize ``payload`` with sorted keys and no whitespace."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def sign_query(api_secret: str, query: str) -> str:
    """
    Sign a spot query string.

    Args:
        api_secret: API secret
        query: ``&``-joined parameters in the order the server will rebuild them

    Returns:
        The input query with ``&signature=<hex>`` appended
    """
    return f"{query}&signature={hmac_sha256_hex(api_secret, query)}"


def sign_v1(
    api_key: str,
    api_secret: str,
    timestamp: int,
    sign_params: Optional[str] = None,
) -> str:
    """HMAC used by futures REST headers and the websocket login statement."""
    payload = f"{api_key}{timestamp}{sign_params or ''}"
    return hmac_sha256_hex(api_secret, payload)


def futures_headers(
    api_key: str,
    api_secret: str,
    timestamp: int,
    sign_params: Optional[str] = None,
) -> Dict[str, str]:
    """Headers for a private futures REST call."""
    return {
        "ApiKey": api_key,
        "Request-Time": str(timestamp),
        "Signature": sign_v1(api_key, api_secret, timestamp, sign_params),
        "Content-Type": "application/json",
    }


def partial_hash(web_token: str, timestamp: int) -> str:
    """Nonce derived from the web token: MD5 hex digest from offset 7 on."""
    return md5_hex(f"{web_token}{timestamp}")[PARTIAL_HASH_OFFSET:]


def sign_web_order(web_token: str, timestamp: int, body: str) -> str:
    """
    Sign a web order-creation body.

    Args:
        web_token: Session token of the logged-in web user
        timestamp: Millisecond timestamp, also sent as the nonce header
        body: Canonical JSON string exactly as it will be sent

    Returns:
        Lower-case hex MD5 of ``timestamp + body + partial_hash``
    """
    return md5_hex(f"{timestamp}{body}{partial_hash(web_token, timestamp)}")


def web_order_headers(web_token: str, timestamp: int, body: str) -> Dict[str, str]:
    """Headers for the web order-creation endpoint."""
    return {
        "x-mxc-nonce": str(timestamp),
        "x-mxc-sign": sign_web_order(web_token, timestamp, body),
        "authorization": web_token,
        "user-agent": WEB_USER_AGENT,
        "content-type": "application/json",
        "origin": WEB_ORIGIN,
        "referer": WEB_REFERER,
    }


def login_statement(api_key: str, api_secret: str, timestamp: int) -> str:
    """Websocket ``login`` control message."""
    return canonical_json({
        "method": "login",
        "param": {
            "apiKey": api_key,
            "reqTime": str(timestamp),
            "signature": sign_v1(api_key, api_secret, timestamp),
        },
    })


def ping_statement() -> str:
    """Websocket ``ping`` control message."""
    return canonical_json({"method": "ping"})


class MexcSigner:
    """
    Handles request signing for MEXC API authentication.

    Binds credentials to the pure signing functions of this module. Every
    method checks the credentials its scheme needs before signing and raises
    MissingCredentialError otherwise.
    """

    def __init__(self, credentials: ApiCredentials):
        """
        Initialize the signer with API credentials.

        Args:
            credentials: API credentials; any field may be absent
        """
        self.credentials = credentials

    def ensure(self, scheme: SigningScheme) -> None:
        """Raise MissingCredentialError if ``scheme`` cannot be used."""
        for name in REQUIRED_CREDENTIALS[scheme]:
            if not getattr(self.credentials, name):
                raise MissingCredentialError(name, scheme)

    def sign_query(self, query: str) -> str:
        """Scheme 1: signed spot query string."""
        self.ensure(SigningScheme.QUERY)
        return sign_query(self.credentials.api_secret, query)

    def futures_headers(self, timestamp: int, sign_params: Optional[str] = None) -> Dict[str, str]:
        """Scheme 2: futures REST headers."""
        self.ensure(SigningScheme.HEADER)
        return futures_headers(
            self.credentials.api_key, self.credentials.api_secret, timestamp, sign_params
        )

    def web_order_headers(self, timestamp: int, body: str) -> Dict[str, str]:
        """Scheme 3: web order-creation headers for an already serialized body."""
        self.ensure(SigningScheme.WEB_ORDER)
        return web_order_headers(self.credentials.web_token, timestamp, body)

    def login_statement(self, timestamp: int) -> str:
        """Scheme 4: websocket login statement."""
        self.ensure(SigningScheme.WS_LOGIN)
        return login_statement(self.credentials.api_key, self.credentials.api_secret, timestamp)

    def spot_key_header(self) -> Mapping[str, str]:
        """API key header sent with signed spot requests."""
        self.ensure(SigningScheme.QUERY)
        return {SPOT_API_KEY_HEADER: self.credentials.api_key}
