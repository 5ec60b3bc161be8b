"""
HTTP client for MEXC API.

Handles request execution, response decoding and error classification.
Requests arrive fully signed from the RequestBuilder; this module never
signs, retries or interprets payloads beyond the futures envelope.
"""

import json
import logging
from typing import Any, Dict, Optional

from aiohttp import ClientResponse, ClientSession
from yarl import URL

from .models.config import ConnectionConfig
from .models.futures import FuturesResponse
from .models.requests import SignedRequest

logger = logging.getLogger(__name__)


class HttpClient:
    """HTTP client specialized for MEXC API interactions."""

    def __init__(self, config: ConnectionConfig):
        """Initialize HTTP client with configuration."""
        self._config = config

    async def request(self, session: ClientSession, request: SignedRequest) -> Any:
        """
        Execute a signed request and return the decoded JSON payload.

        Transport failures (aiohttp.ClientError, asyncio.TimeoutError) are
        propagated unmodified.

        Raises:
            ExchangeApiError: Non-2xx response
            ResponseDecodeError: Body is not valid JSON
        """
        logger.debug(f"{request.method} {_redact(request.url)} [{request.scheme.value}]")

        # Signed query strings must reach the wire byte-for-byte
        async with session.request(
            method=request.method,
            url=URL(request.url, encoded=True),
            headers=request.headers,
            data=request.body,
            proxy=self._config.proxy_url,
        ) as response:
            payload = await self._process_response(response)

            if response.status >= 400:
                raise ExchangeApiError(
                    _error_message(payload, response.status),
                    status_code=response.status,
                    code=_error_code(payload),
                    response_data=payload,
                )

            return payload

    async def request_envelope(
        self,
        session: ClientSession,
        request: SignedRequest,
        expect_data: bool = True,
    ) -> Any:
        """Execute a futures request and return the envelope's ``data`` field."""
        payload = await self.request(session, request)
        return unwrap_envelope(payload, expect_data=expect_data)

    async def _process_response(self, response: ClientResponse) -> Any:
        """Process HTTP response and return data."""
        response_text = await response.text()

        if not response_text:
            return None

        try:
            return json.loads(response_text)
        except json.JSONDecodeError as e:
            if response.status >= 400:
                return response_text
            raise ResponseDecodeError(
                f"Invalid JSON response (Status {response.status}): {response_text[:200]}",
                status_code=response.status,
            ) from e


def parse_envelope(payload: Any) -> FuturesResponse:
    """Decode the ``{success, code, data, message}`` futures envelope."""
    if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
        raise ResponseDecodeError(
            f"Expected futures response envelope, got: {str(payload)[:200]}",
            response_data=payload if isinstance(payload, dict) else None,
        )

    code = payload.get("code", 0)
    if isinstance(code, bool) or not isinstance(code, int):
        raise ResponseDecodeError(f"Envelope code is not an integer: {code!r}", response_data=payload)

    return FuturesResponse(
        success=payload["success"],
        code=code,
        data=payload.get("data"),
        message=payload.get("message"),
    )


def unwrap_envelope(payload: Any, expect_data: bool = True) -> Any:
    """
    Return the ``data`` of a successful futures envelope.

    Raises:
        ExchangeApiError: ``success`` is false
        ResponseDecodeError: Not an envelope, or ``data`` absent when expected
    """
    envelope = parse_envelope(payload)

    if not envelope.success:
        raise ExchangeApiError(
            envelope.message or f"MEXC futures request failed with code {envelope.code}",
            code=envelope.code,
            response_data=payload,
        )

    if expect_data and envelope.data is None:
        raise ResponseDecodeError("Expected data field", response_data=payload)

    return envelope.data


def _error_message(payload: Any, status: int) -> str:
    if isinstance(payload, dict):
        message = payload.get("msg") or payload.get("message")
        if message:
            return str(message)
    if isinstance(payload, str) and payload:
        return payload[:200]
    return f"HTTP {status}"


def _error_code(payload: Any) -> Optional[int]:
    if isinstance(payload, dict) and isinstance(payload.get("code"), int):
        return payload["code"]
    return None


def _redact(url: str) -> str:
    """Strip the signature from a URL before it is logged."""
    marker = "&signature="
    index = url.find(marker)
    return url if index < 0 else f"{url[:index]}{marker}***"


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data


class ExchangeApiError(HttpClientError):
    """The exchange rejected the request (non-2xx status or unsuccessful envelope)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        response_data: Optional[Any] = None,
    ):
        super().__init__(message, status_code=status_code, response_data=response_data)
        self.code = code


class ResponseDecodeError(HttpClientError):
    """The response does not have the expected shape."""
    pass
