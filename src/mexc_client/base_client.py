"""
Shared client plumbing for MEXC spot and futures clients.

Owns the configuration, signer, session, HTTP client, request builder and
performance monitor, and wraps every API call with latency and outcome
recording.
"""

import asyncio
import logging

from .auth import ApiCredentials, MexcSigner
from .constants import ERROR_STATUS_CODE, SUCCESS_STATUS_CODE
from .http_client import HttpClient
from .models.config import ConnectionConfig
from .models.requests import SigningScheme
from .monitoring import PerformanceMonitor, Statistics
from .request_builder import RequestBuilder
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


class BaseClient:
    """Lifecycle and monitoring shared by the MEXC clients."""

    def __init__(self, config: ConnectionConfig):
        self._config = config
        self._signer = MexcSigner(
            ApiCredentials(
                api_key=config.api_key,
                api_secret=config.api_secret,
                web_token=config.web_token,
            )
        )
        self._session_manager = SessionManager(config)
        self._http_client = HttpClient(config)
        self._builder = RequestBuilder(config, self._signer)
        self._monitor = PerformanceMonitor()
        self._closed = False

    @classmethod
    def from_env(cls, **overrides):
        """Create client from MEXC_* environment variables (and ``.env``)."""
        return cls(ConnectionConfig.from_env(**overrides))

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def monitor(self) -> PerformanceMonitor:
        return self._monitor

    def get_statistics(self) -> Statistics:
        """Get performance statistics."""
        return self._monitor.statistics

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._session_manager.close_session()
            self._closed = True
            logger.info(f"{type(self).__name__} closed")

    async def _execute_with_monitoring(
        self,
        api_method,
        method: str,
        endpoint: str,
        scheme: SigningScheme,
        *args,
        **kwargs,
    ):
        """Execute API method with performance monitoring."""
        if self._closed:
            raise RuntimeError("Client is closed")

        loop = asyncio.get_running_loop()
        start_time = loop.time()
        session = await self._session_manager.create_session()

        try:
            result = await api_method(session, *args, **kwargs)
        except Exception as e:
            duration_ms = (loop.time() - start_time) * 1000
            status_code = getattr(e, "status_code", None) or ERROR_STATUS_CODE
            self._monitor.record_request(endpoint, method, scheme, status_code, duration_ms)
            raise

        duration_ms = (loop.time() - start_time) * 1000
        self._monitor.record_request(endpoint, method, scheme, SUCCESS_STATUS_CODE, duration_ms)
        return result

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def __del__(self):
        if hasattr(self, "_closed") and not self._closed and self._session_manager.session is not None:
            logger.warning(f"{type(self).__name__} not properly closed - call close() explicitly")
