"""
Session management for MEXC client.

Owns the single aiohttp session shared by every request of a client. The
session is created lazily on first use and released by ``close_session``.
"""

import logging
from typing import Optional

import aiohttp

from .models.config import ConnectionConfig

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages HTTP session lifecycle for MEXC client."""

    def __init__(self, config: ConnectionConfig):
        """Initialize session manager with configuration."""
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, creating it if needed."""
        if self._session is not None and not self._session.closed:
            return self._session

        connector = aiohttp.TCPConnector(
            limit=100,
            limit_per_host=20,
            ttl_dns_cache=300,
            use_dns_cache=True,
        )

        timeout = aiohttp.ClientTimeout(total=self._config.timeout)

        # Content type is set per request by the signing scheme
        headers = {
            "User-Agent": "mexc-client/1.0",
            "Accept": "application/json",
        }

        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers=headers,
        )
        logger.debug(f"Created HTTP session (timeout={self._config.timeout}s)")

        return self._session

    async def close_session(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed HTTP session")
        self._session = None

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        """Get current session without creating one."""
        return self._session
