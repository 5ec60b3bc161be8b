"""
Configuration models for MEXC client.

Immutable configuration structures following state-first design.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from ..constants import (
    DEFAULT_RECV_WINDOW,
    DEFAULT_TIMEOUT,
    FUTURES_BASE_URL,
    MAX_RECV_WINDOW,
    SPOT_BASE_URL,
    WEB_BASE_URL,
)


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for MEXC client connection.

    Credentials are optional: public endpoints work without them, and each
    signing scheme checks for the credential it needs when it is used.
    """
    api_key: Optional[str] = field(default=None, repr=False)
    api_secret: Optional[str] = field(default=None, repr=False)
    web_token: Optional[str] = field(default=None, repr=False)
    spot_base_url: str = SPOT_BASE_URL
    futures_base_url: str = FUTURES_BASE_URL
    web_base_url: str = WEB_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    recv_window: int = DEFAULT_RECV_WINDOW
    proxy_url: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_urls()
        self._validate_timeout()
        self._validate_recv_window()

    def _validate_urls(self):
        """Validate base URLs."""
        for name in ("spot_base_url", "futures_base_url", "web_base_url"):
            url = getattr(self, name)
            if not isinstance(url, str) or not url.startswith(("http://", "https://")):
                raise ValueError(f"{name} must be a valid HTTP/HTTPS URL, got {url!r}")

    def _validate_timeout(self):
        """Validate request timeout."""
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    def _validate_recv_window(self):
        """Validate receive window."""
        if not 0 < self.recv_window <= MAX_RECV_WINDOW:
            raise ValueError(
                f"Receive window must be between 1 and {MAX_RECV_WINDOW} ms, "
                f"got {self.recv_window}"
            )

    @classmethod
    def from_env(cls, **overrides) -> "ConnectionConfig":
        """
        Build configuration from environment variables.

        Reads MEXC_API_KEY, MEXC_API_SECRET, MEXC_WEB_TOKEN, MEXC_RECV_WINDOW,
        MEXC_TIMEOUT and MEXC_PROXY_URL. A ``.env`` file in the working
        directory is loaded first. Keyword overrides win over the environment.
        """
        load_dotenv()

        params = {
            "api_key": os.getenv("MEXC_API_KEY") or None,
            "api_secret": os.getenv("MEXC_API_SECRET") or None,
            "web_token": os.getenv("MEXC_WEB_TOKEN") or None,
            "recv_window": int(os.getenv("MEXC_RECV_WINDOW", str(DEFAULT_RECV_WINDOW))),
            "timeout": float(os.getenv("MEXC_TIMEOUT", str(DEFAULT_TIMEOUT))),
            "proxy_url": os.getenv("MEXC_PROXY_URL") or None,
        }
        params.update(overrides)
        return cls(**params)
