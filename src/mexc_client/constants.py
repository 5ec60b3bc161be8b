"""
Constants for the MEXC client.
"""

# API Configuration
SPOT_BASE_URL = "https://api.mexc.com"
FUTURES_BASE_URL = "https://contract.mexc.com"
WEB_BASE_URL = "https://futures.mexc.com"
DEFAULT_TIMEOUT = 30.0

# Authentication Configuration
DEFAULT_RECV_WINDOW = 5000  # milliseconds
MAX_RECV_WINDOW = 60000  # milliseconds
SPOT_API_KEY_HEADER = "X-MEXC-APIKEY"

# Web order endpoint client fingerprint
WEB_USER_AGENT = "MEXC/7 CFNetwork/1474 Darwin/23.0.0"
WEB_ORIGIN = "https://futures.mexc.com"
WEB_REFERER = "https://futures.mexc.com/exchange"

# Offset into the MD5 hex digest where the web-order partial hash starts
PARTIAL_HASH_OFFSET = 7

# HTTP Status Codes
SUCCESS_STATUS_CODE = 200
ERROR_STATUS_CODE = 500
