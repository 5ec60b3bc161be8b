# -*- coding: utf-8 -*-
"""
Tests for models, configuration, utilities and monitoring.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from mexc_client.http_client import ResponseDecodeError
from mexc_client.models import (
    ConnectionConfig,
    DirectionalTarget,
    OpenType,
    OrderDirection,
    OrderInstruction,
    PositionType,
    SigningScheme,
    SubmissionResult,
)
from mexc_client.models.orders import validate_symbol
from mexc_client.monitoring import PerformanceMonitor
from mexc_client.session_manager import SessionManager
from mexc_client.utils import contract_units, format_decimal, to_decimal, to_int


class TestConnectionConfig:
    """Test configuration validation."""

    def test_defaults(self):
        config = ConnectionConfig()
        assert config.spot_base_url == "https://api.mexc.com"
        assert config.futures_base_url == "https://contract.mexc.com"
        assert config.web_base_url == "https://futures.mexc.com"
        assert config.recv_window == 5000
        assert config.timeout == 30.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"spot_base_url": "api.mexc.com"},
            {"futures_base_url": "ftp://contract.mexc.com"},
            {"timeout": 0},
            {"recv_window": 0},
            {"recv_window": 60001},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ConnectionConfig(**kwargs)

    def test_repr_hides_credentials(self):
        config = ConnectionConfig(api_key="visible-key", api_secret="s3cr3t", web_token="t0k3n")
        text = repr(config)
        assert "s3cr3t" not in text
        assert "t0k3n" not in text

    def test_from_env_reads_proxy_and_timeout(self):
        env = {"MEXC_PROXY_URL": "http://proxy:3128", "MEXC_TIMEOUT": "12.5"}
        with patch("mexc_client.models.config.load_dotenv"), patch.dict("os.environ", env, clear=True):
            config = ConnectionConfig.from_env()
        assert config.proxy_url == "http://proxy:3128"
        assert config.timeout == 12.5
        assert config.web_token is None


class TestFuturesEnums:
    """Test direction helpers."""

    def test_inverse(self):
        assert PositionType.LONG.inverse() is PositionType.SHORT
        assert PositionType.SHORT.inverse() is PositionType.LONG
        assert str(PositionType.LONG) == "Long"

    def test_opening_and_closing(self):
        assert OrderDirection.opening(PositionType.LONG) is OrderDirection.OPEN_LONG
        assert OrderDirection.opening(PositionType.SHORT) is OrderDirection.OPEN_SHORT
        assert OrderDirection.closing(PositionType.LONG) is OrderDirection.CLOSE_LONG
        assert OrderDirection.closing(PositionType.SHORT) is OrderDirection.CLOSE_SHORT

    def test_wire_codes(self):
        assert [int(d) for d in OrderDirection] == [1, 2, 3, 4]
        assert OrderDirection.CLOSE_SHORT.is_close
        assert not OrderDirection.OPEN_SHORT.is_close
        assert OrderDirection.CLOSE_SHORT.position_type is PositionType.LONG


class TestOrderModels:
    """Test order model validation."""

    @pytest.mark.parametrize("volume", [0, -1])
    def test_instruction_rejects_non_positive_volume(self, volume):
        with pytest.raises(ValueError):
            OrderInstruction("ETH_USDT", OrderDirection.OPEN_LONG, volume, 20, OpenType.CROSS)

    def test_instruction_rejects_non_positive_price(self):
        with pytest.raises(ValueError):
            OrderInstruction("ETH_USDT", OrderDirection.OPEN_LONG, 1, 20, OpenType.CROSS, price=Decimal("0"))

    @pytest.mark.parametrize("symbol", ["BTC-USDT", "", "ETH/USDT"])
    def test_instruction_rejects_invalid_symbol(self, symbol):
        with pytest.raises(ValueError, match="Invalid symbol"):
            OrderInstruction(symbol, OrderDirection.OPEN_LONG, 1, 20, OpenType.CROSS)

    def test_target_rejects_invalid_symbol(self):
        with pytest.raises(ValueError, match="Invalid symbol"):
            DirectionalTarget("BTC-USDT", 10, 20, OpenType.CROSS, PositionType.LONG)

    def test_target_allows_zero_volume(self):
        target = DirectionalTarget("ETH_USDT", 0, 20, OpenType.CROSS, PositionType.LONG)
        assert target.volume == 0

    def test_target_rejects_negative_volume(self):
        with pytest.raises(ValueError):
            DirectionalTarget("ETH_USDT", -5, 20, OpenType.CROSS, PositionType.LONG)

    def test_submission_result(self):
        assert SubmissionResult().success
        error = RuntimeError("boom")
        result = SubmissionResult(error=error)
        assert not result.success
        with pytest.raises(RuntimeError):
            result.raise_for_error()


class TestUtils:
    """Test utility helpers."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("50000"), "50000"),
            (Decimal("50000.00"), "50000"),
            (Decimal("1.50"), "1.5"),
            (3650.13, "3650.13"),
            ("0.00000100", "0.000001"),
            (Decimal("1E+2"), "100"),
        ],
    )
    def test_format_decimal(self, value, expected):
        assert format_decimal(value) == expected

    def test_contract_units(self):
        assert contract_units("0.257", Decimal("0.01")) == 25
        assert contract_units("0.001", Decimal("0.01")) == 0
        with pytest.raises(ValueError):
            contract_units("1", Decimal("0"))

    def test_to_int_rejects_fraction(self):
        with pytest.raises(ResponseDecodeError):
            to_int({"vol": "1.5"}, "vol")

    @pytest.mark.parametrize("value", ["Infinity", "-Infinity", "NaN", float("inf")])
    def test_to_int_rejects_non_finite(self, value):
        with pytest.raises(ResponseDecodeError, match="holdVol"):
            to_int({"holdVol": value}, "holdVol")

    @pytest.mark.parametrize("value", ["Infinity", "NaN", float("nan")])
    def test_to_decimal_rejects_non_finite(self, value):
        with pytest.raises(ResponseDecodeError, match="fairPrice"):
            to_decimal({"fairPrice": value}, "fairPrice")

    def test_validate_symbol(self):
        assert validate_symbol("BTC_USDT")
        assert not validate_symbol("")
        assert not validate_symbol("BTC-USDT")


class TestPerformanceMonitor:
    """Test request metrics."""

    def test_records_by_scheme(self):
        monitor = PerformanceMonitor()
        monitor.record_request("/api/v3/order", "POST", SigningScheme.QUERY, 200, 12.0)
        monitor.record_request("/api/v3/order", "POST", SigningScheme.QUERY, 400, 8.0)
        monitor.record_request("/api/v1/private/order/create", "POST", SigningScheme.WEB_ORDER, 200, 20.0)

        stats = monitor.statistics
        assert stats.total_requests == 3
        assert stats.failed_requests == 1
        assert stats.min_duration_ms == 8.0
        assert monitor.get_scheme_counts() == {SigningScheme.QUERY: 2, SigningScheme.WEB_ORDER: 1}
        assert monitor.get_endpoint_stats("/api/v3/order", "POST")["success_rate"] == 0.5
        assert monitor.get_error_rate() == pytest.approx(1 / 3)

    def test_unknown_endpoint(self):
        assert PerformanceMonitor().get_endpoint_stats("/none", "GET")["count"] == 0

    def test_reset(self):
        monitor = PerformanceMonitor()
        monitor.record_request("/x", "GET", SigningScheme.PUBLIC, 200, 1.0)
        monitor.reset()
        assert monitor.statistics.total_requests == 0
        assert monitor.get_scheme_counts() == {}
        assert monitor.get_recent_requests() == []


class TestSessionManager:
    """Test session lifecycle."""

    @pytest.mark.asyncio
    async def test_session_reused_until_closed(self):
        manager = SessionManager(ConnectionConfig(timeout=7.0))
        session = await manager.create_session()
        try:
            assert await manager.create_session() is session
            assert session.timeout.total == 7.0
        finally:
            await manager.close_session()

        assert manager.session is None
        assert session.closed
