"""
Utility functions for MEXC client.

Helper functions and utilities following functional programming principles.
"""

import time
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from enum import Enum
from typing import Any, Dict, Type, TypeVar, Union

from .http_client import ResponseDecodeError

E = TypeVar("E", bound=Enum)


def get_timestamp() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def format_decimal(value: Union[Decimal, float, int, str]) -> str:
    """Render a number in plain notation without trailing zeros."""
    decimal_value = Decimal(str(value))
    if decimal_value == decimal_value.to_integral_value():
        return str(decimal_value.quantize(Decimal(1)))
    return format(decimal_value.normalize(), "f")


def contract_units(quantity: Union[Decimal, float, str], contract_size: Decimal) -> int:
    """Whole contract units covering at most ``quantity`` of the base asset."""
    if contract_size <= 0:
        raise ValueError(f"Contract size must be positive, got {contract_size}")
    units = (Decimal(str(quantity)) / contract_size).to_integral_value(rounding=ROUND_FLOOR)
    return max(int(units), 0)


def require(data: Any, key: str) -> Any:
    """Return ``data[key]`` or raise ResponseDecodeError if it is absent."""
    if not isinstance(data, dict):
        raise ResponseDecodeError(
            f"Expected an object containing '{key}', got {type(data).__name__}"
        )
    value = data.get(key)
    if value is None:
        raise ResponseDecodeError(f"Missing required field '{key}'")
    return value


def to_decimal(data: Dict[str, Any], key: str) -> Decimal:
    """Decode a numeric (or numeric string) field into a Decimal."""
    value = require(data, key)
    if isinstance(value, bool):
        raise ResponseDecodeError(f"Field '{key}' is not numeric: {value!r}")
    try:
        decimal_value = Decimal(str(value))
    except InvalidOperation as e:
        raise ResponseDecodeError(f"Field '{key}' is not numeric: {value!r}") from e
    if not decimal_value.is_finite():
        raise ResponseDecodeError(f"Field '{key}' is not finite: {value!r}")
    return decimal_value


def to_int(data: Dict[str, Any], key: str) -> int:
    """Decode an integer (or integer string) field."""
    value = require(data, key)
    if isinstance(value, bool):
        raise ResponseDecodeError(f"Field '{key}' is not an integer: {value!r}")
    try:
        decimal_value = Decimal(str(value))
    except InvalidOperation as e:
        raise ResponseDecodeError(f"Field '{key}' is not an integer: {value!r}") from e
    if not decimal_value.is_finite() or decimal_value != decimal_value.to_integral_value():
        raise ResponseDecodeError(f"Field '{key}' is not an integer: {value!r}")
    return int(decimal_value)


def to_str(data: Dict[str, Any], key: str) -> str:
    """Decode a field as a string; numeric ids are accepted."""
    return str(require(data, key))


def to_bool(data: Dict[str, Any], key: str) -> bool:
    value = require(data, key)
    if not isinstance(value, bool):
        raise ResponseDecodeError(f"Field '{key}' is not a boolean: {value!r}")
    return value


def to_enum(data: Dict[str, Any], key: str, enum_cls: Type[E]) -> E:
    """Decode a field into ``enum_cls`` by value."""
    value = require(data, key)
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ResponseDecodeError(
            f"Field '{key}' has unknown {enum_cls.__name__} value {value!r}"
        ) from e
