"""Wire-string conversion for parameter values.

Path, query, header and cookie values all travel as text. This module holds
the single policy used to turn a typed Python value into that text, plus the
JSON encoder used for structured values and JSON bodies.
"""

import json
import math
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

from apiwire.constants import Defaults
from apiwire.exceptions import ValueEncodingError

BINARY_TYPES = (bytes, bytearray, memoryview)


def is_binary(value: Any) -> bool:
    """Return True if the value is a raw binary payload."""
    return isinstance(value, BINARY_TYPES)


def binary_text(value: Any) -> str:
    """Decode a binary payload as UTF-8 text.

    Raises:
        ValueEncodingError: If the payload is not valid UTF-8
    """
    try:
        return bytes(value).decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueEncodingError(
            "Binary value is not valid UTF-8 and cannot be sent as text",
            details={"length": len(bytes(value)), "position": e.start},
        ) from e


def _decimal_text(value: Decimal) -> str:
    return format(value, "f")


def _float_jsonable(value: float) -> Any:
    # Non-finite floats are not JSON; integral floats print without ".0"
    if not math.isfinite(value):
        return None
    if value.is_integer() and abs(value) < Defaults.FLOAT_EXPONENT_THRESHOLD:
        return int(value)
    return value


def _to_jsonable(value: Any) -> Any:
    """Recursively prepare a value for ``json.dumps``.

    Integers a double cannot hold exactly, and decimals, become decimal
    strings. Datetimes become ISO-8601 strings and binary payloads UTF-8 text.
    """
    if isinstance(value, BaseModel):
        return _to_jsonable(value.model_dump(mode="python"))
    if isinstance(value, Enum):
        return _to_jsonable(value.value)
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        if abs(value) > Defaults.MAX_SAFE_INTEGER:
            return str(value)
        return value
    if isinstance(value, float):
        return _float_jsonable(value)
    if is_binary(value):
        return binary_text(value)
    if isinstance(value, Decimal):
        return _decimal_text(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_jsonable(item) for item in value]
    return value


def json_dumps(value: Any) -> str:
    """Encode a value as compact JSON text.

    Args:
        value: Any JSON-compatible value, pydantic model, or container of them

    Returns:
        JSON text without insignificant whitespace
    """
    return json.dumps(
        _to_jsonable(value), separators=(",", ":"), ensure_ascii=False, default=str
    )


def param_string_value(value: Any) -> str:
    """Convert a parameter value to its wire string.

    Args:
        value: Text, number, boolean, decimal, binary, or structured value

    Returns:
        The value's text form; binary values are decoded as UTF-8 and
        structured values are JSON-encoded

    Raises:
        ValueEncodingError: If a binary value is not valid UTF-8

    Example:
        >>> param_string_value(5)
        '5'
        >>> param_string_value(True)
        'true'
        >>> param_string_value({"name": "aName", "age": 65})
        '{"name":"aName","age":65}'
    """
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        return _decimal_text(value)
    if is_binary(value):
        return binary_text(value)
    return json_dumps(value)


__all__ = [
    "BINARY_TYPES",
    "binary_text",
    "is_binary",
    "json_dumps",
    "param_string_value",
]
