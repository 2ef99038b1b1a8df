from __future__ import annotations

import base64
import binascii
import json
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from . import registry
from ..exceptions import ConversionError


_TRUE_TEXT = frozenset({"t", "true"})
_FALSE_TEXT = frozenset({"f", "false"})


def _parse_decimal(text: str, type_name: str) -> Decimal:
    stripped = text.strip()
    if not stripped:
        raise ConversionError(f"Empty numeric value for type '{type_name}'")
    try:
        dec = Decimal(stripped)
    except InvalidOperation as exc:
        raise ConversionError(f"Invalid numeric value '{text}' for type '{type_name}'") from exc
    if not dec.is_finite():
        raise ConversionError(f"Non-finite numeric value '{text}' for type '{type_name}'")
    return dec


def _to_float(dec: Decimal, text: str, type_name: str) -> float:
    number = float(dec)
    if not math.isfinite(number):
        raise ConversionError(f"Numeric value '{text}' is out of range for type '{type_name}'")
    return number


def _convert_number(text: str, type_name: str) -> float:
    return _to_float(_parse_decimal(text, type_name), text, type_name)


def _convert_integer(text: str) -> Union[int, float]:
    # Integrality is not enforced here; validate('integer', ...) is the caller's check
    dec = _parse_decimal(text, registry.INTEGER)
    if dec == dec.to_integral_value():
        return int(dec)
    return _to_float(dec, text, registry.INTEGER)


def _convert_boolean(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_TEXT:
        return True
    if lowered in _FALSE_TEXT:
        return False
    raise ConversionError(f"Invalid boolean value '{text}'. Expected one of: t, true, f, false")


def _load_json(text: str, type_name: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConversionError(f"Invalid JSON for type '{type_name}': {exc.msg}") from exc


def _convert_buffer(text: str) -> bytes:
    wrapper = _load_json(text, registry.BUFFER)
    if not registry.is_object(wrapper):
        raise ConversionError("Buffer must be encoded as an object with '_bytes' or '_base64'")

    has_bytes = "_bytes" in wrapper
    has_base64 = "_base64" in wrapper
    if has_bytes == has_base64:
        raise ConversionError("Buffer object must contain exactly one of '_bytes' or '_base64'")

    if has_bytes:
        raw = wrapper["_bytes"]
        if not isinstance(raw, list) or not all(
            registry.is_integer(b) and 0 <= b <= 255 for b in raw
        ):
            raise ConversionError("'_bytes' must be a list of integers between 0 and 255")
        return bytes(int(b) for b in raw)

    encoded = wrapper["_base64"]
    if not isinstance(encoded, str):
        raise ConversionError("'_base64' must be a string")
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise ConversionError(f"Invalid base64 data in '_base64': {exc}") from exc


def convert(type_name: str, value: str) -> Any:
    """Convert a string-encoded value (e.g. a query-string argument) to ``type_name``.

    Raises:
        ConversionError: If the text cannot be read as the requested type.
    """
    if not isinstance(value, str):
        raise ConversionError(
            f"Only strings can be converted, got {type(value).__name__} for type '{type_name}'"
        )

    if type_name in (registry.STRING, registry.ENUM, registry.ANY):
        return value
    if type_name in (registry.NUMBER, registry.FLOAT):
        return _convert_number(value, type_name)
    if type_name == registry.INTEGER:
        return _convert_integer(value)
    if type_name == registry.BOOLEAN:
        return _convert_boolean(value)
    if type_name in (registry.OBJECT, registry.KEYQL_QUERY, registry.KEYQL_LIMIT):
        parsed = _load_json(value, type_name)
        if not registry.is_object(parsed):
            raise ConversionError(f"Expected a JSON object for type '{type_name}'")
        return parsed
    if type_name == registry.ARRAY:
        parsed = _load_json(value, type_name)
        if not registry.is_array(parsed):
            raise ConversionError(f"Expected a JSON array for type '{type_name}'")
        return parsed
    if type_name == registry.BUFFER:
        return _convert_buffer(value)
    raise ConversionError(f"Unknown type: '{type_name}'")
