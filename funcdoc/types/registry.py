"""Registered type tags and their value-membership rules.

The table is read-only process-wide data: adding a tag means adding it here
and updating every dispatch site (checker, validator, sanitizer, converter,
introspector).
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional, Tuple


STRING = "string"
NUMBER = "number"
FLOAT = "float"
INTEGER = "integer"
BOOLEAN = "boolean"
OBJECT = "object"
ARRAY = "array"
BUFFER = "buffer"
ENUM = "enum"
ANY = "any"
KEYQL_QUERY = "object.keyql.query"
KEYQL_LIMIT = "object.keyql.limit"

TYPE_DESCRIPTIONS = MappingProxyType({
    STRING: "Basic text or character strings",
    NUMBER: "Any double-precision floating point value",
    FLOAT: "Alias for number",
    INTEGER: "Subset of number, integers between -(2^53 - 1) and +(2^53 - 1)",
    BOOLEAN: "True or False",
    OBJECT: "Any JSON-compatible object",
    ARRAY: "Any JSON-compatible array",
    BUFFER: "Raw binary data, encoded as {\"_bytes\": []} or {\"_base64\": \"\"} in text",
    ENUM: "One label out of a fixed list of (label, value) members",
    ANY: "Any value mentioned above",
    KEYQL_QUERY: "A query object: each field name is a filter, optionally suffixed with an operator (e.g. name__in)",
    KEYQL_LIMIT: "A pagination object with optional integer fields count and offset",
})

ALLOWED_TYPES = frozenset(TYPE_DESCRIPTIONS)

# Types whose values carry a nested field schema
SCHEMA_TYPES = frozenset({OBJECT, ARRAY})

# Leaf categories produced by check() that get a sampleValue during introspection
LEAF_TYPES = frozenset({STRING, NUMBER, BOOLEAN, BUFFER})

KEYQL_LIMIT_FIELDS: Tuple[str, ...] = ("count", "offset")

# Fixed field schema of object.keyql.limit; both fields are optional
KEYQL_LIMIT_SCHEMA: Tuple[dict, ...] = (
    MappingProxyType({"name": "count", "type": INTEGER, "description": "", "defaultValue": None}),
    MappingProxyType({"name": "offset", "type": INTEGER, "description": "", "defaultValue": None}),
)

MAX_SAFE_INTEGER = 2 ** 53 - 1


def is_supported_type(type_name: Optional[str]) -> bool:
    if not type_name:
        return False
    return type_name in ALLOWED_TYPES


def list_types() -> Tuple[str, ...]:
    return tuple(TYPE_DESCRIPTIONS)


def describe(type_name: str) -> str:
    if type_name not in TYPE_DESCRIPTIONS:
        raise KeyError(f"Unknown type: '{type_name}'. Valid types: {list(TYPE_DESCRIPTIONS)}")
    return TYPE_DESCRIPTIONS[type_name]


def is_number(value: Any) -> bool:
    """True for finite int/float values; bool is excluded."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def is_integer(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def is_buffer(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray))


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)
