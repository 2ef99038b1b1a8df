from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Sequence

from . import registry
from ..models.definition import NO_DEFAULT


def entry_get(entry: Any, key: str, default: Any = None) -> Any:
    """Read a schema entry field from a Parameter-like object or a wire dict."""
    if isinstance(entry, Mapping):
        wire_key = "defaultValue" if key == "default_value" else key
        return entry.get(wire_key, default)
    return getattr(entry, key, default)


def entry_has_default(entry: Any) -> bool:
    if isinstance(entry, Mapping):
        return "defaultValue" in entry
    return getattr(entry, "default_value", NO_DEFAULT) is not NO_DEFAULT


def entry_nested(entry: Any) -> Optional[Sequence[Any]]:
    """Nested schema of an object/array entry, or the members of an enum entry."""
    return entry_get(entry, "schema") or entry_get(entry, "members")


def _validate_members(value: Any, members: Optional[Sequence[Any]]) -> bool:
    if not members:
        return False
    for member in members:
        if isinstance(member, (list, tuple)) and len(member) == 2:
            label = member[0]
        else:
            label = member
        if type(label) is type(value) and label == value:
            return True
    return False


def _validate_object_schema(value: Any, schema: Optional[Sequence[Any]]) -> bool:
    if not registry.is_object(value):
        return False
    if not schema:
        return True
    for entry in schema:
        if not validate(
            entry_get(entry, "type"),
            value.get(entry_get(entry, "name")),
            entry_has_default(entry),
            entry_nested(entry),
        ):
            return False
    return True


def _validate_array_schema(value: Any, schema: Optional[Sequence[Any]]) -> bool:
    if not registry.is_array(value):
        return False
    if not schema:
        return True
    if len(schema) != 1:
        return False
    entry = schema[0]
    element_type = entry_get(entry, "type")
    nullable = entry_has_default(entry)
    nested = entry_nested(entry)
    return all(validate(element_type, element, nullable, nested) for element in value)


def validate(
    type_name: str,
    value: Any,
    allow_null: bool = False,
    schema_or_members: Optional[Sequence[Any]] = None,
) -> bool:
    """Check ``value`` against a declared type; never raises.

    Args:
        type_name: One of the registered type tags.
        value: The value to check. No coercion happens, so ``"1"`` is not a number.
        allow_null: When True, ``None`` is valid for any type.
        schema_or_members: Field schema for object/array, member list for enum.

    Returns:
        True when the value belongs to the type.
    """
    if allow_null and value is None:
        return True

    if type_name == registry.ANY:
        return True
    if type_name == registry.STRING:
        return isinstance(value, str)
    if type_name in (registry.NUMBER, registry.FLOAT):
        return registry.is_number(value)
    if type_name == registry.INTEGER:
        return registry.is_integer(value)
    if type_name == registry.BOOLEAN:
        return isinstance(value, bool)
    if type_name == registry.BUFFER:
        return registry.is_buffer(value)
    if type_name == registry.ENUM:
        return _validate_members(value, schema_or_members)
    if type_name == registry.OBJECT:
        return _validate_object_schema(value, schema_or_members)
    if type_name == registry.ARRAY:
        return _validate_array_schema(value, schema_or_members)
    if type_name == registry.KEYQL_QUERY:
        return _validate_object_schema(value, schema_or_members)
    if type_name == registry.KEYQL_LIMIT:
        return _validate_object_schema(value, registry.KEYQL_LIMIT_SCHEMA)
    return False
