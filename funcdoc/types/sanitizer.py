from __future__ import annotations

from typing import Any, Optional, Sequence

from . import registry
from .validator import entry_get
from ..exceptions import ValidationError


def _sanitize_limit(value: Any) -> None:
    if not registry.is_object(value):
        raise ValidationError(
            f"Invalid {registry.KEYQL_LIMIT}: expected an object, got {type(value).__name__}"
        )

    invalid = [key for key in value if key not in registry.KEYQL_LIMIT_FIELDS]
    if invalid:
        raise ValidationError(
            f"Invalid {registry.KEYQL_LIMIT} fields {invalid}. "
            f"Allowed fields: {list(registry.KEYQL_LIMIT_FIELDS)}"
        )

    for key in registry.KEYQL_LIMIT_FIELDS:
        if key in value and not (registry.is_integer(value[key]) and value[key] >= 0):
            raise ValidationError(
                f"Invalid {registry.KEYQL_LIMIT} field '{key}': "
                f"expected a non-negative integer, got {value[key]!r}"
            )


def _sanitize_query(value: Any) -> None:
    # Field names are free-form filters (e.g. "eye_color__in"); only the container is checked
    if not registry.is_object(value):
        raise ValidationError(
            f"Invalid {registry.KEYQL_QUERY}: expected an object, got {type(value).__name__}"
        )


def sanitize(type_name: str, value: Any, schema: Optional[Sequence[Any]] = None) -> Any:
    """Enforce the structural rules of the query and pagination types.

    Objects and arrays with a schema are walked so that nested query or
    pagination fields are checked as well. The value is never modified: it is
    either returned as-is or a ValidationError is raised.
    """
    if type_name == registry.KEYQL_LIMIT:
        _sanitize_limit(value)
    elif type_name == registry.KEYQL_QUERY:
        _sanitize_query(value)
    elif type_name == registry.OBJECT and schema and registry.is_object(value):
        for entry in schema:
            field_name = entry_get(entry, "name")
            if field_name in value and value[field_name] is not None:
                sanitize(entry_get(entry, "type"), value[field_name], entry_get(entry, "schema"))
    elif type_name == registry.ARRAY and schema and registry.is_array(value):
        if len(schema) == 1:
            element_type = entry_get(schema[0], "type")
            nested = entry_get(schema[0], "schema")
            for element in value:
                if element is not None:
                    sanitize(element_type, element, nested)
    return value
