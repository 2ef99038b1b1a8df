"""Best-effort schema inference from a sample value.

Used to document defaults and sample outputs when no types were declared.
Array elements are merged into one element schema:

1. every element is null -> ``{"type": "any", "defaultValue": None}``
2. non-null elements of more than one category -> ``{"type": "any"}``
3. one category -> the schema of a representative element

In cases 2 and 3 a null element adds ``"defaultValue": None``. Arrays of
objects are merged field by field, keeping only fields present in every object.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from . import registry
from .checker import check


_UNNAMED = object()


def _named(name: Any, schema: Dict[str, Any]) -> Dict[str, Any]:
    if name is _UNNAMED:
        return schema
    return {"name": name, **schema}


def _introspect(value: Any, name: Any = _UNNAMED) -> Dict[str, Any]:
    if value is None:
        return _named(name, {"type": registry.ANY, "defaultValue": None})

    type_name = check(value)
    if type_name == registry.OBJECT:
        return _named(name, {
            "type": registry.OBJECT,
            "schema": [_introspect(field_value, key) for key, field_value in value.items()],
        })
    if type_name == registry.ARRAY:
        return _named(name, {"type": registry.ARRAY, "schema": [_merge_elements(list(value))]})

    schema: Dict[str, Any] = {"type": type_name}
    if name is not _UNNAMED:
        schema["sampleValue"] = value
    return _named(name, schema)


def _merge_elements(elements: List[Any]) -> Dict[str, Any]:
    non_null = [element for element in elements if element is not None]
    if not non_null:
        return {"type": registry.ANY, "defaultValue": None}

    nullable = len(non_null) < len(elements)
    categories = {check(element) for element in non_null}

    if len(categories) > 1:
        schema: Dict[str, Any] = {"type": registry.ANY}
    else:
        category = categories.pop()
        if category == registry.OBJECT:
            schema = {"type": registry.OBJECT, "schema": _merge_objects(non_null)}
        elif category == registry.ARRAY:
            merged: List[Any] = []
            for element in non_null:
                merged.extend(element)
            schema = {"type": registry.ARRAY, "schema": [_merge_elements(merged)]}
        else:
            schema = {"type": category}

    if nullable:
        schema["defaultValue"] = None
    return schema


def _merge_objects(objects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    first, rest = objects[0], objects[1:]
    shared = [key for key in first if all(key in other for other in rest)]
    return [_merge_field(key, [obj[key] for obj in objects]) for key in shared]


def _first_leaf(values: List[Any]) -> Optional[Any]:
    for value in values:
        if value is not None:
            return value if check(value) in registry.LEAF_TYPES else None
    return None


def _merge_field(name: str, values: List[Any]) -> Dict[str, Any]:
    # Within objects a null sample counts as its own category
    categories = {check(value) for value in values}

    if len(categories) > 1:
        schema: Dict[str, Any] = {"name": name, "type": registry.ANY}
        if any(value is None for value in values):
            schema["defaultValue"] = None
        sample = _first_leaf(values)
        if sample is not None:
            schema["sampleValue"] = sample
        return schema

    category = categories.pop()
    if category == registry.ANY:
        return {"name": name, "type": registry.ANY, "defaultValue": None}
    if category in (registry.OBJECT, registry.ARRAY):
        schema = _merge_elements(values)
        return {"name": name, **schema}
    return {"name": name, "type": category, "sampleValue": values[0]}


def introspect(value: Any) -> Dict[str, Any]:
    """Infer a schema fragment (``type`` plus ``schema``/``defaultValue``) from ``value``."""
    return _introspect(value)
