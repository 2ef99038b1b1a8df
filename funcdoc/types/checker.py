from __future__ import annotations

from typing import Any

from . import registry


def check(value: Any = None) -> str:
    """Classify a live value into exactly one type tag.

    The tests run in a fixed order, so every value maps to a single tag.
    ``bool`` is tested before numbers because it subclasses ``int``.
    """
    if value is None:
        return registry.ANY
    if isinstance(value, str):
        return registry.STRING
    if isinstance(value, bool):
        return registry.BOOLEAN
    if registry.is_number(value):
        return registry.NUMBER
    if registry.is_buffer(value):
        return registry.BUFFER
    if registry.is_array(value):
        return registry.ARRAY
    return registry.OBJECT
