"""Runtime type engine: check, validate, sanitize, convert and introspect values."""

from .registry import (
    ALLOWED_TYPES,
    TYPE_DESCRIPTIONS,
    describe,
    is_supported_type,
    list_types,
)
from .checker import check
from .validator import validate
from .sanitizer import sanitize
from .converter import convert
from .introspector import introspect

__all__ = [
    "ALLOWED_TYPES",
    "TYPE_DESCRIPTIONS",
    "describe",
    "is_supported_type",
    "list_types",
    "check",
    "validate",
    "sanitize",
    "convert",
    "introspect",
]
