"""Small shared helpers (logging setup, source locations)."""

from .source_location import SourceLocation, location_of

__all__ = ["SourceLocation", "location_of"]
