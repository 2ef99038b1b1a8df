"""Comment-to-definition parsing and directory loading."""

from .definition_parser import FunctionParser, parse_definition
from .loader import load

__all__ = ["FunctionParser", "parse_definition", "load"]
