"""funcdoc: function definitions from structured comments, plus a runtime type engine.

The public surface used by gateways and command-line front ends:

- :func:`parse_definition` / :func:`load` build Definitions from source files.
- :func:`validate`, :func:`sanitize`, :func:`convert`, :func:`check` and
  :func:`introspect` operate on values against type tags and schemas.
"""

from .exceptions import ConversionError, DefinitionError, FuncdocError, ValidationError
from .models import NO_DEFAULT, Definition, Parameter, ReturnSpec
from .parsers import FunctionParser, load, parse_definition
from .types import check, convert, introspect, sanitize, validate

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "DefinitionError",
    "FuncdocError",
    "ValidationError",
    "NO_DEFAULT",
    "Definition",
    "Parameter",
    "ReturnSpec",
    "FunctionParser",
    "load",
    "parse_definition",
    "check",
    "convert",
    "introspect",
    "sanitize",
    "validate",
    "types",
]
