"""JSON Schema export of parsed definitions.

This package only depends on the data model so that exported schemas stay
independent of the parser implementation.
"""

from .json_schema import (
    SchemaIssue,
    definition_json_schema,
    parameter_json_schema,
    schema_issues,
)
