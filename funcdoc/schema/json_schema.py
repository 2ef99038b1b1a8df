from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import jsonschema
from jsonschema.exceptions import ValidationError

from ..models.definition import Definition, Parameter
from ..types import registry


JsonPointer = str

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"

_BUFFER_SCHEMA: Dict[str, Any] = {
    "oneOf": [
        {
            "type": "object",
            "properties": {
                "_bytes": {"type": "array", "items": {"type": "integer", "minimum": 0, "maximum": 255}},
            },
            "required": ["_bytes"],
            "additionalProperties": False,
        },
        {
            "type": "object",
            "properties": {"_base64": {"type": "string"}},
            "required": ["_base64"],
            "additionalProperties": False,
        },
    ]
}

_SIMPLE_TYPES: Dict[str, Dict[str, Any]] = {
    registry.STRING: {"type": "string"},
    registry.NUMBER: {"type": "number"},
    registry.FLOAT: {"type": "number"},
    registry.INTEGER: {
        "type": "integer",
        "minimum": -registry.MAX_SAFE_INTEGER,
        "maximum": registry.MAX_SAFE_INTEGER,
    },
    registry.BOOLEAN: {"type": "boolean"},
    registry.ANY: {},
    registry.KEYQL_QUERY: {"type": "object"},
    registry.KEYQL_LIMIT: {
        "type": "object",
        "properties": {
            "count": {"type": "integer", "minimum": 0},
            "offset": {"type": "integer", "minimum": 0},
        },
        "additionalProperties": False,
    },
}


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    json_path: Optional[JsonPointer] = None


def _object_schema(entries: Sequence[Parameter]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {entry.name: parameter_json_schema(entry) for entry in entries},
        "required": [entry.name for entry in entries if not entry.has_default],
    }


def parameter_json_schema(param: Parameter) -> Dict[str, Any]:
    """Translate one Parameter (recursively) into a JSON Schema fragment."""
    type_name = param.type
    if type_name == registry.OBJECT:
        schema = _object_schema(param.schema) if param.schema else {"type": "object"}
    elif type_name == registry.ARRAY:
        schema = {"type": "array"}
        if param.schema:
            schema["items"] = parameter_json_schema(param.schema[0])
    elif type_name == registry.ENUM:
        schema = {"enum": [label for label, _ in param.members or ()]}
    elif type_name == registry.BUFFER:
        schema = dict(_BUFFER_SCHEMA)
    else:
        schema = dict(_SIMPLE_TYPES[type_name])

    if param.description:
        schema["description"] = param.description
    if param.has_default and type_name != registry.ANY:
        schema = {"anyOf": [schema, {"type": "null"}]}
    return schema


def definition_json_schema(definition: Definition) -> Dict[str, Any]:
    """Build a draft-07 JSON Schema describing the keyword arguments of ``definition``.

    Raises:
        jsonschema.exceptions.SchemaError: If the produced schema is not well-formed.
    """
    schema = {"$schema": JSON_SCHEMA_DRAFT, **_object_schema(definition.params)}
    if definition.description:
        schema["description"] = definition.description
    jsonschema.Draft7Validator.check_schema(schema)
    return schema


def schema_issues(definition: Definition, arguments: Mapping[str, Any]) -> List[SchemaIssue]:
    """Validate JSON-decoded ``arguments`` against the definition's JSON Schema.

    Returns:
        One SchemaIssue per violation, sorted by path; empty when valid.
    """
    validator = jsonschema.Draft7Validator(definition_json_schema(definition))
    issues: List[SchemaIssue] = []
    for error in sorted(validator.iter_errors(arguments), key=lambda e: [str(p) for p in e.absolute_path]):
        issues.append(_to_issue(error))
    return issues


def _to_issue(error: ValidationError) -> SchemaIssue:
    path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
    return SchemaIssue(message=error.message, json_path=path)
