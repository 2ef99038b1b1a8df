import jsonschema

from funcdoc.schema.json_schema import (
    JSON_SCHEMA_DRAFT,
    SchemaIssue,
    definition_json_schema,
    parameter_json_schema,
    schema_issues,
)
from funcdoc.models.definition import Parameter


def test_definition_schema_for_required_parameter(comprehensive):
    schema = definition_json_schema(comprehensive["test"])
    assert schema["$schema"] == JSON_SCHEMA_DRAFT
    assert schema["description"] == "Test function"
    assert schema["required"] == ["a"]
    assert schema["properties"]["a"] == {"type": "boolean", "description": "alpha"}


def test_definition_schema_marks_defaults_nullable(comprehensive):
    schema = definition_json_schema(comprehensive["default"])
    assert schema["required"] == []
    assert schema["properties"]["name"] == {
        "anyOf": [{"type": "string", "description": "A name"}, {"type": "null"}],
    }


def test_nested_object_schema(comprehensive):
    obj = comprehensive["schema/basic"].get_param("obj")
    schema = parameter_json_schema(obj)
    assert schema["type"] == "object"
    assert schema["required"] == ["name", "enabled", "data", "timestamp"]
    assert schema["properties"]["data"]["required"] == ["a", "b"]


def test_enum_schema_lists_labels(comprehensive):
    basic = comprehensive["enum"].get_param("basic")
    schema = parameter_json_schema(basic)
    assert schema["anyOf"][0]["enum"] == ["num", "double", "float", "numstr"]


def test_buffer_schema_accepts_both_encodings():
    schema = parameter_json_schema(Parameter(name="payload", type="buffer"))
    jsonschema.validate({"_bytes": [1, 2]}, schema)
    jsonschema.validate({"_base64": "aGk="}, schema)
    validator = jsonschema.Draft7Validator(schema)
    assert not validator.is_valid({"_bytes": [300]})
    assert not validator.is_valid("aGk=")


def test_schema_issues_valid_arguments(comprehensive):
    assert schema_issues(comprehensive["test"], {"a": True}) == []
    assert schema_issues(comprehensive["keyql"], {"where": {"name": "x"}, "limit": {"count": 2}}) == []


def test_schema_issues_reports_paths(comprehensive):
    issues = schema_issues(comprehensive["test"], {})
    assert len(issues) == 1
    assert issues[0].json_path == ""
    assert "'a' is a required property" in issues[0].message

    issues = schema_issues(comprehensive["test"], {"a": "yes"})
    assert issues == [SchemaIssue(message=issues[0].message, json_path="/a")]


def test_schema_issues_on_limit(comprehensive):
    issues = schema_issues(comprehensive["keyql"], {"limit": {"count": -1}})
    assert [issue.json_path for issue in issues] == ["/limit"]
