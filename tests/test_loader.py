"""Tests for loading a directory of source files into a keyed mapping."""

import pytest

from funcdoc import load
from funcdoc.config import ParserConfig
from funcdoc.exceptions import DefinitionError
from funcdoc.models.definition import Definition
from funcdoc.parsers.definition_parser import FunctionParser
from funcdoc.parsers.loader import definition_key


COMPREHENSIVE_KEYS = {
    "",
    "test",
    "returns",
    "default",
    "multiline_description",
    "dir/test",
    "dir/sub",
    "dir/sub/test",
    "schema/basic",
    "schema/optional",
    "schema/nested",
    "schema/array",
    "enum",
    "enum_return",
    "enum_schema",
    "named_return",
    "nullable_return",
    "keyql",
    "decorated",
}


@pytest.mark.parametrize("relative, expected", [
    ("__main__.py", ""),
    ("test.py", "test"),
    ("dir/test.py", "dir/test"),
    ("dir/sub/__main__.py", "dir/sub"),
    ("a.b.py", "a.b"),
])
def test_definition_key(relative, expected):
    assert definition_key(relative, "__main__") == expected


def test_load_comprehensive(comprehensive):
    assert set(comprehensive) == COMPREHENSIVE_KEYS
    assert all(isinstance(definition, Definition) for definition in comprehensive.values())


def test_load_tree_with_ignore(parser, files_dir):
    definitions = parser.load(str(files_dir / "tree"), ignore=["ignoreme"])
    assert set(definitions) == {"", "test", "dir/test", "dir/sub"}
    assert definitions["dir/sub"].pathname == "dir/sub/__main__.py"


def test_load_ignore_accepts_extension(parser, files_dir):
    definitions = parser.load(str(files_dir / "ignore"), ignore=["ignoreme.py"])
    assert set(definitions) == {""}


def test_load_fails_on_invalid_file(parser, files_dir):
    with pytest.raises(DefinitionError) as excinfo:
        parser.load(str(files_dir / "ignore"))
    assert excinfo.value.pathname == "ignoreme.py"


def test_load_ignore_from_config(files_dir):
    parser = FunctionParser(ParserConfig(ignore=["ignoreme"]))
    definitions = parser.load(str(files_dir / "tree"))
    assert set(definitions) == {"", "test", "dir/test", "dir/sub"}


def test_load_merges_over_seed(parser, files_dir):
    seed = {
        "external": Definition(pathname="elsewhere.py"),
        "test": Definition(pathname="stale.py"),
    }
    definitions = parser.load(str(files_dir / "tree"), seed=seed, ignore=["ignoreme"])
    assert definitions["external"].pathname == "elsewhere.py"
    assert definitions["test"].pathname == "test.py"
    assert seed["test"].pathname == "stale.py"
    assert len(definitions) == 5


def test_load_missing_root(parser, tmp_path):
    with pytest.raises(FileNotFoundError):
        parser.load(str(tmp_path / "missing"))


def test_load_rejects_duplicate_keys(parser, tmp_path):
    (tmp_path / "dir").mkdir()
    (tmp_path / "dir" / "__main__.py").write_text("def main():\n    return None\n")
    (tmp_path / "dir.py").write_text("def main():\n    return None\n")
    with pytest.raises(DefinitionError) as excinfo:
        parser.load(str(tmp_path))
    assert "dir" in str(excinfo.value)


def test_load_skips_hidden_and_cache_entries(parser, tmp_path):
    (tmp_path / "visible.py").write_text("def main():\n    return None\n")
    (tmp_path / ".hidden.py").write_text("not python at all (")
    (tmp_path / "__pycache__").mkdir()
    (tmp_path / "__pycache__" / "visible.py").write_text("not python at all (")
    (tmp_path / "notes.txt").write_text("not python at all (")
    assert set(parser.load(str(tmp_path))) == {"visible"}


def test_load_custom_index_name(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "index.py").write_text("def main():\n    return None\n")
    parser = FunctionParser(ParserConfig(index_name="index"))
    assert set(parser.load(tmp_path)) == {"sub"}


def test_module_level_load(files_dir):
    definitions = load(str(files_dir / "tree"), ignore=["ignoreme"])
    assert "dir/sub" in definitions
