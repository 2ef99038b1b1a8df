from funcdoc.file_io.template_renderer import TemplateRenderer, tojson_filter
from funcdoc.template.doc_generator import DefinitionDocGenerator, render_definition


def test_render_parameters_and_returns(comprehensive):
    page = render_definition(comprehensive["test"], "test")
    assert page.startswith("# test\n")
    assert "Test function" in page
    assert "| `a` | boolean | yes |  | alpha |" in page
    assert "(boolean)" in page
    assert "- Source: `test.py`" in page
    assert "- Charge: 1" in page
    assert "- Context: yes" in page


def test_render_index_without_parameters(comprehensive):
    page = render_definition(comprehensive[""], "")
    assert page.startswith("# /\n")
    assert "This function takes no parameters." in page
    assert "- Context: no" in page
    assert "Keys" not in page


def test_render_defaults_as_json(comprehensive):
    page = render_definition(comprehensive["default"])
    assert page.startswith("# default.py\n")
    assert '| `name` | string | no | `"hello"` | A name |' in page
    assert '`{"result": {"a-string-key": 1, "1": "one"}}`' in page


def test_render_keys_and_charge(comprehensive):
    page = render_definition(comprehensive["dir/sub"], "dir/sub")
    assert "- Charge: 19" in page
    assert "- Keys: `TEST_KEY`, `TEST_KEY2`" in page


def test_render_nested_schema_rows(comprehensive):
    page = render_definition(comprehensive["schema/basic"], "schema/basic")
    assert "| &nbsp;&nbsp;└ `name` | string | yes |" in page
    assert "| &nbsp;&nbsp;&nbsp;&nbsp;└ `a` | string | yes |" in page


def test_render_enum_members(comprehensive):
    page = render_definition(comprehensive["enum"], "enum")
    assert "some basic types One of: `num`, `double`, `float`, `numstr`" in page


def test_render_named_nullable_return(comprehensive):
    page = render_definition(comprehensive["nullable_return"], "nullable_return")
    assert "`maybestring` (string, nullable): not sure" in page


def test_render_return_schema(comprehensive):
    page = render_definition(comprehensive["keyql"], "keyql")
    assert "(array): The matching records" in page
    assert "| `record` | object | yes |" in page
    assert "| &nbsp;&nbsp;└ `first_name` | string | yes |" in page


def test_render_all_is_keyed_and_sorted(comprehensive):
    pages = DefinitionDocGenerator().render_all(comprehensive)
    assert list(pages) == sorted(comprehensive)
    assert pages["enum"].startswith("# enum\n")


def test_render_with_custom_template_dir(tmp_path, comprehensive):
    (tmp_path / "definition.md.jinja2").write_text("{{ title }}:{{ charge }}")
    generator = DefinitionDocGenerator(TemplateRenderer(str(tmp_path)))
    assert generator.render(comprehensive["dir/sub"], "dir/sub") == "dir/sub:19"


def test_tojson_filter_encodes_bytes():
    assert tojson_filter({"data": b"hi"}) == '{"data": {"_base64": "aGk="}}'


def test_write_all_creates_nested_pages(tmp_path, comprehensive):
    written = DefinitionDocGenerator().write_all(comprehensive, str(tmp_path))
    assert len(written) == len(comprehensive)
    assert (tmp_path / "index.md").read_text().startswith("# /\n")
    assert (tmp_path / "dir" / "sub.md").read_text().startswith("# dir/sub\n")
    assert (tmp_path / "schema" / "basic.md").is_file()
