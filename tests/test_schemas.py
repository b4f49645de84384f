import json

import pytest

from spectrum.openapi3.schemas import (
    copy_schema_standard,
    parse_json_pointer,
    read_schema_file,
    schema_pointer_expand,
)


@pytest.mark.parametrize(
    "prefix,schema_name,want",
    [
        ("", "FooBar", "#/components/schemas/FooBar"),
        ("spec.json", "FooBar", "spec.json#/components/schemas/FooBar"),
        ("spec.json", "#/components/schemas/FooBar", "spec.json#/components/schemas/FooBar"),
    ],
)
def test_schema_pointer_expand(prefix, schema_name, want):
    assert schema_pointer_expand(prefix, schema_name) == want


def test_schema_pointer_expand_escapes_name():
    assert schema_pointer_expand("", "a/b~c") == "#/components/schemas/a~1b~0c"


def test_parse_schema_pointer():
    ptr = parse_json_pointer("spec.json#/components/schemas/FooBar")
    assert ptr.document == "spec.json"
    assert ptr.path == ["components", "schemas", "FooBar"]
    assert ptr.is_top_schema() == "FooBar"
    assert ptr.is_top_parameter() is None


def test_parse_parameter_pointer():
    ptr = parse_json_pointer("#/components/parameters/limit")
    assert ptr.document == ""
    assert ptr.is_top_parameter() == "limit"
    assert ptr.is_top_schema() is None


def test_parse_deep_pointer_is_not_top():
    ptr = parse_json_pointer("#/components/schemas/Foo/properties/bar")
    assert ptr.is_top_schema() is None


def test_parse_too_many_hashes():
    with pytest.raises(ValueError, match="too many #"):
        parse_json_pointer("a#b#c")


def test_copy_schema_standard_drops_extensions():
    schema = {
        "type": "object",
        "x-internal": True,
        "properties": {"name": {"type": "string", "x-keep": 1}},
    }
    copied = copy_schema_standard(schema)
    assert "x-internal" not in copied
    assert copied["properties"] == schema["properties"]
    copied["properties"]["name"]["type"] = "integer"
    assert schema["properties"]["name"]["type"] == "string"


def test_read_schema_file(tmp_path):
    schema = {"type": "object", "properties": {"id": {"type": "integer"}}}
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(schema), encoding="utf-8")
    assert read_schema_file(str(path)) == schema


def test_read_schema_file_rejects_non_object(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        read_schema_file(str(path))