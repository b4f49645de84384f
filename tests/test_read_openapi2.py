import json

import pytest
import yaml

from spectrum.openapi2.read import filename_is_yaml, read_openapi2_spec_file
from spectrum.openapi2.specification import Specification

DATA = {
    "swagger": "2.0",
    "info": {"title": "Demo", "version": "1.0"},
    "paths": {"/pets": {"get": {"tags": ["Pets"], "operationId": "listPets"}}},
}


@pytest.mark.parametrize(
    "name, expected",
    [
        ("spec.yaml", True),
        ("SPEC.YML ", True),
        ("spec.json", False),
        ("spec.yaml.json", False),
    ],
)
def test_filename_is_yaml(name, expected):
    assert filename_is_yaml(name) is expected


def test_read_json_file(tmp_path):
    target = tmp_path / "spec.json"
    target.write_text(json.dumps(DATA), encoding="utf-8")
    spec = read_openapi2_spec_file(str(target))
    assert spec.to_dict() == DATA


def test_read_yaml_file(tmp_path):
    target = tmp_path / "spec.yaml"
    target.write_text(yaml.safe_dump(DATA), encoding="utf-8")
    spec = read_openapi2_spec_file(str(target))
    assert spec == Specification.from_dict(DATA)
    assert spec.paths["/pets"].get.operation_id == "listPets"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_openapi2_spec_file(str(tmp_path / "absent.json"))


def test_non_object_raises(tmp_path):
    target = tmp_path / "list.json"
    target.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        read_openapi2_spec_file(str(target))


def test_invalid_json_raises(tmp_path):
    target = tmp_path / "bad.json"
    target.write_text("{oops", encoding="utf-8")
    with pytest.raises(ValueError):
        read_openapi2_spec_file(str(target))