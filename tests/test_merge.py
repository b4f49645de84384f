import json

import pytest

from spectrum.openapi3.merge import (
    MergeError,
    merge,
    merge_directory,
    merge_files,
    merge_parameters,
    merge_paths,
    merge_request_bodies,
    merge_responses,
    merge_schemas,
    merge_tags,
    write_file_dir_merge,
)
from spectrum.openapi3.merge_options import CollisionCheckResult, MergeOptions


def make_spec(paths=None, tags=None, components=None, version="1.0"):
    info = {"title": "Sample"}
    if version:
        info["version"] = version
    spec = {"openapi": "3.0.3", "info": info, "paths": paths or {}}
    if tags is not None:
        spec["tags"] = tags
    if components is not None:
        spec["components"] = components
    return spec


def write_json(path, spec):
    path.write_text(json.dumps(spec), encoding="utf-8")
    return str(path)


def test_merge_tags_appends_only_new_names():
    master = make_spec(tags=[{"name": "Alpha"}])
    extra = make_spec(tags=[{"name": "Alpha"}, {"name": " Beta "}])
    result = merge_tags(master, extra)
    assert [t["name"] for t in result["tags"]] == ["Alpha", "Beta"]


def test_merge_paths_adds_operations():
    master = make_spec(paths={"/a": {"get": {"operationId": "getA"}}})
    extra = make_spec(paths={"/a": {"post": {"operationId": "postA"}}, "/b": {"get": {"operationId": "getB"}}})
    result = merge_paths(master, extra)
    assert result["paths"]["/a"]["get"] == {"operationId": "getA"}
    assert result["paths"]["/a"]["post"] == {"operationId": "postA"}
    assert result["paths"]["/b"]["get"] == {"operationId": "getB"}


def test_merge_paths_identical_operation_is_not_a_collision():
    op = {"operationId": "getA", "summary": "x"}
    master = make_spec(paths={"/a": {"get": dict(op)}})
    result = merge_paths(master, make_spec(paths={"/a": {"get": dict(op)}}))
    assert result["paths"]["/a"]["get"] == op


def test_merge_paths_collision_raises():
    master = make_spec(paths={"/a": {"get": {"operationId": "getA"}}})
    extra = make_spec(paths={"/a": {"get": {"operationId": "other"}}})
    with pytest.raises(MergeError, match="E_OPERATION_COLLISION_GET"):
        merge_paths(master, extra)


def test_merge_parameters_collision_handling():
    p1 = {"name": "id", "in": "query"}
    p2 = {"name": "id", "in": "header"}
    extra = make_spec(components={"parameters": {"Id": p2, "New": p1}})

    with pytest.raises(MergeError, match="EXTRA_COMPONENTS_PARAMETER"):
        merge_parameters(make_spec(components={"parameters": {"Id": p1}}), extra, "note", None)

    skipped = merge_parameters(
        make_spec(components={"parameters": {"Id": p1}}),
        extra,
        "note",
        MergeOptions(collision_check_result=CollisionCheckResult.SKIP),
    )
    assert skipped["components"]["parameters"] == {"Id": p1, "New": p1}

    overwritten = merge_parameters(
        make_spec(components={"parameters": {"Id": p1}}),
        extra,
        "note",
        MergeOptions(collision_check_result=CollisionCheckResult.OVERWRITE),
    )
    assert overwritten["components"]["parameters"]["Id"] == p2


def test_merge_responses_collision_and_skip():
    r1 = {"description": "one"}
    r2 = {"description": "two"}
    extra = make_spec(components={"responses": {"R": r2}})
    with pytest.raises(MergeError, match="EXTRA_COMPONENTS_RESPONSE"):
        merge_responses(make_spec(components={"responses": {"R": r1}}), extra, "note", None)
    kept = merge_responses(
        make_spec(components={"responses": {"R": r1}}),
        extra,
        "note",
        MergeOptions(collision_check_result=CollisionCheckResult.SKIP),
    )
    assert kept["components"]["responses"]["R"] == r1


def test_merge_schemas_modes():
    s1 = {"type": "string"}
    s2 = {"type": "integer"}
    extra = make_spec(components={"schemas": {"S": s2}})

    default = merge_schemas(make_spec(components={"schemas": {"S": s1}}), extra, "note", None)
    assert default["components"]["schemas"]["S"] == s1

    with pytest.raises(MergeError, match="E_SCHEMA_COLLISION"):
        merge_schemas(
            make_spec(components={"schemas": {"S": s1}}),
            extra,
            "note",
            MergeOptions(collision_check_result=CollisionCheckResult.ERROR),
        )

    over = merge_schemas(
        make_spec(components={"schemas": {"S": s1}}),
        extra,
        "note",
        MergeOptions(collision_check_result=CollisionCheckResult.OVERWRITE),
    )
    assert over["components"]["schemas"]["S"] == s2


def test_merge_schemas_adds_into_spec_without_components():
    s = {"type": "object"}
    result = merge_schemas(make_spec(), make_spec(components={"schemas": {"Obj": s}}), "note", None)
    assert result["components"]["schemas"] == {"Obj": s}


def test_merge_request_bodies():
    b1 = {"content": {"application/json": {}}}
    b2 = {"content": {"text/plain": {}}}
    added = merge_request_bodies(make_spec(), make_spec(components={"requestBodies": {"B": b1}}), "n")
    assert added["components"]["requestBodies"]["B"] == b1
    with pytest.raises(MergeError, match="E_SCHEMA_COLLISION"):
        merge_request_bodies(
            make_spec(components={"requestBodies": {"B": b1}}),
            make_spec(components={"requestBodies": {"B": b2}}),
            "n",
        )


def test_merge_combines_everything():
    master = make_spec(paths={"/a": {"get": {"operationId": "getA"}}}, tags=[{"name": "A"}])
    extra = make_spec(
        paths={"/b": {"get": {"operationId": "getB"}}},
        tags=[{"name": "B"}],
        components={"schemas": {"S": {"type": "string"}}},
    )
    result = merge(master, extra, "extra", None)
    assert set(result["paths"]) == {"/a", "/b"}
    assert [t["name"] for t in result["tags"]] == ["A", "B"]
    assert result["components"]["schemas"]["S"] == {"type": "string"}


def test_merge_files_json_and_yaml(tmp_path):
    first = write_json(tmp_path / "a.json", make_spec(paths={"/a": {"get": {"operationId": "getA"}}}))
    second = tmp_path / "b.yaml"
    second.write_text(
        "openapi: 3.0.3\ninfo:\n  title: Sample\n  version: '1.0'\npaths:\n  /b:\n    get:\n      operationId: getB\n",
        encoding="utf-8",
    )
    result = merge_files([str(second), first], None)
    assert result["paths"]["/a"]["get"]["operationId"] == "getA"
    assert result["paths"]["/b"]["get"]["operationId"] == "getB"


def test_merge_files_errors(tmp_path):
    with pytest.raises(MergeError):
        merge_files([], None)
    with pytest.raises(MergeError, match="ReadSpecError"):
        merge_files([str(tmp_path / "missing.json")], None)
    invalid = write_json(tmp_path / "x.json", make_spec(version=""))
    with pytest.raises(MergeError, match="ValidateEach"):
        merge_files([invalid], MergeOptions(validate_each=True))


def test_merge_directory_counts_matching_files(tmp_path):
    write_json(tmp_path / "a.json", make_spec(paths={"/a": {"get": {"operationId": "getA"}}}))
    write_json(tmp_path / "b.json", make_spec(paths={"/b": {"get": {"operationId": "getB"}}}))
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    spec, num = merge_directory(str(tmp_path), None)
    assert num == 2
    assert set(spec["paths"]) == {"/a", "/b"}


def test_merge_directory_empty_raises(tmp_path):
    with pytest.raises(MergeError):
        merge_directory(str(tmp_path), None)


def test_write_file_dir_merge_round_trip(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    write_json(src / "a.json", make_spec(paths={"/a": {"get": {"operationId": "getA"}}}))
    out = tmp_path / "out.json"
    num = write_file_dir_merge(str(out), str(src), 0o644, None)
    assert num == 1
    written = json.loads(out.read_text(encoding="utf-8"))
    assert written["paths"]["/a"]["get"]["operationId"] == "getA"


def test_write_file_dir_merge_failure(tmp_path):
    with pytest.raises(MergeError, match="E_OPENAPI3_MERGE_DIRECTORY_FAILED"):
        write_file_dir_merge(str(tmp_path / "out.json"), str(tmp_path / "nope"), 0o644, None)