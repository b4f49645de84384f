import pytest

from spectrum.openapi3.operation_more import (
    LOCATION_PARAMETER,
    LOCATION_REQUEST,
    LOCATION_RESPONSE,
    OperationMore,
    OperationMoreSet,
    security_requirements_to_raw,
)


def make_op():
    return {
        "operationId": "listUsers",
        "summary": "List users",
        "x-throttling-group": "Light",
        "parameters": [
            {"$ref": "#/components/parameters/Limit"},
            {"name": "userId", "in": "path", "schema": {"$ref": "#/components/schemas/Id"}},
            {"name": "tags", "in": "query", "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Tag"}}},
        ],
        "requestBody": {
            "content": {
                "application/xml": {"schema": {"$ref": "#/components/schemas/User"}},
                "application/json": {"schema": {"$ref": "#/components/schemas/User"}},
                " ": {},
            }
        },
        "responses": {
            "200": {"content": {"text/plain": {}, "application/json": {"schema": {"$ref": "#/components/schemas/Id"}}}},
            "404": {"$ref": "#/components/responses/NotFound"},
        },
        "security": [{"oauth": ["read", " write", ""]}, {"openid": ["read"]}],
    }


def test_has_parameter_ignores_case_and_space():
    om = OperationMore(operation=make_op())
    assert om.has_parameter(" USERID ") is True
    assert om.has_parameter("limit") is False


def test_path_method():
    om = OperationMore(path="/users", method="get", operation=make_op())
    assert om.path_method() == "/users GET"


def test_request_media_types_sorted_and_trimmed():
    om = OperationMore(operation=make_op())
    assert om.request_media_types() == ["application/json", "application/xml"]


def test_response_media_types_sorted():
    om = OperationMore(operation=make_op())
    assert om.response_media_types() == ["application/json", "text/plain"]


def test_media_types_without_operation():
    om = OperationMore()
    assert om.request_media_types() == []
    assert om.response_media_types() == []


def test_json_pointers():
    om = OperationMore(operation=make_op())
    assert om.json_pointers() == {
        "#/components/parameters/Limit": [LOCATION_PARAMETER],
        "#/components/schemas/Id": [LOCATION_PARAMETER, LOCATION_RESPONSE],
        "#/components/schemas/Tag": [LOCATION_PARAMETER],
        "#/components/schemas/User": [LOCATION_REQUEST],
        "#/components/responses/NotFound": [LOCATION_RESPONSE],
    }


def test_json_pointers_without_operation():
    assert OperationMore().json_pointers() == {}


def test_security_scopes_fully_qualified():
    om = OperationMore(operation=make_op())
    assert om.security_scopes(True) == ["oauth.read", "oauth.write", "openid.read"]


def test_security_scopes_plain_dedupes():
    om = OperationMore(operation=make_op())
    assert om.security_scopes(False) == ["read", "write"]


def test_security_scopes_without_security():
    assert OperationMore(operation={"operationId": "x"}).security_scopes(True) == []


def test_security_requirements_to_raw_is_a_copy():
    original = [{"oauth": ["read"]}]
    raw = security_requirements_to_raw(original)
    raw[0]["oauth"].append("write")
    assert original == [{"oauth": ["read"]}]
    assert raw[0]["oauth"] == ["read", "write"]


def test_security_requirements_to_raw_rejects_non_list():
    with pytest.raises(ValueError):
        security_requirements_to_raw({"oauth": ["read"]})


def test_extension_prop_string_or_empty():
    om = OperationMore(operation=make_op())
    assert om.extension_prop_string_or_empty("x-throttling-group") == "Light"
    assert om.extension_prop_string_or_empty("x-missing") == ""
    assert OperationMore().extension_prop_string_or_empty("x-throttling-group") == ""


def test_summaries_map():
    oms = OperationMoreSet(
        [
            OperationMore(path="/users", method="get", operation={"summary": "List users"}),
            OperationMore(path="/users", method="post", operation={"summary": "Create user"}),
        ]
    )
    assert oms.summaries_map() == {"/users GET": "List users", "/users POST": "Create user"}