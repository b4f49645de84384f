"""Swagger 2.0 specification model with JSON-compatible conversion."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Sequence

# Value kinds used to convert fields to and from plain JSON data.
_STR = "str"
_BOOL = "bool"
_STRS = "strs"
_STRMAP = "strmap"
_ANY = "any"
_OBJ = "obj"
_OBJS = "objs"
_OBJMAP = "objmap"


def _prop(json_name: str, kind: str, cls: Any = None, *, default: Any = None, factory: Any = None) -> Any:
    meta = {"json": json_name, "kind": kind, "cls": cls}
    if factory is not None:
        return field(default_factory=factory, metadata=meta)
    return field(default=default, metadata=meta)


def _str(json_name: str) -> Any:
    return _prop(json_name, _STR, default="")


def _decode(meta: Mapping[str, Any], value: Any) -> Any:
    kind, cls, name = meta["kind"], meta["cls"], meta["json"]
    if kind == _STR:
        if not isinstance(value, str):
            raise ValueError(f"field [{name}] must be a string")
        return value
    if kind == _BOOL:
        if not isinstance(value, bool):
            raise ValueError(f"field [{name}] must be a boolean")
        return value
    if kind == _STRS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"field [{name}] must be a list of strings")
        return list(value)
    if kind == _STRMAP:
        if not isinstance(value, Mapping) or not all(isinstance(v, str) for v in value.values()):
            raise ValueError(f"field [{name}] must be a map of strings")
        return {str(k): v for k, v in value.items()}
    if kind == _ANY:
        return copy.deepcopy(value)
    if kind == _OBJ:
        return cls.from_dict(value)
    if kind == _OBJS:
        if not isinstance(value, list):
            raise ValueError(f"field [{name}] must be a list")
        return [cls.from_dict(v) for v in value]
    if kind == _OBJMAP:
        if not isinstance(value, Mapping):
            raise ValueError(f"field [{name}] must be an object")
        return {str(k): cls.from_dict(v) for k, v in value.items()}
    raise ValueError(f"unknown field kind [{kind}]")


def _omitted(kind: str, value: Any) -> bool:
    if value is None:
        return True
    if kind in (_OBJ, _ANY):
        return False
    return not value


def _encode(kind: str, value: Any) -> Any:
    if kind == _OBJ:
        return value.to_dict()
    if kind == _OBJS:
        return [v.to_dict() for v in value]
    if kind == _OBJMAP:
        return {k: v.to_dict() for k, v in value.items()}
    return copy.deepcopy(value)


class _Model:
    """Conversion between dataclass models and plain JSON data."""

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]):
        """Build an instance from JSON data; unknown keys are ignored."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"{cls.__name__} must be built from an object")
        kwargs = {}
        for f in fields(cls):
            name = f.metadata["json"]
            value = data.get(name)
            if value is not None:
                kwargs[f.name] = _decode(f.metadata, value)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return JSON data, leaving out empty values."""
        out: dict[str, Any] = {}
        for f in fields(self):
            kind = f.metadata["kind"]
            value = getattr(self, f.name)
            if not _omitted(kind, value):
                out[f.metadata["json"]] = _encode(kind, value)
        return out


@dataclass
class Schema(_Model):
    ref: str = _str("$ref")


@dataclass
class Header(_Model):
    type: str = _str("type")
    description: str = _str("description")


@dataclass
class Items(_Model):
    type: str = _str("type")
    ref: str = _str("$ref")

    def is_empty(self) -> bool:
        return not self.type.strip() and not self.ref.strip()


@dataclass
class Property(_Model):
    description: str = _str("description")
    format: str = _str("format")
    items: Optional[Items] = _prop("items", _OBJ, Items)
    type: str = _str("type")
    ref: str = _str("$ref")


@dataclass
class Definition(_Model):
    type: str = _str("type")
    properties: dict[str, Property] = _prop("properties", _OBJMAP, Property, factory=dict)


@dataclass
class Response(_Model):
    description: str = _str("description")
    schema: Optional[Schema] = _prop("schema", _OBJ, Schema)
    headers: dict[str, Header] = _prop("headers", _OBJMAP, Header, factory=dict)
    examples: dict[str, str] = _prop("examples", _STRMAP, factory=dict)


@dataclass
class Parameter(_Model):
    name: str = _str("name")
    type: str = _str("type")
    in_: str = _str("in")
    description: str = _str("description")
    schema: Optional[Schema] = _prop("schema", _OBJ, Schema)
    required: bool = _prop("required", _BOOL, default=False)
    collection_format: str = _str("collectionFormat")
    items: Optional[Items] = _prop("items", _OBJ, Items)
    default: Any = _prop("default", _ANY)
    x_examples: dict[str, str] = _prop("x-examples", _STRMAP, factory=dict)


@dataclass
class XAmazonApigatewayIntegrationResponse(_Model):
    status_code: str = _str("statusCode")
    response_parameters: dict[str, str] = _prop("responseParameters", _STRMAP, factory=dict)
    response_templates: dict[str, str] = _prop("responseTemplates", _STRMAP, factory=dict)


@dataclass
class XAmazonApigatewayIntegration(_Model):
    responses: dict[str, XAmazonApigatewayIntegrationResponse] = _prop(
        "responses", _OBJMAP, XAmazonApigatewayIntegrationResponse, factory=dict
    )
    passthrough_behavior: str = _str("passthroughBehavior")
    request_templates: dict[str, str] = _prop("requestTemplates", _STRMAP, factory=dict)
    type: str = _str("type")


@dataclass
class Endpoint(_Model):
    tags: list[str] = _prop("tags", _STRS, factory=list)
    summary: str = _str("summary")
    operation_id: str = _str("operationId")
    description: str = _str("description")
    consumes: list[str] = _prop("consumes", _STRS, factory=list)
    produces: list[str] = _prop("produces", _STRS, factory=list)
    parameters: list[Parameter] = _prop("parameters", _OBJS, Parameter, factory=list)
    responses: dict[str, Response] = _prop("responses", _OBJMAP, Response, factory=dict)
    x_amazon_apigateway_integration: Optional[XAmazonApigatewayIntegration] = _prop(
        "x-amazon-apigateway-integration", _OBJ, XAmazonApigatewayIntegration
    )

    def is_empty(self) -> bool:
        """Report whether the endpoint carries no descriptive content."""
        return not (
            self.tags
            or self.summary
            or self.operation_id
            or self.description
            or self.consumes
            or self.produces
            or self.parameters
            or self.responses
        )


_TAGGED_METHODS = ("GET", "PATCH", "POST", "PUT", "DELETE")
_SETTABLE_METHODS = ("DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT")


@dataclass
class Path(_Model):
    delete: Optional[Endpoint] = _prop("delete", _OBJ, Endpoint)
    get: Optional[Endpoint] = _prop("get", _OBJ, Endpoint)
    head: Optional[Endpoint] = _prop("head", _OBJ, Endpoint)
    options: Optional[Endpoint] = _prop("options", _OBJ, Endpoint)
    patch: Optional[Endpoint] = _prop("patch", _OBJ, Endpoint)
    post: Optional[Endpoint] = _prop("post", _OBJ, Endpoint)
    put: Optional[Endpoint] = _prop("put", _OBJ, Endpoint)
    ref: str = _str("$ref")

    def has_method_with_tag(self, method: str) -> bool:
        """Report whether the GET, PATCH, POST, PUT or DELETE endpoint has a non-blank first tag."""
        method = method.strip().upper()
        if method not in _TAGGED_METHODS:
            return False
        endpoint = getattr(self, method.lower())
        return endpoint is not None and bool(endpoint.tags) and bool(endpoint.tags[0].strip())

    def set_endpoint(self, method: str, endpoint: Endpoint) -> None:
        canonical = method.strip().upper()
        if canonical not in _SETTABLE_METHODS:
            raise ValueError(f"method [{method}] not supported")
        setattr(self, canonical.lower(), endpoint)


@dataclass
class ExternalDocs(_Model):
    description: str = _str("description")
    url: str = _str("url")


@dataclass
class Tag(_Model):
    name: str = _str("name")
    description: str = _str("description")
    external_docs: Optional[ExternalDocs] = _prop("externalDocs", _OBJ, ExternalDocs)


@dataclass
class Info(_Model):
    description: str = _str("description")
    version: str = _str("version")
    title: str = _str("title")
    terms_of_service: str = _str("termsOfService")


@dataclass
class XAmazonApigatewayDocumentationPartLocation(_Model):
    type: str = _str("type")
    method: str = _str("method")
    path: str = _str("path")
    status_code: str = _str("statusCode")
    name: str = _str("name")


@dataclass
class XAmazonApigatewayDocumentationPartInfo(_Model):
    description: str = _str("description")


@dataclass
class XAmazonApigatewayDocumentationPartProperties(_Model):
    tags: list[str] = _prop("tags", _STRS, factory=list)
    summary: str = _str("summary")
    description: str = _str("description")
    info: Optional[XAmazonApigatewayDocumentationPartInfo] = _prop(
        "info", _OBJ, XAmazonApigatewayDocumentationPartInfo
    )


@dataclass
class DocumentationPart(_Model):
    location: XAmazonApigatewayDocumentationPartLocation = _prop(
        "location", _OBJ, XAmazonApigatewayDocumentationPartLocation,
        factory=XAmazonApigatewayDocumentationPartLocation,
    )
    properties: XAmazonApigatewayDocumentationPartProperties = _prop(
        "properties", _OBJ, XAmazonApigatewayDocumentationPartProperties,
        factory=XAmazonApigatewayDocumentationPartProperties,
    )


@dataclass
class XAmazonApigatewayDocumentation(_Model):
    version: str = _str("version")
    created_date: str = _str("createdDate")
    documentation_parts: list[DocumentationPart] = _prop(
        "documentationParts", _OBJS, DocumentationPart, factory=list
    )


@dataclass
class Specification(_Model):
    """A Swagger 2.0 specification."""

    swagger: str = _str("swagger")
    host: str = _str("host")
    info: Optional[Info] = _prop("info", _OBJ, Info)
    base_path: str = _str("basePath")
    schemes: list[str] = _prop("schemes", _STRS, factory=list)
    tags: list[Tag] = _prop("tags", _OBJS, Tag, factory=list)
    paths: dict[str, Path] = _prop("paths", _OBJMAP, Path, factory=dict)
    definitions: dict[str, Definition] = _prop("definitions", _OBJMAP, Definition, factory=dict)
    x_amazon_apigateway_documentation: Optional[XAmazonApigatewayDocumentation] = _prop(
        "x-amazon-apigateway-documentation", _OBJ, XAmazonApigatewayDocumentation
    )

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Specification":
        """Build a specification from JSON data; unknown keys are ignored."""
        return super().from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Return the specification as JSON data, leaving out empty values."""
        return super().to_dict()


def new_specification_from_bytes(data: bytes | str) -> Specification:
    """Parse a JSON document into a :class:`Specification`."""
    return Specification.from_dict(json.loads(data))


def get_json_body_parameter_example_for_key(params: Sequence[Parameter], example_key: str) -> str:
    """Return the ``x-examples`` entry for a key from the first body parameter."""
    example_key = example_key.strip()
    if not example_key:
        raise ValueError("exampleKey is empty")
    for param in params:
        if param.in_.strip().lower() != "body":
            continue
        if not param.x_examples:
            raise KeyError(f"no `x-examples` in param name [{param.name}]")
        if example_key not in param.x_examples:
            raise KeyError(f"no `x-examples` key [{example_key}] in param name [{param.name}]")
        return param.x_examples[example_key]
    raise LookupError(f"no `in=body` param in [{len(params)}] count params")