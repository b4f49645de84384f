"""Walking the operations and typed values of an OpenAPI 3 dict."""

from __future__ import annotations

from typing import Any, Callable, Iterator, Mapping, Optional

from spectrum.openapi3.common import HTTP_METHODS, _escape_pointer_token

VisitOp = Callable[[str, str, dict], None]


def _value(ref_or_value: Any) -> Optional[dict]:
    """Return the inline object, or None for a ``$ref`` or missing entry."""
    if not isinstance(ref_or_value, Mapping) or "$ref" in ref_or_value:
        return None
    return ref_or_value


def _iter_path_item(path: str, path_item: Optional[Mapping[str, Any]]) -> Iterator[tuple[str, str, dict]]:
    if not path_item:
        return
    for method in HTTP_METHODS:
        op = path_item.get(method.lower())
        if op is not None:
            yield path, method, op


def iter_operations(spec: Mapping[str, Any]) -> Iterator[tuple[str, str, dict]]:
    """Yield ``(path, METHOD, operation)`` for every operation in the spec."""
    for path, path_item in (spec.get("paths") or {}).items():
        yield from _iter_path_item(path, path_item)


def visit_operations_path_item(path: str, path_item: Optional[Mapping[str, Any]], visit_op: VisitOp) -> None:
    for op_path, method, op in _iter_path_item(path, path_item):
        visit_op(op_path, method, op)


def visit_operations(spec: Mapping[str, Any], visit_op: VisitOp) -> None:
    for path, method, op in iter_operations(spec):
        visit_op(path, method, op)


def _schema_of(param_ref: Any) -> Optional[dict]:
    param = _value(param_ref)
    if param is None:
        return None
    return _value(param.get("schema"))


def visit_types_formats(
    spec: Mapping[str, Any], visit_type_format: Callable[[str, str, str], None]
) -> None:
    """Report the type and format found at each schema property and parameter."""
    components = spec.get("components") or {}
    for schema_name, schema_ref in (components.get("schemas") or {}).items():
        schema = _value(schema_ref)
        if schema is None:
            continue
        for prop_name, prop_ref in (schema.get("properties") or {}).items():
            prop = _value(prop_ref)
            if prop is None:
                continue
            visit_type_format(
                f"#/components/schemas/{schema_name}/properties/{prop_name}",
                prop.get("type", ""),
                prop.get("format", ""),
            )
    for param_name, param_ref in (components.get("parameters") or {}).items():
        schema = _schema_of(param_ref)
        if schema is None:
            continue
        visit_type_format(
            f"#/components/parameters/{param_name}",
            schema.get("type", ""),
            schema.get("format", ""),
        )
    for path, method, op in iter_operations(spec):
        for index, param_ref in enumerate(op.get("parameters") or []):
            schema = _schema_of(param_ref)
            if schema is None:
                continue
            pointer = "#/paths/{}/{}/parameters/{}/schema".format(
                _escape_pointer_token(path),
                _escape_pointer_token(method.lower()),
                index,
            )
            visit_type_format(pointer, schema.get("type", ""), schema.get("format", ""))