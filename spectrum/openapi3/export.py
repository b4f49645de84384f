"""Exporting the operations of an OpenAPI 3 spec into one spec per tag."""

from __future__ import annotations

import contextlib
import json
from typing import Any, Mapping, Optional

from spectrum.openapi3.operation_more import OperationMore
from spectrum.openapi3.schemas import parse_json_pointer
from spectrum.openapi3.spec_more import SpecMore, SpecNotSetError


def export_by_tags(spec: Optional[dict]) -> dict[str, dict]:
    """Return a separate spec for every tag used by an operation."""
    if spec is None:
        raise SpecNotSetError()
    specs: dict[str, dict] = {}
    for tag in SpecMore(spec).tags(False, True):
        tag_spec = export_by_tag(spec, tag)
        if tag_spec is not None:
            specs[tag] = tag_spec
    return specs


def export_by_tag(spec: Optional[dict], tag: str) -> Optional[dict]:
    """Return a spec holding only the operations tagged ``tag``, or None if there are none."""
    if spec is None:
        raise SpecNotSetError()
    sm = SpecMore(spec)
    metas = sm.operation_metas([tag])
    if not metas:
        return None
    components = spec.get("components") or {}
    tag_components = {key: value for key, value in components.items() if key.startswith("x-")}
    if components.get("securitySchemes") is not None:
        tag_components["securitySchemes"] = components["securitySchemes"]
    tag_spec: dict[str, Any] = {"openapi": spec.get("openapi", ""), "components": tag_components}
    if spec.get("info") is not None:
        tag_spec["info"] = spec["info"]
    for meta in metas:
        op = sm.operation_by_path_method(meta.path, meta.method)
        if op is None:
            continue
        tag_spec.setdefault("paths", {}).setdefault(meta.path, {})[meta.method.lower()] = op
        schemas_copy_operation(spec, tag_spec, op)
    return json.loads(json.dumps(tag_spec))


def schemas_copy_operation(spec: Optional[dict], dest_spec: Optional[dict], op: Optional[dict]) -> None:
    """Copy the component parameters and schemas an operation references into ``dest_spec``."""
    if spec is None or dest_spec is None or op is None:
        raise ValueError("source spec, dest spec, op cannot be nil")
    src_params = (spec.get("components") or {}).get("parameters") or {}
    for pointer_text in OperationMore(operation=op).json_pointers():
        pointer = parse_json_pointer(pointer_text)
        param_name = pointer.is_top_parameter()
        if param_name is not None and param_name in src_params:
            components = dest_spec.setdefault("components", {})
            if components.get("parameters") is None:
                components["parameters"] = {}
            components["parameters"][param_name] = src_params[param_name]
        is_schema = pointer.is_top_schema() is not None
        if is_schema:
            schemas_copy_json_pointer(spec, dest_spec, pointer_text)
        if param_name is None and not is_schema:
            raise ValueError("pointer is not components/parameters or components/schemas")


def schemas_copy_schema_ref(spec: Optional[dict], dest_spec: Optional[dict], sch_ref: Optional[Mapping]) -> None:
    """Copy the schemas a schema references, recursively, into ``dest_spec``."""
    if spec is None or dest_spec is None or sch_ref is None:
        return
    ref = str(sch_ref.get("$ref") or "")
    if ref.strip():
        # A reference that cannot be copied is left as it is.
        with contextlib.suppress(ValueError, LookupError):
            schemas_copy_json_pointer(spec, dest_spec, ref)
        return
    items = sch_ref.get("items")
    if isinstance(items, Mapping):
        with contextlib.suppress(ValueError, LookupError):
            schemas_copy_schema_ref(spec, dest_spec, items)
    for prop in (sch_ref.get("properties") or {}).values():
        if isinstance(prop, Mapping):
            schemas_copy_schema_ref(spec, dest_spec, prop)


def schemas_copy_json_pointer(spec: dict, dest_spec: dict, json_pointer: str) -> None:
    """Copy the component schema at ``json_pointer`` and what it references into ``dest_spec``."""
    pointer = parse_json_pointer(json_pointer)
    schema_name = pointer.is_top_schema()
    if schema_name is None:
        raise ValueError("json pointer is not schema pointer")
    dest_sm = SpecMore(dest_spec)
    if dest_sm.schema_ref(schema_name) is not None:
        return
    src_schema = SpecMore(spec).schema_ref(schema_name)
    if src_schema is None:
        raise LookupError(f"json pointer not found [{json_pointer}][{schema_name}]")
    dest_sm.schema_ref_set(schema_name, src_schema)
    schemas_copy_schema_ref(spec, dest_spec, src_schema)