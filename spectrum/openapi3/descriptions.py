"""Reports on which parameters and schema properties lack descriptions."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from spectrum.openapi3.visit import iter_operations

DESC_STATUS_IS_EMPTY = 0
DESC_STATUS_IS_NOT_EMPTY = 1
DESC_STATUS_DEFAULT_SEP = " ~~~ "

StatusMap = dict[str, dict[str, int]]


def _inline(obj: Any) -> bool:
    return isinstance(obj, Mapping) and not str(obj.get("$ref") or "").strip()


def _status_of(obj: Mapping[str, Any]) -> int:
    desc = str(obj.get("description") or "").strip()
    return DESC_STATUS_IS_NOT_EMPTY if desc else DESC_STATUS_IS_EMPTY


def operation_parameters_description_status(spec: Mapping[str, Any]) -> StatusMap:
    """Map operationId -> parameter name -> 1 if described, 0 if not; refs are skipped."""
    status: StatusMap = {}
    for _path, _method, op in iter_operations(spec):
        for param in op.get("parameters") or []:
            if not _inline(param):
                continue
            op_id = str(op.get("operationId") or "")
            status.setdefault(op_id, {})[str(param.get("name") or "")] = _status_of(param)
    return status


def schema_properties_description_status(spec: Mapping[str, Any]) -> StatusMap:
    """Map schema name -> property name -> 1 if described, 0 if not; refs are skipped."""
    status: StatusMap = {}
    schemas = (spec.get("components") or {}).get("schemas") or {}
    for schema_name, schema in schemas.items():
        if not _inline(schema):
            continue
        for prop_name, prop in (schema.get("properties") or {}).items():
            if not _inline(prop):
                continue
            status.setdefault(schema_name, {})[prop_name] = _status_of(prop)
    return status


def _counts(status: StatusMap) -> tuple[int, int]:
    return len(status), sum(len(inner) for inner in status.values())


def _counts_with_val(status: StatusMap, value: int) -> tuple[int, int]:
    outer = sum(1 for inner in status.values() if value in inner.values())
    pairs = sum(1 for inner in status.values() for v in inner.values() if v == value)
    return outer, pairs


def _status_counts(status: StatusMap) -> tuple[int, int, int]:
    _, with_desc = _counts_with_val(status, DESC_STATUS_IS_NOT_EMPTY)
    _, without_desc = _counts_with_val(status, DESC_STATUS_IS_EMPTY)
    _, total = _counts(status)
    return with_desc, without_desc, total


def operation_parameters_description_status_counts(spec: Mapping[str, Any]) -> tuple[int, int, int]:
    """Return parameter counts (with description, without, all)."""
    return _status_counts(operation_parameters_description_status(spec))


def schema_properties_description_status_counts(spec: Mapping[str, Any]) -> tuple[int, int, int]:
    """Return property counts (with description, without, all)."""
    return _status_counts(schema_properties_description_status(spec))


def _flatten_missing(status: StatusMap, prefix: str, sep: str) -> list[str]:
    lines = {
        sep.join([prefix, outer, inner])
        for outer, inners in status.items()
        for inner, value in inners.items()
        if value == DESC_STATUS_IS_EMPTY
    }
    return sorted(lines)


def _write_report(status: StatusMap, filename: str, prefix: str, outer_label: str, inner_label: str) -> None:
    with_outer, with_inner = _counts_with_val(status, DESC_STATUS_IS_NOT_EMPTY)
    wout_outer, wout_inner = _counts_with_val(status, DESC_STATUS_IS_EMPTY)
    all_outer, all_inner = _counts(status)
    header = (
        f"{outer_label} Missing/Have/All [{wout_outer}/{with_outer}/{all_outer}] "
        f"{inner_label} Missing/Have/All [{wout_inner}/{with_inner}/{all_inner}]"
    )
    lines = [header, *_flatten_missing(status, prefix, "/")]
    Path(filename).write_text("\n".join(lines) + "\n", encoding="utf-8")


def operation_parameters_without_descriptions_write_file(spec: Mapping[str, Any], filename: str) -> None:
    _write_report(
        operation_parameters_description_status(spec), filename, "#/paths/...", "Operations", "Params"
    )


def schema_properties_without_descriptions_write_file(spec: Mapping[str, Any], filename: str) -> None:
    _write_report(
        schema_properties_description_status(spec), filename, "#/components/schemas", "Schemas", "Props"
    )