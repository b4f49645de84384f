"""Queries, edits and serialisation for an OpenAPI 3 spec held as a dict."""

from __future__ import annotations

import copy
import json
import os
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlsplit

import yaml

from spectrum.openapi3.common import (
    HTTP_METHODS,
    _condense_space,
    _parse_http_method,
    path_method,
)
from spectrum.openapi3.operation_meta import OperationMeta, operation_to_meta
from spectrum.openapi3.operation_more import OperationMore, OperationMoreSet
from spectrum.openapi3.read import read_file
from spectrum.openapi3.schemas import POINTER_COMPONENTS_SCHEMAS, parse_json_pointer
from spectrum.openapi3.visit import iter_operations

OAS_VERSION_LATEST = "3.1.0"
OAS_VERSION_DEFAULT = "3.0.3"
API_VERSION_DEFAULT = "0.0.1"

_RX_SCHEMAS = re.compile(r'"([^"]*#/components/schemas/([^"]+))"')


class SpecNotSetError(ValueError):
    """Raised when an operation needs a spec but none is set."""

    def __init__(self, message: str = "spec not set") -> None:
        super().__init__(message)


class OperationNotFoundError(LookupError):
    """Raised when an operation cannot be found."""


def new_spec(oas_version: str, api_title: str, api_version: str) -> dict:
    """Return a minimal spec with an OAS version, an info object and an API version."""
    oas_version = oas_version.strip() or OAS_VERSION_LATEST
    api_version = api_version.strip() or API_VERSION_DEFAULT
    return {
        "openapi": oas_version,
        "info": {"title": api_title.strip(), "version": api_version},
        "paths": {},
    }


def read_spec_more(path: str, validate: bool) -> "SpecMore":
    """Read a spec file and wrap it in a :class:`SpecMore`."""
    return SpecMore(read_file(path, validate))


def _write_file(filename: str, data: bytes, perm: int) -> None:
    fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
    with os.fdopen(fd, "wb") as fh:
        fh.write(data)


@dataclass
class SpecStats:
    operations_count: int = 0
    schemas_count: int = 0


@dataclass
class SpecTagCounts:
    ops_with_tags: int = 0
    ops_without_tags: int = 0
    ops_total: int = 0


@dataclass
class SpecTagStats:
    tag_stats: SpecTagCounts = field(default_factory=SpecTagCounts)
    tags_all: list[str] = field(default_factory=list)
    tags_meta: list[str] = field(default_factory=list)
    tags_ops: list[str] = field(default_factory=list)
    tag_counts_all: dict[str, int] = field(default_factory=dict)
    tag_counts_meta: dict[str, int] = field(default_factory=dict)
    tag_counts_ops: dict[str, int] = field(default_factory=dict)


@dataclass
class TagsMore:
    tags: list[dict] = field(default_factory=list)

    def get(self, tag_name: str) -> Optional[dict]:
        """Return the first tag with this exact name, or None."""
        for tag in self.tags:
            if tag is not None and tag.get("name") == tag_name:
                return tag
        return None


@dataclass
class SpecMore:
    """A spec together with queries over it."""

    spec: Optional[dict] = None

    # -- internal helpers -------------------------------------------------

    def _require_spec(self) -> dict:
        if self.spec is None:
            raise SpecNotSetError()
        return self.spec

    def _schemas(self) -> dict:
        if self.spec is None:
            return {}
        return (self.spec.get("components") or {}).get("schemas") or {}

    def _ops(self):
        if self.spec is None:
            return iter(())
        return iter_operations(self.spec)

    # -- copying and counts -----------------------------------------------

    def clone(self) -> Optional[dict]:
        """Return a deep copy of the spec, or None if no spec is set."""
        if self.spec is None:
            return None
        return json.loads(json.dumps(self.spec))

    def schemas_count(self) -> int:
        if self.spec is None:
            return -1
        return len(self._schemas())

    def operations(self, incl_tags: Optional[Iterable[str]]) -> Optional[OperationMoreSet]:
        """Return operations, limited to those carrying one of ``incl_tags`` if given."""
        if self.spec is None:
            return None
        wanted = set(incl_tags or [])
        result = OperationMoreSet()
        for op_path, method, op in self._ops():
            if not wanted or any(tag in wanted for tag in op.get("tags") or []):
                result.operation_mores.append(OperationMore(path=op_path, method=method, operation=op))
        return result

    def operation_metas(self, incl_tags: Optional[Iterable[str]]) -> list[OperationMeta]:
        if self.spec is None:
            return []
        tags = list(incl_tags or [])
        metas = []
        for url, path_item in (self.spec.get("paths") or {}).items():
            if not path_item:
                continue
            for method in HTTP_METHODS:
                meta = operation_to_meta(url, method, path_item.get(method.lower()), tags)
                if meta is not None:
                    metas.append(meta)
        return metas

    def operations_count(self) -> int:
        if self.spec is None:
            return -1
        return sum(1 for _ in self._ops())

    def operation_counts_by_tag(self) -> dict[str, int]:
        """Return the number of operations carrying each tag."""
        return self.tags_map(False, True)

    def operation_ids(self) -> list[str]:
        ids = [str(op.get("operationId") or "") for _, _, op in self._ops() if op is not None]
        return _condense_space(ids, dedupe=False, sort=True)

    def operation_ids_counts(self) -> dict[str, int]:
        return dict(Counter(str(op.get("operationId") or "") for _, _, op in self._ops()))

    def operation_ids_locations(self) -> dict[str, list[str]]:
        """Map each operationId to the path-methods using it, to spot duplicates."""
        locations: dict[str, list[str]] = {}
        for op_path, method, op in self._ops():
            if op is None:
                continue
            op_id = str(op.get("operationId") or "").strip()
            locations.setdefault(op_id, []).append(path_method(op_path, method))
        return locations

    def operation_by_id(self, want_operation_id: str) -> tuple[str, str, dict]:
        """Return ``(path, METHOD, operation)`` for an operationId; the last match wins."""
        want = want_operation_id.strip()
        found: Optional[tuple[str, str, dict]] = None
        for op_path, method, op in self._ops():
            if op is not None and str(op.get("operationId") or "").strip() == want:
                found = (op_path, method, op)
        if found is None:
            raise OperationNotFoundError(f"operation_not_found [{want}]")
        return found

    def operation_by_path_method(self, path: str, method: str) -> Optional[dict]:
        """Return the operation at a path and method, or None if the path is absent."""
        method = _parse_http_method(method)
        spec = self._require_spec()
        path_item = (spec.get("paths") or {}).get(path)
        if path_item is None:
            return None
        return path_item.get(method.lower())

    def set_operation(self, path: str, method: str, op: Optional[dict]) -> None:
        spec = self._require_spec()
        path = path.strip()
        if not path.startswith("/"):
            path = "/" + path
        paths = spec.get("paths")
        if paths is None:
            paths = spec["paths"] = {}
        path_item = paths.get(path)
        if path_item is None:
            path_item = {}
        method = method.strip().upper()
        if method in HTTP_METHODS:
            path_item[method.lower()] = op
        paths[path] = path_item

    # -- schemas ------------------------------------------------------------

    def schema_names(self) -> list[str]:
        return _condense_space(self._schemas().keys(), dedupe=True, sort=True)

    def schema_pointers(self, dedupe: bool) -> tuple[list[str], list[str]]:
        """Return the schema pointers used anywhere in the spec and their schema names."""
        text = self.marshal_json("", "").decode("utf-8")
        pointers, names = [], []
        for match in _RX_SCHEMAS.finditer(text):
            pointers.append(match.group(1))
            names.append(match.group(2))
        return (
            _condense_space(pointers, dedupe=dedupe, sort=True),
            _condense_space(names, dedupe=dedupe, sort=True),
        )

    def schema_names_status(self) -> tuple[list[str], list[str], list[str]]:
        """Return (defined but unreferenced, both, referenced but undefined) schema names."""
        have_names = set(self.schema_names())
        _, pointer_names = self.schema_pointers(True)
        have_pointers = set(pointer_names)
        return (
            sorted(have_names - have_pointers),
            sorted(have_names & have_pointers),
            sorted(have_pointers - have_names),
        )

    def schema_name_exists(self, schema_name: str, include_nil: bool) -> bool:
        schemas = self._schemas()
        if schema_name not in schemas:
            return False
        if include_nil:
            return True
        return schemas[schema_name] is not None

    def schema_ref(self, schema_name: str) -> Optional[dict]:
        """Return a component schema by name or JSON pointer, or None."""
        if self.spec is None:
            return None
        if POINTER_COMPONENTS_SCHEMAS in schema_name:
            try:
                pointer = parse_json_pointer(schema_name)
            except ValueError:
                return None
            name = pointer.is_top_schema()
            if name is None:
                return None
            schema_name = name
        return self._schemas().get(schema_name)

    def schema_ref_set(self, schema_name: str, schema_ref: Optional[dict]) -> None:
        spec = self._require_spec()
        components = spec.get("components")
        if components is None:
            components = spec["components"] = {}
        schemas = components.get("schemas")
        if schemas is None:
            schemas = components["schemas"] = {}
        schemas[schema_name.strip()] = schema_ref

    # -- servers ------------------------------------------------------------

    def server_url(self, index: int) -> str:
        """Return the trimmed URL of the server at ``index``, or ``""``."""
        servers = self._require_spec().get("servers") or []
        if index + 1 > len(servers):
            return ""
        return str((servers[index] or {}).get("url") or "").strip()

    def server_url_base_path(self, index: int) -> str:
        """Return the path part of a server URL, which may contain variables."""
        server_url = self.server_url(index)
        if not server_url:
            return ""
        return urlsplit(server_url).path

    # -- descriptions and tags -------------------------------------------------

    def operations_description_info(self) -> dict[str, list[str]]:
        data: dict[str, list[str]] = {
            "opWithDesc": [],
            "opWoutDesc": [],
            "opWithDescCount": [],
            "opWoutDescCount": [],
        }
        for op_path, method, op in self._ops():
            if op is None:
                continue
            key = "opWithDesc" if str(op.get("description") or "").strip() else "opWoutDesc"
            data[key].append(path_method(op_path, method))
        data["opWithDescCount"].append(str(len(data["opWithDesc"])))
        data["opWoutDescCount"].append(str(len(data["opWoutDesc"])))
        return data

    def spec_tag_stats(self) -> SpecTagStats:
        stats = SpecTagStats(
            tags_all=self.tags(True, True),
            tags_meta=self.tags(True, False),
            tags_ops=self.tags(False, True),
            tag_counts_all=self.tags_map(True, True),
            tag_counts_meta=self.tags_map(True, False),
            tag_counts_ops=self.tags_map(False, True),
        )
        for _, _, op in self._ops():
            stats.tag_stats.ops_total += 1
            if _condense_space(op.get("tags") or [], dedupe=True, sort=True):
                stats.tag_stats.ops_with_tags += 1
            else:
                stats.tag_stats.ops_without_tags += 1
        return stats

    def tags(self, incl_top: bool, incl_ops: bool) -> list[str]:
        return _condense_space(self.tags_map(incl_top, incl_ops).keys(), dedupe=True, sort=True)

    def tags_map(self, incl_top: bool, incl_ops: bool) -> dict[str, int]:
        """Map tag names to the number of operations using them."""
        counts: dict[str, int] = {}
        if incl_top and self.spec is not None:
            for tag in self.spec.get("tags") or []:
                name = str((tag or {}).get("name") or "").strip()
                if name:
                    counts.setdefault(name, 0)
        if incl_ops:
            for _, _, op in self._ops():
                for name in op.get("tags") or []:
                    name = name.strip()
                    if name:
                        counts[name] = counts.get(name, 0) + 1
        return counts

    def stats(self) -> SpecStats:
        return SpecStats(operations_count=self.operations_count(), schemas_count=self.schemas_count())

    # -- inspection -----------------------------------------------------------

    def extension_names(self) -> dict[str, int]:
        """Count the ``x-`` extensions used by inline component schemas."""
        counts: Counter = Counter()
        for schema in self._schemas().values():
            if not isinstance(schema, Mapping) or "$ref" in schema:
                continue
            counts.update(key for key in schema if key.startswith("x-"))
        return dict(counts)

    def has_component_schema(self, component_schema_name: str, case_insensitive: bool) -> bool:
        name = component_schema_name.strip()
        if case_insensitive:
            name = name.lower()
        schemas = self._schemas()
        if not schemas:
            return False
        if name in schemas:
            return True
        if case_insensitive:
            return any(try_name.strip().casefold() == name.casefold() for try_name in schemas)
        return False

    def component_request_body(self, component_path: str) -> Optional[dict]:
        """Return the request body at ``#/components/requestBodies/<name>``, or None."""
        parts = component_path.strip().split("/")
        if (
            len(parts) != 4
            or parts[0] != "#"
            or parts[1] != "components"
            or parts[2] != "requestBodies"
            or not parts[3]
        ):
            return None
        bodies = (self._require_spec().get("components") or {}).get("requestBodies") or {}
        return bodies.get(parts[3])

    def status_codes_histogram(self) -> dict[str, dict[str, dict[str, int]]]:
        """Return path -> method -> response status code -> count."""
        hist: dict[str, dict[str, dict[str, int]]] = {}
        for op_path, method, op in self._ops():
            responses = (op or {}).get("responses") or {}
            for status in responses:
                bins = hist.setdefault(op_path, {}).setdefault(method, {})
                bins[status] = bins.get(status, 0) + 1
        return hist

    # -- serialisation ----------------------------------------------------------

    def marshal_json(self, prefix: str, indent: str) -> bytes:
        """Serialise the spec; any prefix or indent selects two-space pretty output."""
        spec = self._require_spec()
        if prefix or indent:
            text = json.dumps(spec, sort_keys=True, indent=2, ensure_ascii=False)
        else:
            text = json.dumps(spec, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        return text.encode("utf-8")

    def marshal_yaml(self) -> bytes:
        data = json.loads(self.marshal_json("", ""))
        return yaml.safe_dump(data, sort_keys=True, allow_unicode=True).encode("utf-8")

    def print_json(self, prefix: str, indent: str) -> None:
        print(self.marshal_json(prefix, indent).decode("utf-8"))

    def write_file_json(self, filename: str, perm: int, prefix: str, indent: str) -> None:
        _write_file(filename, self.marshal_json(prefix, indent), perm)

    def write_file_yaml(self, filename: str, perm: int) -> None:
        _write_file(filename, self.marshal_yaml(), perm)

    def __deepcopy__(self, memo: dict) -> "SpecMore":
        return SpecMore(copy.deepcopy(self.spec, memo))