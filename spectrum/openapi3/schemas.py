"""JSON pointers and schema helpers for OpenAPI 3 documents held as dicts."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from spectrum.openapi3.common import _escape_pointer_token

POINTER_COMPONENTS_SCHEMAS = "#/components/schemas"

PATH_COMPONENTS = "components"
PATH_PARAMETERS = "parameters"
PATH_PATH = "path"
PATH_SCHEMAS = "schemas"


@dataclass
class JSONPointer:
    """A parsed JSON pointer: an optional document and a fragment path."""

    document: str = ""
    raw: str = ""
    path: list[str] = field(default_factory=list)

    def _top_component(self, kind: str) -> Optional[str]:
        if len(self.path) == 3 and self.path[0] == PATH_COMPONENTS and self.path[1] == kind:
            return self.path[2]
        return None

    def is_top_parameter(self) -> Optional[str]:
        """Return the parameter name if this points at a component parameter."""
        return self._top_component(PATH_PARAMETERS)

    def is_top_schema(self) -> Optional[str]:
        """Return the schema name if this points at a component schema."""
        return self._top_component(PATH_SCHEMAS)


def parse_json_pointer(s: str) -> JSONPointer:
    """Parse ``document#/a/b`` into a :class:`JSONPointer`."""
    parts = s.split("#")
    if len(parts) > 2:
        raise ValueError("too many # symbols for JSON Pointer")
    fragment = parts[1].strip("/") if len(parts) == 2 else ""
    return JSONPointer(
        document=parts[0],
        raw=s,
        path=fragment.split("/") if fragment else [],
    )


def schema_pointer_expand(prefix: str, schema_name: str) -> str:
    """Expand a schema name into a component schema pointer, with optional document prefix."""
    prefix = prefix.strip()
    schema_name = schema_name.strip()
    pointer = schema_name
    if POINTER_COMPONENTS_SCHEMAS not in schema_name:
        pointer = f"{POINTER_COMPONENTS_SCHEMAS}/{_escape_pointer_token(schema_name)}"
    if prefix and pointer.startswith("#"):
        pointer = prefix + pointer
    return pointer


def read_schema_file(filename: str) -> dict[str, Any]:
    """Read a JSON schema object from a file."""
    with open(filename, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"schema file [{filename}] does not hold a JSON object")
    return data


def copy_schema_standard(schema: dict[str, Any]) -> dict[str, Any]:
    """Deep-copy a schema, dropping its own ``x-`` extension properties."""
    copied = json.loads(json.dumps(schema))
    return {key: value for key, value in copied.items() if not key.startswith("x-")}