"""Helpers for inspecting a single OpenAPI 3 operation held as a dict."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from spectrum.openapi3.common import _condense_space, path_method
from spectrum.openapi3.extensions import get_extension_prop_string_or_empty

LOCATION_PARAMETER = "parameter"
LOCATION_REQUEST = "request"
LOCATION_RESPONSE = "response"


def _ref(obj: Any) -> str:
    if isinstance(obj, Mapping):
        return str(obj.get("$ref") or "")
    return ""


def _content_media_types(content: Any) -> list[str]:
    if not isinstance(content, Mapping):
        return []
    return [media_type.strip() for media_type in content if media_type.strip()]


def security_requirements_to_raw(sec_reqs: Any) -> list[dict[str, list[str]]]:
    """Return a plain copy of security requirements for iteration."""
    raw = json.loads(json.dumps(sec_reqs))
    if not isinstance(raw, list):
        raise ValueError("security requirements must be a list")
    result: list[dict[str, list[str]]] = []
    for requirement in raw:
        if not isinstance(requirement, dict):
            raise ValueError(f"invalid security requirement [{requirement!r}]")
        result.append(
            {str(name): [str(scope) for scope in scopes or []] for name, scopes in requirement.items()}
        )
    return result


@dataclass
class OperationMore:
    """An operation together with the path and method it lives at."""

    path: str = ""
    method: str = ""
    operation: Optional[dict] = None

    def has_parameter(self, param_name_want: str) -> bool:
        """Report whether an inline parameter has this name, ignoring case."""
        want = param_name_want.strip().lower()
        for param in (self.operation or {}).get("parameters") or []:
            if not isinstance(param, Mapping) or "$ref" in param:
                continue
            if str(param.get("name") or "").strip().lower() == want:
                return True
        return False

    def path_method(self) -> str:
        return path_method(self.path, self.method)

    def request_media_types(self) -> list[str]:
        """Return the sorted request body media types."""
        op = self.operation
        if op is None:
            return []
        body = op.get("requestBody")
        if not isinstance(body, Mapping) or "$ref" in body:
            return []
        return sorted(_content_media_types(body.get("content")))

    def response_media_types(self) -> list[str]:
        """Return the sorted media types of all responses."""
        op = self.operation
        if op is None:
            return []
        media_types: list[str] = []
        for response in (op.get("responses") or {}).values():
            if not isinstance(response, Mapping) or "$ref" in response:
                continue
            media_types.extend(_content_media_types(response.get("content")))
        return sorted(media_types)

    def json_pointers(self) -> dict[str, list[str]]:
        """Map each JSON pointer the operation references to the locations using it."""
        refs: dict[str, list[str]] = {}
        op = self.operation
        if op is None:
            return refs

        def add(ref: str, location: str) -> None:
            refs.setdefault(ref, []).append(location)

        for param in op.get("parameters") or []:
            if not isinstance(param, Mapping):
                continue
            if _ref(param):
                add(_ref(param), LOCATION_PARAMETER)
                continue
            schema = param.get("schema")
            if not isinstance(schema, Mapping):
                continue
            if _ref(schema):
                add(_ref(schema), LOCATION_PARAMETER)
            elif _ref(schema.get("items")):
                add(_ref(schema.get("items")), LOCATION_PARAMETER)

        def add_content(container: Mapping[str, Any], location: str) -> None:
            for media_type in (container.get("content") or {}).values():
                if not isinstance(media_type, Mapping):
                    continue
                ref = _ref(media_type.get("schema"))
                if ref.strip():
                    add(ref, location)

        body = op.get("requestBody")
        if isinstance(body, Mapping):
            if _ref(body):
                add(_ref(body), LOCATION_REQUEST)
            else:
                add_content(body, LOCATION_REQUEST)

        for response in (op.get("responses") or {}).values():
            if not isinstance(response, Mapping):
                continue
            if _ref(response):
                add(_ref(response), LOCATION_RESPONSE)
            else:
                add_content(response, LOCATION_RESPONSE)

        return {ref: _condense_space(locations, dedupe=True, sort=True) for ref, locations in refs.items()}

    def security_scopes(self, fully_qualified: bool) -> list[str]:
        """Return a flat list of the operation's security scopes."""
        op = self.operation
        if op is None or op.get("security") is None:
            return []
        scopes_out: list[str] = []
        for requirement in security_requirements_to_raw(op["security"]):
            for scheme_name, scopes in requirement.items():
                if fully_qualified:
                    scheme = scheme_name.strip()
                    scopes_out.extend(f"{scheme}.{scope.strip()}" for scope in scopes if scope.strip())
                else:
                    scopes_out.extend(scopes)
        return _condense_space(scopes_out, dedupe=True, sort=False)

    def extension_prop_string_or_empty(self, key: str) -> str:
        if self.operation is None:
            return ""
        return get_extension_prop_string_or_empty(self.operation, key)


@dataclass
class OperationMoreSet:
    operation_mores: list[OperationMore] = field(default_factory=list)

    def summaries_map(self) -> dict[str, str]:
        """Map each operation's path-method to its summary."""
        return {
            om.path_method(): str((om.operation or {}).get("summary") or "")
            for om in self.operation_mores
        }