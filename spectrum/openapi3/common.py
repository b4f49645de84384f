"""OpenAPI 3 constants, path-method identifiers and server URL joining."""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

TYPE_ARRAY = "array"
TYPE_BOOLEAN = "boolean"
TYPE_INTEGER = "integer"
TYPE_OBJECT = "object"
TYPE_STRING = "string"
FORMAT_DATE = "date"
FORMAT_DATE_TIME = "date-time"
FORMAT_INT32 = "int32"
FORMAT_INT64 = "int64"

PROPERTY_OPERATION_ID = "operationId"
PROPERTY_SUMMARY = "summary"
PROPERTY_TAGS = "tags"

IN_HEADER = "header"
IN_QUERY = "query"
IN_COOKIE = "cookie"

# Operation methods of a path item, in the order they are visited.
HTTP_METHODS = (
    "CONNECT",
    "DELETE",
    "GET",
    "HEAD",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
    "TRACE",
)

_RX_SLASHES = re.compile(r"(?<!:)/{2,}")


class PathMethodInvalidError(ValueError):
    """Raised when a path-method string is not of the form ``<path> <METHOD>``."""

    def __init__(self, value: str = "") -> None:
        super().__init__(f"pathmethod string invalid [{value}]")


def _parse_http_method(method: str) -> str:
    canonical = method.strip().upper()
    if canonical not in HTTP_METHODS:
        raise ValueError(f"method [{method}] not supported")
    return canonical


def _condense_space(items: Iterable[str], dedupe: bool, sort: bool) -> list[str]:
    """Trim items, drop empty ones, optionally dedupe and sort."""
    out: list[str] = []
    seen: set[str] = set()
    for item in items:
        text = item.strip()
        if not text:
            continue
        if dedupe:
            if text in seen:
                continue
            seen.add(text)
        out.append(text)
    if sort:
        out.sort()
    return out


def _escape_pointer_token(token: str) -> str:
    """Escape a JSON pointer reference token."""
    return token.replace("~", "~0").replace("/", "~1")


def _condense_uri(uri: str) -> str:
    return _RX_SLASHES.sub("/", uri)


def path_method(op_path: str, op_method: str) -> str:
    """Return a ``"<path> <METHOD>"`` identifier for an operation."""
    parts = [op_path.strip(), op_method.strip().upper()]
    return " ".join(part for part in parts if part)


def parse_path_method(pathmethod: str) -> tuple[str, str]:
    """Split a path-method string into its path and canonical method."""
    parts = pathmethod.split(" ")
    if len(parts) != 2:
        raise PathMethodInvalidError(pathmethod)
    return parts[0].strip(), _parse_http_method(parts[1])


@dataclass
class PathMethodSet:
    """A counted set of path-method identifiers."""

    path_methods: Counter = field(default_factory=Counter)

    def add(self, *pathmethods: str) -> None:
        for pm in pathmethods:
            op_path, op_method = parse_path_method(pm)
            self.path_methods[path_method(op_path, op_method)] += 1

    def count(self) -> int:
        return len(self.path_methods)

    def exists(self, op_path: str, op_method: str) -> bool:
        return path_method(op_path, op_method) in self.path_methods

    def string_exists(self, path_method: str) -> bool:
        return path_method in self.path_methods


def build_api_url_oas(spec_server_url: str, override_server_url: str, spec_path: str) -> str:
    """Join a server URL, optionally overridden, with a spec path."""
    override = override_server_url.strip()
    server = override if override else spec_server_url.strip()
    return _condense_uri("/".join([server, spec_path.strip()]))