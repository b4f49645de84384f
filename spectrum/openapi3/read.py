"""Reading, parsing and light validation of OpenAPI 3 specs."""

from __future__ import annotations

import json
import re
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

_RX_YAML_EXTENSION = re.compile(r"(?i)\.ya?ml\s*$")
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _JSONCompatibleLoader(yaml.SafeLoader):
    """A safe loader that keeps dates as strings, as JSON would."""


_JSONCompatibleLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass
class ValidationStatus:
    status: bool = False
    message: str = ""
    context: str = ""
    openapi: str = ""


class SpecValidationError(ValueError):
    """Raised when a spec fails validation; carries the validation status."""

    def __init__(self, message: str, status: Optional[ValidationStatus] = None) -> None:
        super().__init__(message)
        self.status = status or ValidationStatus()


def _as_spec(data: Any, source: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"spec [{source}] is not an object")
    return data


def _load_yaml(data: bytes | str) -> Any:
    return yaml.load(data, Loader=_JSONCompatibleLoader)  # noqa: S506 - safe loader subclass


def parse(oas3_bytes: bytes | str) -> dict:
    """Parse a spec as JSON, falling back to YAML."""
    try:
        return _as_spec(json.loads(oas3_bytes), "data")
    except json.JSONDecodeError as json_err:
        try:
            data = _load_yaml(oas3_bytes)
        except yaml.YAMLError:
            raise ValueError(f"cannot parse spec: {json_err}") from json_err
        return _as_spec(data, "data")


def read_url(oas3url: str) -> dict:
    """Fetch and parse a spec from a URL."""
    with urllib.request.urlopen(oas3url) as resp:  # noqa: S310
        body = resp.read()
    return parse(body)


def read_file(oas3file: str, validate: bool) -> dict:
    """Read a spec file; validation is optional, which helps with partial specs."""
    if validate:
        return read_and_validate_file(oas3file)
    data = Path(oas3file).read_bytes()
    try:
        if _RX_YAML_EXTENSION.search(oas3file):
            loaded = _load_yaml(data)
        else:
            loaded = json.loads(data)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as err:
        raise ValueError(f"ReadFile.Unmarshal.Error.Filename [{oas3file}]: {err}") from err
    return _as_spec(loaded, oas3file)


def read_and_validate_file(oas3file: str) -> dict:
    """Read a spec file and check that it is usable."""
    data = Path(oas3file).read_bytes()
    try:
        spec = parse(data)
    except ValueError as err:
        raise SpecValidationError(f"E_OPENAPI3_SPEC_LOAD_VALIDATE_ERROR [{oas3file}]: {err}") from err
    validate_more(spec)
    return spec


def validate_more(spec: dict) -> ValidationStatus:
    """Check the spec has ``info.version``; raise :class:`SpecValidationError` if not."""
    info = spec.get("info") or {}
    version = str(info.get("version") or "").strip()
    if not version:
        info_json = json.dumps(info, indent=2)
        status = ValidationStatus(
            context="#/info",
            message=f"expect Object {info_json} to have key version\nmissing keys:version",
            openapi="3.0.0",
        )
        raise SpecValidationError("E_OPENAPI3_MISSING_KEY [info/version]", status)
    return ValidationStatus(status=True, openapi="3.0.0")