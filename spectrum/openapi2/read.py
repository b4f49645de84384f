"""Reading Swagger 2.0 specification files in JSON or YAML."""

from __future__ import annotations

import json
import re
from pathlib import Path

from spectrum.openapi2.specification import Specification
from spectrum.openapi3.read import _load_yaml

_RX_YAML_EXTENSION = re.compile(r".ya?ml$")


def filename_is_yaml(filename: str) -> bool:
    """Report whether a filename ends in ``.yml`` or ``.yaml``, ignoring case."""
    return _RX_YAML_EXTENSION.search(filename.strip().lower()) is not None


def read_openapi2_spec_file(filename: str) -> Specification:
    """Read a Swagger 2.0 spec file, as YAML if its name says so, else as JSON."""
    data = Path(filename).read_bytes()
    if filename_is_yaml(filename):
        loaded = _load_yaml(data)
    else:
        loaded = json.loads(data)
    if not isinstance(loaded, dict):
        raise ValueError(f"spec file [{filename}] does not hold an object")
    return Specification.from_dict(loaded)