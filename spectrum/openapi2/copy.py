"""Copying Swagger 2.0 endpoints between specifications."""

from __future__ import annotations

import copy

from spectrum.openapi2.specification import Endpoint, Path, Specification

_COPY_METHODS = ("DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT")


def _has_tag(endpoint: Endpoint, want_tag: str) -> bool:
    return any(tag.strip() == want_tag for tag in endpoint.tags)


def copy_endpoints_by_tag(tag: str, spec_old: Specification, spec_new: Specification) -> Specification:
    """Copy endpoints carrying ``tag`` (all endpoints if blank) into ``spec_new`` and return it."""
    want_tag = tag.strip()
    for url, path in spec_old.paths.items():
        for method in _COPY_METHODS:
            endpoint = getattr(path, method.lower())
            if endpoint is None:
                continue
            if want_tag and not _has_tag(endpoint, want_tag):
                continue
            path_new = spec_new.paths.get(url)
            if path_new is None:
                path_new = Path()
            path_new.set_endpoint(method, copy.deepcopy(endpoint))
            spec_new.paths[url] = path_new
    return spec_new