"""Counting Swagger 2.0 endpoints, overall and by tag."""

from __future__ import annotations

import csv
from typing import Iterable, Mapping, Optional

from spectrum.openapi2.specification import Endpoint, Specification
from spectrum.openapi3.common import _condense_space

HistogramSet = dict[str, dict[str, int]]

_COUNT_METHODS = ("GET", "PATCH", "PUT", "POST", "DELETE")
_ENDPOINT_COUNT_METHODS = ("GET", "PATCH", "POST", "PUT", "DELETE")


def _add_endpoint(
    hist: HistogramSet, tags_filter: list[str], url: str, method: str, ep: Optional[Endpoint]
) -> None:
    if ep is None:
        return
    endpoint = f"{method.strip().upper()} {url.strip()}"
    for tag in ep.tags:
        tag = tag.strip()
        if tags_filter and tag not in tags_filter:
            continue
        if tag:
            bins = hist.setdefault(tag, {})
            bins[endpoint] = bins.get(endpoint, 0) + 1


def count_endpoints_by_tag(spec: Specification, tags_filter: Optional[Iterable[str]]) -> HistogramSet:
    """Return tag -> ``"METHOD path"`` -> count, limited to ``tags_filter`` if non-empty."""
    wanted = _condense_space(tags_filter or [], dedupe=True, sort=True)
    hist: HistogramSet = {}
    for url, path in spec.paths.items():
        for method in _COUNT_METHODS:
            _add_endpoint(hist, wanted, url, method, getattr(path, method.lower()))
    return hist


def write_endpoint_count_csv(filename: str, hset: Mapping[str, Mapping[str, int]]) -> None:
    """Write one row per tag and endpoint with the tag's endpoint count."""
    with open(filename, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["Tag", "Tag Endpoint Count", "Method", "Path"])
        for tag_name in sorted(hset):
            bins = hset[tag_name]
            for endpoint in sorted(bins):
                parts = endpoint.split(" ")
                if len(parts) >= 2:
                    writer.writerow([tag_name, str(len(bins)), parts[0].upper(), " ".join(parts[1:])])


def endpoint_count(spec: Specification) -> int:
    """Return the number of distinct non-empty endpoints in a specification."""
    endpoints = set()
    for url, path in spec.paths.items():
        url = url.strip()
        for method in _ENDPOINT_COUNT_METHODS:
            ep = getattr(path, method.lower())
            if ep is not None and not ep.is_empty():
                endpoints.add(f"{method} {url}")
    return len(endpoints)