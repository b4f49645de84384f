"""Merging several OpenAPI 3 specs, held as dicts, into one."""

from __future__ import annotations

import json
import os
import re
from typing import Any, Iterable, Optional

from spectrum.openapi3.common import HTTP_METHODS
from spectrum.openapi3.merge_options import CollisionCheckResult, MergeOptions
from spectrum.openapi3.read import parse, read_file
from spectrum.openapi3.spec_more import SpecMore, _write_file

_DEFAULT_FILE_RX = re.compile(r"(?i)\.(json|yaml|yml)\s*$")
_OPERATION_KEYS = tuple(method.lower() for method in HTTP_METHODS)
_MISSING = object()


class MergeError(ValueError):
    """Raised when specs cannot be read or merged."""


def _read_dir_files(dir_path: str, rx: re.Pattern | str) -> list[str]:
    """Return sorted paths of the non-empty files in a directory whose names match ``rx``."""
    pattern = re.compile(rx) if isinstance(rx, str) else rx
    found = []
    with os.scandir(dir_path) as entries:
        for entry in entries:
            if not entry.is_file() or not pattern.search(entry.name):
                continue
            if entry.stat().st_size == 0:
                continue
            found.append(os.path.join(dir_path, entry.name))
    return sorted(found)


def _component_map(spec: dict, kind: str) -> dict:
    return (spec.get("components") or {}).get(kind) or {}


def _set_component(spec: dict, kind: str, name: str, value: Any) -> None:
    if spec.get("components") is None:
        spec["components"] = {}
    components = spec["components"]
    if components.get(kind) is None:
        components[kind] = {}
    components[kind][name] = value


def merge_directory(dir_path: str, merge_opts: Optional[MergeOptions]) -> tuple[dict, int]:
    """Merge the spec files of a directory; return the spec and the number of files."""
    rx = merge_opts.file_rx if merge_opts is not None and merge_opts.file_rx is not None else _DEFAULT_FILE_RX
    filenames = _read_dir_files(dir_path, rx)
    if not filenames:
        raise MergeError(f"no spec files found in directory [{dir_path}]")
    return merge_files(filenames, merge_opts), len(filenames)


def merge_files(filepaths: Iterable[str], merge_opts: Optional[MergeOptions]) -> dict:
    """Read and merge spec files in sorted order."""
    validate_each = False
    validate_final = True
    if merge_opts is not None:
        validate_each = merge_opts.validate_each
        validate_final = merge_opts.validate_final
    spec_master: Optional[dict] = None
    for fpath in sorted(filepaths):
        try:
            this_spec = read_file(fpath, validate_each)
        except (OSError, ValueError) as err:
            raise MergeError(f"ReadSpecError [{fpath}] ValidateEach [{validate_each}]: {err}") from err
        if spec_master is None:
            spec_master = this_spec
        else:
            try:
                spec_master = merge(spec_master, this_spec, fpath, merge_opts)
            except MergeError as err:
                raise MergeError(f"Merging [{fpath}]: {err}") from err
    if spec_master is None:
        raise MergeError("no spec files to merge")
    if validate_final:
        try:
            return parse(json.dumps(spec_master))
        except ValueError as err:
            raise MergeError(f"reloading merged spec (MergeFiles().ValidateFinal): {err}") from err
    return spec_master


def merge(spec_master: dict, spec_extra: dict, spec_extra_note: str, merge_opts: Optional[MergeOptions]) -> dict:
    """Merge ``spec_extra`` into ``spec_master`` and return the master."""
    spec_master = merge_tags(spec_master, spec_extra)
    spec_master = merge_parameters(spec_master, spec_extra, spec_extra_note, merge_opts)
    spec_master = merge_schemas(spec_master, spec_extra, spec_extra_note, merge_opts)
    spec_master = merge_paths(spec_master, spec_extra)
    spec_master = merge_responses(spec_master, spec_extra, spec_extra_note, merge_opts)
    return merge_request_bodies(spec_master, spec_extra, spec_extra_note)


def merge_tags(spec_master: dict, spec_extra: dict) -> dict:
    """Append the extra spec's tags whose names the master does not already have."""
    master_tags = list(spec_master.get("tags") or [])
    known = {(tag or {}).get("name") for tag in master_tags}
    appended = False
    for tag in spec_extra.get("tags") or []:
        if tag is None:
            continue
        tag = {**tag, "name": str(tag.get("name") or "").strip()}
        if tag["name"] not in known:
            master_tags.append(tag)
            appended = True
    if appended or "tags" in spec_master:
        spec_master["tags"] = master_tags
    return spec_master


def merge_paths(spec_master: dict, spec_extra: dict) -> dict:
    """Add the extra spec's operations; differing operations at one path and method collide."""
    if spec_master.get("paths") is None:
        spec_master["paths"] = {}
    master_paths = spec_master["paths"]
    for url, path_item in (spec_extra.get("paths") or {}).items():
        if master_paths.get(url) is None:
            master_paths[url] = {}
        master_item = master_paths[url]
        for key in _OPERATION_KEYS:
            extra_op = (path_item or {}).get(key)
            if extra_op is None:
                continue
            if master_item.get(key) is None:
                master_item[key] = extra_op
            elif master_item[key] != extra_op:
                raise MergeError(
                    f"E_OPERATION_COLLISION_{key.upper()} [{extra_op.get('operationId', '')}]"
                )
    return spec_master


def merge_parameters(
    spec_master: dict, spec_extra: dict, spec_extra_note: str, merge_opts: Optional[MergeOptions]
) -> dict:
    opts = merge_opts or MergeOptions()
    for name, extra in _component_map(spec_extra, "parameters").items():
        if extra is None:
            continue
        master = _component_map(spec_master, "parameters").get(name, _MISSING)
        if master is _MISSING or master is None:
            _set_component(spec_master, "parameters", name, extra)
        elif opts.collision_check_result == CollisionCheckResult.SKIP or extra == master:
            continue
        elif opts.collision_check_result == CollisionCheckResult.OVERWRITE:
            _set_component(spec_master, "parameters", name, extra)
        else:
            raise MergeError(
                f"E_SCHEMA_COLLISION [{spec_extra_note}] EXTRA_COMPONENTS_PARAMETER [{name}]"
            )
    return spec_master


def merge_responses(
    spec_master: dict, spec_extra: dict, spec_extra_note: str, merge_opts: Optional[MergeOptions]
) -> dict:
    opts = merge_opts or MergeOptions()
    for name, extra in _component_map(spec_extra, "responses").items():
        if extra is None:
            continue
        master = _component_map(spec_master, "responses").get(name, _MISSING)
        if master is _MISSING or master is None:
            _set_component(spec_master, "responses", name, extra)
        elif opts.collision_check_result == CollisionCheckResult.SKIP or extra == master:
            continue
        else:
            raise MergeError(
                f"E_SCHEMA_COLLISION [{spec_extra_note}] EXTRA_COMPONENTS_RESPONSE [{name}]"
            )
    return spec_master


def merge_schemas(
    spec_master: dict, spec_extra: dict, spec_extra_note: str, merge_opts: Optional[MergeOptions]
) -> dict:
    opts = merge_opts or MergeOptions()
    for name, extra in _component_map(spec_extra, "schemas").items():
        if extra is None:
            continue
        master = _component_map(spec_master, "schemas").get(name, _MISSING)
        if master is _MISSING or master is None:
            _set_component(spec_master, "schemas", name, extra)
            continue
        result = opts.check_schema_collision(name, master, extra, spec_extra_note)
        if result == CollisionCheckResult.SAME or opts.collision_check_result == CollisionCheckResult.SKIP:
            continue
        if opts.collision_check_result == CollisionCheckResult.OVERWRITE:
            _set_component(spec_master, "schemas", name, extra)
        elif opts.collision_check_result == CollisionCheckResult.ERROR:
            raise MergeError(f"E_SCHEMA_COLLISION [{name}] EXTRA_SPEC [{spec_extra_note}]")
    return spec_master


def merge_request_bodies(spec_master: dict, spec_extra: dict, spec_extra_note: str) -> dict:
    for name, extra in _component_map(spec_extra, "requestBodies").items():
        if extra is None:
            continue
        master = _component_map(spec_master, "requestBodies").get(name, _MISSING)
        if master is _MISSING or master is None:
            _set_component(spec_master, "requestBodies", name, extra)
        elif master != extra:
            raise MergeError(f"E_SCHEMA_COLLISION [{name}] EXTRA_SPEC [{spec_extra_note}]")
    return spec_master


def write_file_dir_merge(outfile: str, input_dir: str, perm: int, merge_opts: Optional[MergeOptions]) -> int:
    """Merge a directory of specs into one JSON file; return the number of files merged."""
    try:
        spec, num = merge_directory(input_dir, merge_opts)
    except (OSError, MergeError) as err:
        raise MergeError(f"E_OPENAPI3_MERGE_DIRECTORY_FAILED: {err}") from err
    try:
        _write_file(outfile, SpecMore(spec).marshal_json("", ""), perm)
    except OSError as err:
        raise MergeError(f"E_OPENAPI3_WRITE_FAILED: {err}") from err
    return num