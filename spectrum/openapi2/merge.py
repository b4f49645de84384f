"""Merging several Swagger 2.0 specifications into one."""

from __future__ import annotations

import copy
import json
import re
from typing import Iterable

from spectrum.openapi2.read import read_openapi2_spec_file
from spectrum.openapi2.specification import Specification
from spectrum.openapi3.merge import _read_dir_files
from spectrum.openapi3.spec_more import _write_file

_JSON_FILE_RX = re.compile(r"(?i)\.json\s*$")


def merge_directory(dir_path: str) -> Specification:
    """Merge the non-empty JSON spec files of a directory, in name order."""
    filepaths = _read_dir_files(dir_path, _JSON_FILE_RX)
    if not filepaths:
        raise ValueError(f"no JSON files found in directory [{dir_path}]")
    spec_master = Specification()
    for i, fpath in enumerate(filepaths):
        this_spec = read_openapi2_spec_file(fpath)
        spec_master = this_spec if i == 0 else merge(spec_master, this_spec)
    return spec_master


def merge_filepaths(filepaths: Iterable[str]) -> Specification:
    """Merge the given spec files in the order given."""
    spec_master = Specification()
    for i, fpath in enumerate(filepaths):
        print(f"[{i}][{fpath}]")
        try:
            this_spec = read_openapi2_spec_file(fpath)
        except (OSError, ValueError) as err:
            raise ValueError(f"E_READ_SPEC [{fpath}]: {err}") from err
        spec_master = this_spec if i == 0 else merge(spec_master, this_spec)
    return spec_master


def merge(spec_master: Specification, spec_extra: Specification) -> Specification:
    """Merge tags, paths and definitions of ``spec_extra`` into ``spec_master``."""
    spec_master = merge_tags(spec_master, spec_extra)
    spec_master = merge_paths(spec_master, spec_extra)
    return merge_definitions(spec_master, spec_extra)


def merge_tags(spec_master: Specification, spec_extra: Specification) -> Specification:
    """Append extra tags whose trimmed names the master does not have."""
    known = {tag.name for tag in spec_master.tags}
    for tag in spec_extra.tags:
        tag = copy.deepcopy(tag)
        tag.name = tag.name.strip()
        if tag.name not in known:
            spec_master.tags.append(tag)
    return spec_master


def merge_paths(spec_master: Specification, spec_extra: Specification) -> Specification:
    """Copy the extra paths into the master, replacing paths with the same URL."""
    for url, path in spec_extra.paths.items():
        spec_master.paths[url] = path
    return spec_master


def merge_definitions(spec_master: Specification, spec_extra: Specification) -> Specification:
    """Copy the extra definitions into the master, replacing those with the same name."""
    for name, definition in spec_extra.definitions.items():
        spec_master.definitions[name] = definition
    return spec_master


def write_file_dir_merge(outfile: str, input_dir: str, perm: int) -> None:
    """Merge a directory of JSON specs and write the result as indented JSON."""
    try:
        spec = merge_directory(input_dir)
    except (OSError, ValueError) as err:
        raise ValueError(f"E_OPENAPI3_MERGE_DIRECTORY_FAILED: {err}") from err
    data = json.dumps(spec.to_dict(), indent=2).encode("utf-8")
    try:
        _write_file(outfile, data, perm)
    except OSError as err:
        raise ValueError(f"E_OPENAPI3_WRITE_FAILED: {err}") from err