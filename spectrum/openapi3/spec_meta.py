"""Validity records for sets of spec files, and merging the valid ones."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from spectrum.openapi3.merge import _read_dir_files, merge_files
from spectrum.openapi3.merge_options import MergeOptions
from spectrum.openapi3.read import read_file
from spectrum.openapi3.spec_more import SpecMore


@dataclass
class SpecMeta:
    filepath: str = ""
    version: int = 0
    is_valid: bool = False
    validation_error: str = ""


@dataclass
class SpecMetas:
    metas: list[SpecMeta] = field(default_factory=list)

    def filepaths(self, valid_only: bool) -> list[str]:
        """Return the trimmed, non-empty file paths, optionally only valid ones."""
        files = []
        for meta in self.metas:
            if valid_only and not meta.is_valid:
                continue
            path = meta.filepath.strip()
            if path:
                files.append(path)
        return files

    def merge(self, validates_only: bool, merge_opts: Optional[MergeOptions]) -> SpecMore:
        return merge_spec_metas(self, validates_only, merge_opts)


def read_spec_metas_dir(dir_path: str, rx: re.Pattern | str) -> SpecMetas:
    """Validate every file in a directory whose name matches ``rx``."""
    return read_spec_metas_files(_read_dir_files(dir_path, rx))


def read_spec_metas_files(files: Iterable[str]) -> SpecMetas:
    """Validate each file and record the outcome."""
    metas = SpecMetas()
    for filename in files:
        meta = SpecMeta(filepath=filename, version=3)
        try:
            read_file(filename, True)
        except (OSError, ValueError) as err:
            meta.validation_error = str(err)
        else:
            meta.is_valid = True
        metas.metas.append(meta)
    return metas


def merge_spec_metas(metas: SpecMetas, validates_only: bool, merge_opts: Optional[MergeOptions]) -> SpecMore:
    return SpecMore(merge_files(metas.filepaths(validates_only), merge_opts))