"""Summary records for OpenAPI 3 operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from spectrum.openapi3.common import _condense_space


@dataclass
class OperationMeta:
    """Additional information held for a spec operation."""

    operation_id: str = ""
    docs_description: str = ""
    docs_url: str = ""
    method: str = ""
    path: str = ""
    security_scopes: list[str] = field(default_factory=list)
    summary: str = ""
    tags: list[str] = field(default_factory=list)
    meta_notes: list[str] = field(default_factory=list)
    x_throttling_group: str = ""

    def trim_space(self) -> None:
        self.operation_id = self.operation_id.strip()
        self.docs_url = self.docs_url.strip()
        self.docs_description = self.docs_description.strip()
        self.security_scopes = _condense_space(self.security_scopes, dedupe=True, sort=False)
        self.tags = _condense_space(self.tags, dedupe=True, sort=False)
        self.x_throttling_group = self.x_throttling_group.strip()


def operation_to_meta(
    url: str,
    method: str,
    op: Optional[Mapping[str, Any]],
    incl_tags: Optional[Iterable[str]],
) -> Optional[OperationMeta]:
    """Build an :class:`OperationMeta`, or None if an input is empty or no tag matches."""
    if not url or not method or op is None:
        return None
    wanted = set(incl_tags or [])
    op_tags = list(op.get("tags") or [])
    if wanted and not any(tag in wanted for tag in op_tags):
        return None
    return OperationMeta(
        operation_id=(op.get("operationId") or "").strip(),
        summary=(op.get("summary") or "").strip(),
        method=method.strip().upper(),
        path=url.strip(),
        tags=op_tags,
        meta_notes=[],
    )