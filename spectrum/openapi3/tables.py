"""Tabular views of the operations of an OpenAPI 3 spec."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from spectrum.openapi3.extensions import get_extension_prop_string_or_empty, tag_groups
from spectrum.openapi3.operation_more import OperationMore
from spectrum.openapi3.visit import iter_operations

_X_TAG_GROUPS = "x-tag-groups"
_X_THROTTLING_GROUP = "x-throttling-group"

OpFilter = Callable[[str, str, dict], bool]


@dataclass
class Column:
    display: str = ""
    slug: str = ""
    width: int = 0


@dataclass
class ColumnSet:
    columns: list[Column] = field(default_factory=list)

    def display_texts(self) -> list[str]:
        return [column.display for column in self.columns]


@dataclass
class Table:
    name: str = ""
    columns: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def to_documents(self) -> list[dict[str, str]]:
        """Return each row as a mapping of column name to value."""
        return [dict(zip(self.columns, row)) for row in self.rows]

    def write_csv(self, filename: str) -> None:
        with open(filename, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(self.columns)
            writer.writerows(self.rows)


def op_table_columns_default(incl_docs_url: bool) -> ColumnSet:
    columns = [
        Column("Tags", "tags", 150),
        Column("Method", "method", 70),
        Column("Path", "path", 800),
        Column("OperationID", "operationId", 150),
        Column("Summary", "summary", 150),
        Column("SecurityScopes", "securityScopes", 150),
        Column("XThrottlingGroup", _X_THROTTLING_GROUP, 150),
    ]
    if incl_docs_url:
        columns.append(Column("DocsURL", "docsURL", 150))
    return ColumnSet(columns)


def op_table_columns_extended() -> ColumnSet:
    """Default columns plus API group, throttling and permission extension columns."""
    column_set = op_table_columns_default(False)
    column_set.columns.extend(
        [
            Column("API Group", "x-api-group", 150),
            Column("Throttling", "x-throttling-group", 150),
            Column("App Permission", "x-app-permission", 150),
            Column("User Permissions", "x-user-permission", 150),
        ]
    )
    return column_set


def _cells(column: Column, path: str, method: str, op: dict, groups: Any) -> list[str]:
    slug = column.slug
    tags = [str(tag) for tag in op.get("tags") or []]
    if slug == "tags":
        return [", ".join(tags)]
    if slug == "method":
        return [method]
    if slug == "path":
        return [path]
    if slug == "operationId":
        return [str(op.get("operationId") or "")]
    if slug == "summary":
        return [str(op.get("summary") or "")]
    if slug == _X_TAG_GROUPS:
        return [", ".join(groups.get_tag_group_names_for_tag_names(*tags))]
    if slug == "securityScopes":
        return [", ".join(OperationMore(operation=op).security_scopes(False))]
    if slug == "docsURL":
        docs = op.get("externalDocs")
        if isinstance(docs, Mapping):
            return [str(docs.get("url") or "")]
        return []
    return [get_extension_prop_string_or_empty(op, slug)]


def operations_table(
    spec: Mapping[str, Any], columns: Optional[ColumnSet], filter_func: Optional[OpFilter]
) -> Table:
    """Build a table with one row per operation that passes ``filter_func``."""
    if columns is None:
        columns = op_table_columns_default(False)
    table = Table(
        name=str((spec.get("info") or {}).get("title") or ""),
        columns=columns.display_texts(),
    )
    groups = tag_groups(spec)
    for path, method, op in iter_operations(spec):
        if filter_func is not None and not filter_func(path, method, op):
            continue
        row: list[str] = []
        for column in columns.columns:
            row.extend(_cells(column, path, method, op, groups))
        table.rows.append(row)
    return table


def write_file_csv(spec: Mapping[str, Any], filename: str) -> None:
    operations_table(spec, None, None).write_csv(filename)