"""Options controlling how OpenAPI 3 specs are merged."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional


class CollisionCheckResult(IntEnum):
    SAME = 0
    OVERWRITE = 1
    ERROR = 2
    SKIP = 3


SchemaFunc = Callable[[str, Any, Any, str], CollisionCheckResult]


def schema_check_collision_default(schema_name: str, item1: Any, item2: Any, item2_note: str) -> CollisionCheckResult:
    """Equal items are the same; anything else is an error."""
    return CollisionCheckResult.SAME if item1 == item2 else CollisionCheckResult.ERROR


def schema_check_collision_skip(schema_name: str, item1: Any, item2: Any, item2_note: str) -> CollisionCheckResult:
    """Equal items are the same; anything else is skipped."""
    return CollisionCheckResult.SAME if item1 == item2 else CollisionCheckResult.SKIP


@dataclass
class MergeOptions:
    file_rx: Optional[re.Pattern] = None
    schema_func: Optional[SchemaFunc] = None
    collision_check_result: CollisionCheckResult = CollisionCheckResult.SAME
    validate_each: bool = False
    validate_final: bool = False
    table_columns: Any = None
    table_op_filter_func: Optional[Callable[[str, str, dict], bool]] = None

    def check_schema_collision(self, schema_name: str, sch1: Any, sch2: Any, hint2: str) -> CollisionCheckResult:
        if self.collision_check_result == CollisionCheckResult.SKIP:
            self.schema_func = schema_check_collision_skip
        elif self.schema_func is None:
            self.schema_func = schema_check_collision_default
        return self.schema_func(schema_name, sch1, sch2, hint2)


def new_merge_options_skip() -> MergeOptions:
    return MergeOptions(
        collision_check_result=CollisionCheckResult.SKIP,
        schema_func=schema_check_collision_skip,
    )