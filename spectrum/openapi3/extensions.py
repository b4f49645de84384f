"""Extension properties and ``x-tag-groups`` handling for OpenAPI 3 dicts."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from spectrum.openapi3.common import _condense_space

X_TAG_GROUPS = "x-tag-groups"
X_THROTTLING_GROUP = "x-throttling-group"
X_TAG_GROUPS_PROPERTY_NAME = X_TAG_GROUPS


def get_extension_prop_string(props: Mapping[str, Any], key: str) -> str:
    """Return an extension value as text, without surrounding quotes."""
    if key not in props:
        raise KeyError(f"extension prop key [{key}] not found")
    return json.dumps(props[key], ensure_ascii=False).strip('"')


def get_extension_prop_string_or_empty(props: Mapping[str, Any], key: str) -> str:
    """Like :func:`get_extension_prop_string` but returns ``""`` when missing."""
    try:
        return get_extension_prop_string(props, key)
    except KeyError:
        return ""


@dataclass
class TagGroup:
    name: str = ""
    popular: bool = False
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TagGroup":
        return cls(
            name=str(data.get("name") or ""),
            popular=bool(data.get("popular", False)),
            tags=[str(tag) for tag in data.get("tags") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "popular": self.popular, "tags": list(self.tags)}


@dataclass
class TagGroupSet:
    tag_groups: list[TagGroup] = field(default_factory=list)

    def exists(self, tag_name: str) -> bool:
        return any(tag_name in tg.tags for tg in self.tag_groups)

    def get_tag_group_names_for_tag_names(self, *want_tag_names: str) -> list[str]:
        wanted = set(want_tag_names)
        names = [tg.name for tg in self.tag_groups for tag in tg.tags if tag in wanted]
        return _condense_space(names, dedupe=True, sort=True)

    def add_to_spec(self, spec: dict[str, Any]) -> None:
        """Store the groups in the spec; every top-level tag must belong to a group."""
        if not self.tag_groups:
            return
        missing = tags_without_groups(spec, self)
        if missing:
            raise ValueError(f"E_TAGS_WITHOUT_GROUPS [{','.join(missing)}]")
        spec[X_TAG_GROUPS] = [tg.to_dict() for tg in self.tag_groups]


def tags_without_groups(spec: Mapping[str, Any], tag_group_set: TagGroupSet) -> list[str]:
    """Return names of top-level tags that no tag group lists."""
    names = ((tag or {}).get("name", "") for tag in spec.get("tags") or [])
    return [name for name in names if not tag_group_set.exists(name)]


def tag_groups(spec: Mapping[str, Any]) -> TagGroupSet:
    """Parse the ``x-tag-groups`` extension of a spec."""
    raw = spec.get(X_TAG_GROUPS)
    if raw is None:
        return TagGroupSet()
    if not isinstance(raw, list):
        raise ValueError(f"{X_TAG_GROUPS} must be a list")
    groups = []
    for item in raw:
        if isinstance(item, TagGroup):
            groups.append(item)
        elif isinstance(item, Mapping):
            groups.append(TagGroup.from_dict(item))
        else:
            raise ValueError(f"invalid {X_TAG_GROUPS} entry [{item!r}]")
    return TagGroupSet(groups)