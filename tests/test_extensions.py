import json

import pytest

from spectrum.openapi3.extensions import (
    X_TAG_GROUPS,
    TagGroup,
    TagGroupSet,
    get_extension_prop_string,
    get_extension_prop_string_or_empty,
    tag_groups,
    tags_without_groups,
)


def _group_set():
    return TagGroupSet(
        [TagGroup("Core", tags=["Users", "Accounts"]), TagGroup("Extra", tags=["Users"])]
    )


def test_extension_string_value():
    assert get_extension_prop_string({"x-a": "value"}, "x-a") == "value"


def test_extension_number_value():
    assert get_extension_prop_string({"x-n": 5}, "x-n") == "5"


def test_extension_missing():
    with pytest.raises(KeyError, match="x-missing"):
        get_extension_prop_string({}, "x-missing")
    assert get_extension_prop_string_or_empty({}, "x-missing") == ""


def test_tag_group_set_exists():
    tgs = _group_set()
    assert tgs.exists("Users")
    assert not tgs.exists("Nope")


def test_group_names_for_tags():
    tgs = _group_set()
    assert tgs.get_tag_group_names_for_tag_names("Users") == ["Core", "Extra"]
    assert tgs.get_tag_group_names_for_tag_names("Accounts", "Users") == ["Core", "Extra"]
    assert tgs.get_tag_group_names_for_tag_names("Nope") == []


def test_add_to_spec_missing_tags():
    spec = {"tags": [{"name": "Users"}, {"name": "Orphan"}]}
    assert tags_without_groups(spec, _group_set()) == ["Orphan"]
    with pytest.raises(ValueError, match="E_TAGS_WITHOUT_GROUPS"):
        _group_set().add_to_spec(spec)
    assert X_TAG_GROUPS not in spec


def test_add_to_spec_round_trip():
    spec = {"tags": [{"name": "Users"}, {"name": "Accounts"}]}
    tgs = _group_set()
    tgs.add_to_spec(spec)
    assert tag_groups(spec) == tgs
    assert tag_groups(json.loads(json.dumps(spec))) == tgs


def test_empty_set_does_not_touch_spec():
    spec = {"tags": [{"name": "Users"}]}
    TagGroupSet().add_to_spec(spec)
    assert X_TAG_GROUPS not in spec
    assert tag_groups(spec).tag_groups == []


def test_invalid_tag_groups():
    with pytest.raises(ValueError):
        tag_groups({X_TAG_GROUPS: "nope"})
    with pytest.raises(ValueError):
        tag_groups({X_TAG_GROUPS: [3]})