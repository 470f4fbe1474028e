# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for dotted key-path helpers."""

from __future__ import annotations

import copy

import pytest

from rex_cli.config.keypath import UNSET, KeyPath, delete_nested, get_nested, set_nested
from rex_cli.errors import ValidationError


def test_parse_splits_segments() -> None:
    path = KeyPath.parse("deploy.defaultTags")

    assert path.segments == ("deploy", "defaultTags")
    assert path.leaf == "defaultTags"
    assert str(path) == "deploy.defaultTags"


@pytest.mark.parametrize("raw", ["", "a..b", ".a", "a."])
def test_parse_rejects_empty_segments(raw: str) -> None:
    with pytest.raises(ValidationError, match="Invalid key path"):
        KeyPath.parse(raw)


def test_get_nested_returns_default_when_any_level_missing() -> None:
    data = {"a": {"b": 1}, "s": "scalar"}

    assert get_nested(data, "a.b") == 1
    assert get_nested(data, "a.c", "fallback") == "fallback"
    assert get_nested(data, "s.x", "fallback") == "fallback"
    assert get_nested(data, "missing.deep.key") is None


def test_get_nested_returns_explicit_none_values() -> None:
    assert get_nested({"a": None}, "a", "fallback") is None


def test_set_nested_materialises_intermediate_mappings() -> None:
    data: dict[str, object] = {"deep": "not-a-mapping"}

    set_nested(data, "deep.nested.option", "v")

    assert data == {"deep": {"nested": {"option": "v"}}}


def test_delete_nested_prunes_empty_ancestors_but_keeps_root() -> None:
    data: dict[str, object] = {"a": {"b": {"c": 1}}}

    assert delete_nested(data, "a.b.c") is True
    assert data == {}


def test_delete_nested_stops_at_non_empty_ancestor() -> None:
    data: dict[str, object] = {"a": {"b": {"c": 1}, "keep": True}}

    delete_nested(data, "a.b.c")

    assert data == {"a": {"keep": True}}


def test_delete_nested_missing_path_is_noop() -> None:
    data = {"a": {"b": 1}}
    before = copy.deepcopy(data)

    assert delete_nested(data, "a.x.y") is False
    assert delete_nested(data, "a.b.c") is False
    assert data == before


def test_unset_is_a_falsy_singleton() -> None:
    assert not UNSET
    assert copy.deepcopy(UNSET) is UNSET
    assert repr(UNSET) == "UNSET"
