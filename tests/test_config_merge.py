# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered fragment merging."""

from __future__ import annotations

from rex_cli.config.keypath import UNSET
from rex_cli.config.merge import deep_merge, merge_fragments, sanitize_overrides


def test_higher_priority_scalar_wins() -> None:
    assert merge_fragments({"a": 1}, {"a": 2}, {"a": 3}) == {"a": 3}


def test_partial_overlap_keeps_lower_priority_keys() -> None:
    merged = merge_fragments(
        {"option1": "g1", "option3": "g3"},
        {"option2": "p2", "option4": "p4"},
        {"option1": "c1", "option2": "c2"},
    )

    assert merged == {"option1": "c1", "option2": "c2", "option3": "g3", "option4": "p4"}


def test_nested_mappings_merge_field_by_field() -> None:
    merged = deep_merge(
        {"deploy": {"utility": "cursor", "tags": ["a"]}},
        {"deploy": {"output": "./out"}},
    )

    assert merged == {"deploy": {"utility": "cursor", "tags": ["a"], "output": "./out"}}


def test_lists_are_replaced_not_concatenated() -> None:
    merged = deep_merge({"deploy": {"tags": ["global", "shared"]}}, {"deploy": {"tags": ["project"]}})

    assert merged["deploy"]["tags"] == ["project"]


def test_mapping_and_non_mapping_do_not_merge() -> None:
    assert deep_merge({"a": {"x": 1}}, {"a": "flat"}) == {"a": "flat"}
    assert deep_merge({"a": "flat"}, {"a": {"x": 1}}) == {"a": {"x": 1}}
    assert deep_merge({"a": {"x": 1}}, {"a": None}) == {"a": None}


def test_merge_fragments_shares_no_containers_with_inputs() -> None:
    project = {"deploy": {"tags": ["p"]}}

    merged = merge_fragments({}, project, None)
    merged["deploy"]["tags"].append("mutated")

    assert project == {"deploy": {"tags": ["p"]}}


def test_sanitize_overrides_drops_unsupplied_values() -> None:
    assert sanitize_overrides({"a": None, "b": UNSET, "c": False, "d": 0}) == {"c": False, "d": 0}
    assert sanitize_overrides(None) == {}
