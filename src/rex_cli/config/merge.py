# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered merge of configuration fragments."""

from __future__ import annotations

import copy
from collections.abc import Mapping

from .keypath import UNSET
from .types import ConfigFragment, ConfigValue


def deep_merge(base: ConfigFragment, override: ConfigFragment) -> dict[str, ConfigValue]:
    """Return ``base`` overlaid with ``override``.

    Mappings present on both sides merge key by key. Any other value from
    ``override`` (lists included) replaces the value in ``base`` outright.
    """

    result: dict[str, ConfigValue] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def sanitize_overrides(overrides: ConfigFragment | None) -> dict[str, ConfigValue]:
    """Drop top-level override entries that were never supplied (``None`` or ``UNSET``)."""

    if not overrides:
        return {}
    return {key: value for key, value in overrides.items() if value is not None and value is not UNSET}


def merge_fragments(*fragments: ConfigFragment | None) -> dict[str, ConfigValue]:
    """Merge ``fragments`` in ascending priority order into an independent mapping.

    Args:
        *fragments: Fragments ordered from lowest to highest priority. ``None``
            entries are treated as empty.

    Returns:
        dict[str, ConfigValue]: Merged mapping sharing no containers with the
        inputs.
    """

    merged: dict[str, ConfigValue] = {}
    for fragment in fragments:
        if fragment:
            merged = deep_merge(merged, copy.deepcopy(dict(fragment)))
    return merged


__all__ = ["deep_merge", "merge_fragments", "sanitize_overrides"]
