# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration: key paths, fragment merging and the resolver."""

from __future__ import annotations

from .keypath import UNSET, KeyPath, delete_nested, get_nested, set_nested
from .merge import deep_merge, merge_fragments, sanitize_overrides
from .resolver import UTILITIES_KEY, ConfigSources, ConfigurationResolver
from .sources import JsonFragmentSource

__all__ = [
    "ConfigSources",
    "ConfigurationResolver",
    "JsonFragmentSource",
    "KeyPath",
    "UNSET",
    "UTILITIES_KEY",
    "deep_merge",
    "delete_nested",
    "get_nested",
    "merge_fragments",
    "sanitize_overrides",
    "set_nested",
]
