# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared typing utilities for configuration payloads."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeAlias

ConfigValue: TypeAlias = Any
ConfigFragment: TypeAlias = Mapping[str, ConfigValue]
MutableConfigFragment: TypeAlias = MutableMapping[str, ConfigValue]

__all__ = [
    "ConfigFragment",
    "ConfigValue",
    "MutableConfigFragment",
]
