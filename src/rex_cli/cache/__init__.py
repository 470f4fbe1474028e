# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Incremental compilation cache."""

from __future__ import annotations

from .store import CacheSnapshot, CacheStats, ChangeSet, CompilationCache, cache_key

__all__ = [
    "CacheSnapshot",
    "CacheStats",
    "ChangeSet",
    "CompilationCache",
    "cache_key",
]
