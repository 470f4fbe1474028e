# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Enumerate prompt sources in the global prompt library."""

from __future__ import annotations

from pathlib import Path


def list_prompts(prompts_dir: Path) -> list[Path]:
    """Return visible regular files directly inside ``prompts_dir``, sorted by name."""

    if not prompts_dir.is_dir():
        return []
    return sorted(
        (entry for entry in prompts_dir.iterdir() if entry.is_file() and not entry.name.startswith(".")),
        key=lambda entry: entry.name,
    )


__all__ = ["list_prompts"]
