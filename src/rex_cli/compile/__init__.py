# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Prompt compilation workflow."""

from __future__ import annotations

from .manager import CompilationManager, CompilationStatus, CompileFailure, CompileOptions, CompileResult
from .prompts import list_prompts
from .utilities import PlainUtility, PromptUnit, Utility, UtilityRegistry, UtilityResult

__all__ = [
    "CompilationManager",
    "CompilationStatus",
    "CompileFailure",
    "CompileOptions",
    "CompileResult",
    "PlainUtility",
    "PromptUnit",
    "Utility",
    "UtilityRegistry",
    "UtilityResult",
    "list_prompts",
]
