# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pluggable publishing targets that turn prompts into compiled artefacts."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..errors import NotFoundError


@dataclass(frozen=True, slots=True)
class PromptUnit:
    """One prompt source handed to a utility."""

    name: str
    file_name: str
    content: str
    source_path: Path
    output_dir: Path


@dataclass(frozen=True, slots=True)
class UtilityResult:
    """Outcome reported by a utility for a single prompt."""

    success: bool
    output_path: Path | None = None
    error: str | None = None


@runtime_checkable
class Utility(Protocol):
    """Target-specific formatter invoked once per prompt."""

    name: str

    def execute(self, unit: PromptUnit) -> UtilityResult:
        """Write the compiled form of ``unit`` below ``unit.output_dir``."""
        ...


class PlainUtility:
    """Publish prompts unchanged as Markdown files."""

    name = "plain"

    def execute(self, unit: PromptUnit) -> UtilityResult:
        """Write ``unit.content`` to ``<output_dir>/<name>.md``.

        Args:
            unit: Prompt to publish.

        Returns:
            UtilityResult: Success flag and the written path.
        """

        target = unit.output_dir / f"{unit.name}.md"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(unit.content, encoding="utf-8")
        return UtilityResult(success=True, output_path=target)


class UtilityRegistry:
    """Name-indexed collection of available utilities."""

    def __init__(self, utilities: Iterable[Utility] | None = None) -> None:
        """Register ``utilities``, defaulting to the built-in plain utility."""

        self._utilities: dict[str, Utility] = {}
        for utility in utilities if utilities is not None else (PlainUtility(),):
            self.register(utility)

    def register(self, utility: Utility) -> None:
        """Add ``utility``, replacing any utility registered under the same name."""

        self._utilities[utility.name] = utility

    def names(self) -> list[str]:
        """Return registered utility names in registration order."""

        return list(self._utilities)

    def get(self, name: str) -> Utility:
        """Return the utility registered as ``name``.

        Raises:
            NotFoundError: If no such utility is registered.
        """

        try:
            return self._utilities[name]
        except KeyError as exc:
            raise NotFoundError(name, kind="utility") from exc


__all__ = ["PlainUtility", "PromptUnit", "Utility", "UtilityRegistry", "UtilityResult"]
