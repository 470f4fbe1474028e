# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compile prompt sources through utilities, skipping unchanged inputs."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..cache import CacheSnapshot, CompilationCache
from ..errors import FilesystemError, NotFoundError, RexError
from ..paths import RexPaths
from .prompts import list_prompts
from .utilities import PromptUnit, Utility, UtilityRegistry

LOGGER = logging.getLogger(__name__)


class CompileOptions(BaseModel):
    """Caller preferences for a compilation run."""

    model_config = ConfigDict(frozen=True)

    utilities: tuple[str, ...] | None = None
    prompt_names: tuple[str, ...] | None = None
    clean: bool = False
    incremental: bool = True


class CompileFailure(BaseModel):
    """A prompt that a utility failed to compile."""

    model_config = ConfigDict(frozen=True)

    utility: str
    prompt: str
    error: str


class CompileResult(BaseModel):
    """Summary of a compilation run."""

    compiled_utilities: list[str]
    compiled_prompts: int
    skipped_prompts: int
    output_dir: Path
    incremental: bool
    failures: list[CompileFailure] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


class CompilationStatus(BaseModel):
    """Inventory of the compiled output directory."""

    has_compiled: bool
    utilities: list[str] = Field(default_factory=list)
    total_files: int = 0
    compiled_dir: Path


class CompilationManager:
    """Drive utilities over the prompt library with incremental caching."""

    def __init__(
        self,
        paths: RexPaths | None = None,
        *,
        registry: UtilityRegistry | None = None,
        cache: CompilationCache | None = None,
    ) -> None:
        self._paths = paths or RexPaths.from_environment()
        self._registry = registry or UtilityRegistry()
        self._cache = cache or CompilationCache(self._paths.cache_dir)

    @property
    def compiled_dir(self) -> Path:
        """Return the root directory of compiled output."""

        return self._paths.compiled_dir

    def output_dir_for(self, utility: str) -> Path:
        """Return the compiled output directory for ``utility``."""

        return self.compiled_dir / utility

    def clean_compiled(self, utility: str | None = None) -> bool:
        """Remove compiled output for ``utility`` or for every utility.

        Returns:
            bool: ``True`` when something was removed.

        Raises:
            FilesystemError: If the directory exists but cannot be removed.
        """

        target = self.output_dir_for(utility) if utility else self.compiled_dir
        if not target.exists():
            return False
        try:
            shutil.rmtree(target)
        except OSError as exc:
            raise FilesystemError("clean compiled output", target, exc) from exc
        LOGGER.info("removed compiled output %s", target)
        return True

    def compile(self, options: CompileOptions | None = None) -> CompileResult:
        """Compile selected prompts with selected utilities.

        When incremental, only prompts whose content changed since their last
        successful compilation are processed. A prompt's fingerprint is only
        recorded once every selected utility compiled it successfully.

        Args:
            options: Run preferences; defaults compile every prompt with every
                registered utility incrementally.

        Returns:
            CompileResult: Counts, output location and per-prompt failures.

        Raises:
            NotFoundError: If a requested utility is unknown or no prompt matches.
            FilesystemError: If the output directories cannot be prepared.
        """

        opts = options or CompileOptions()
        utility_names = list(opts.utilities) if opts.utilities else self._registry.names()
        utilities = [self._registry.get(name) for name in utility_names]

        try:
            self.compiled_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError("create compiled directory", self.compiled_dir, exc) from exc

        if opts.clean:
            self.clean_compiled()
            if opts.incremental:
                self._cache.clear()

        prompts = self._select_prompts(opts.prompt_names)
        to_compile = prompts
        skipped = 0
        if opts.incremental and not opts.clean:
            changes = self._cache.classify(prompts)
            to_compile = changes.changed
            skipped = len(changes.unchanged)
            if skipped:
                LOGGER.info("incremental compile: skipping %d unchanged prompt(s)", skipped)

        result = CompileResult(
            compiled_utilities=utility_names,
            compiled_prompts=len(to_compile),
            skipped_prompts=skipped,
            output_dir=self.compiled_dir,
            incremental=opts.incremental,
        )
        if not to_compile:
            return result

        failed: set[Path] = set()
        for utility in utilities:
            for prompt, failure in self._compile_with(utility, to_compile):
                failed.add(prompt)
                result.failures.append(failure)

        if opts.incremental:
            snapshot: CacheSnapshot = self._cache.load()
            for prompt in to_compile:
                if prompt not in failed:
                    self._cache.update_fingerprint(prompt, snapshot.fingerprints)
            self._cache.save(snapshot.fingerprints, snapshot.detections)
        return result

    def _select_prompts(self, names: Sequence[str] | None) -> list[Path]:
        prompts = list_prompts(self._paths.prompts_dir)
        if names:
            wanted = set(names)
            prompts = [prompt for prompt in prompts if prompt.name in wanted or prompt.stem in wanted]
        if not prompts:
            label = ", ".join(names) if names else str(self._paths.prompts_dir)
            raise NotFoundError(label, kind="prompt")
        return prompts

    def _compile_with(self, utility: Utility, prompts: Sequence[Path]) -> list[tuple[Path, CompileFailure]]:
        output_dir = self.output_dir_for(utility.name)
        output_dir.mkdir(parents=True, exist_ok=True)
        failures: list[tuple[Path, CompileFailure]] = []
        for prompt in prompts:
            try:
                unit = PromptUnit(
                    name=prompt.stem,
                    file_name=prompt.name,
                    content=prompt.read_text(encoding="utf-8"),
                    source_path=prompt,
                    output_dir=output_dir,
                )
                outcome = utility.execute(unit)
            except (OSError, ValueError, RexError) as exc:
                failures.append((prompt, CompileFailure(utility=utility.name, prompt=prompt.name, error=str(exc))))
                LOGGER.warning("%s failed to compile %s: %s", utility.name, prompt.name, exc)
                continue
            if not outcome.success:
                error = outcome.error or "utility reported failure"
                failures.append((prompt, CompileFailure(utility=utility.name, prompt=prompt.name, error=error)))
                LOGGER.warning("%s failed to compile %s: %s", utility.name, prompt.name, error)
                continue
            LOGGER.debug("%s compiled %s -> %s", utility.name, prompt.name, outcome.output_path)
        return failures

    def status(self) -> CompilationStatus:
        """Return which utilities have compiled output and how many files exist."""

        compiled_dir = self.compiled_dir
        if not compiled_dir.is_dir():
            return CompilationStatus(has_compiled=False, compiled_dir=compiled_dir)
        utilities: list[str] = []
        total = 0
        for entry in sorted(compiled_dir.iterdir()):
            if entry.is_dir():
                utilities.append(entry.name)
                total += sum(1 for _ in entry.iterdir())
        return CompilationStatus(
            has_compiled=True,
            utilities=utilities,
            total_files=total,
            compiled_dir=compiled_dir,
        )


__all__ = [
    "CompilationManager",
    "CompilationStatus",
    "CompileFailure",
    "CompileOptions",
    "CompileResult",
]
