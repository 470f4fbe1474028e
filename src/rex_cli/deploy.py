# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Copy compiled prompt output from the global library into a project."""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

from .cache import CompilationCache
from .config import ConfigurationResolver
from .detection import SmartDetector
from .errors import FilesystemError, NotFoundError, ValidationError
from .paths import RexPaths

LOGGER = logging.getLogger(__name__)

UTILITY_KEY: Final[str] = "deploy.defaultUtility"
OUTPUT_KEY: Final[str] = "deploy.defaultOutput"
PROMPTS_KEY: Final[str] = "deploy.prompts"
DRY_RUN_KEY: Final[str] = "deploy.dryRun"
FORCE_KEY: Final[str] = "deploy.force"
COMPILED_SUFFIX: Final[str] = ".md"
SKIP_REASON: Final[str] = "File already exists (use --force to overwrite)"

_ROLE_SUFFIX = re.compile(r"\.(prompt|instruction)$")


class DeployOptions(BaseModel):
    """Deployment preferences; unset fields fall back to configuration."""

    model_config = ConfigDict(frozen=True)

    utility: str | None = None
    output: Path | None = None
    prompt_names: tuple[str, ...] = ()
    dry_run: bool = False
    force: bool = False


class DeployedFile(BaseModel):
    """One compiled file and where it was (or would be) copied."""

    model_config = ConfigDict(frozen=True)

    source: str
    destination: Path
    reason: str | None = None


class DeployResult(BaseModel):
    """Summary of a deployment run."""

    utility: str
    output_dir: Path
    dry_run: bool = False
    planned: list[DeployedFile] = Field(default_factory=list)
    deployed: list[DeployedFile] = Field(default_factory=list)
    overwritten: list[DeployedFile] = Field(default_factory=list)
    skipped: list[DeployedFile] = Field(default_factory=list)


def prompt_name_for(file_name: str) -> str:
    """Return the prompt name of a compiled file (stem without ``.prompt``/``.instruction``)."""

    return _ROLE_SUFFIX.sub("", Path(file_name).stem)


def _config_overrides(options: DeployOptions) -> dict[str, Any]:
    supplied: dict[str, Any] = {}
    if options.utility:
        supplied["defaultUtility"] = options.utility
    if options.output is not None:
        supplied["defaultOutput"] = str(options.output)
    if options.prompt_names:
        supplied["prompts"] = list(options.prompt_names)
    if options.dry_run:
        supplied["dryRun"] = True
    if options.force:
        supplied["force"] = True
    return {"deploy": supplied} if supplied else {}


class DeploymentManager:
    """Publish ``compiled/<utility>`` into the current project directory."""

    def __init__(
        self,
        paths: RexPaths | None = None,
        *,
        detector: SmartDetector | None = None,
        cache: CompilationCache | None = None,
    ) -> None:
        """Bind the manager to rex locations.

        Args:
            paths: Global and project locations. The project root is the
                parent of ``paths.project_dir``.
            detector: Detector consulted when no utility is configured.
            cache: Cache holding detection records.
        """

        self._paths = paths or RexPaths.from_environment()
        self._detector = detector or SmartDetector()
        self._cache = cache or CompilationCache(self._paths.cache_dir)

    @property
    def project_root(self) -> Path:
        """Return the directory deployments are written below by default."""

        return self._paths.project_dir.parent

    def deploy_with_config(self, options: DeployOptions | None = None) -> DeployResult:
        """Resolve ``options`` against configuration, then deploy.

        Explicit options override ``deploy.*`` keys from the project and global
        configuration. When no utility is configured the highest-confidence
        detected utility is used.

        Args:
            options: Caller-supplied preferences (usually CLI flags).

        Returns:
            DeployResult: Copied, overwritten, skipped or planned files.

        Raises:
            ValidationError: If no utility can be resolved.
            NotFoundError: If no compiled output matches.
            FilesystemError: If a file cannot be copied.
        """

        resolved = self.resolve_options(options or DeployOptions())
        return self.deploy(resolved)

    def resolve_options(self, options: DeployOptions) -> DeployOptions:
        """Return fully resolved options using CLI > project > global precedence."""

        resolver = ConfigurationResolver(self._paths)
        resolver.load(_config_overrides(options))
        if not resolver.get(UTILITY_KEY):
            detected = self._detect_utility()
            if detected:
                resolver.set(UTILITY_KEY, detected)

        hint = [f"Pass --utility or run: rex config set {UTILITY_KEY} <name>"]
        try:
            resolver.validate_required([UTILITY_KEY])
        except ValidationError as exc:
            raise ValidationError(str(exc), hint, missing=exc.missing) from exc
        utility = resolver.get(UTILITY_KEY)
        if not isinstance(utility, str) or not utility:
            raise ValidationError(f"{UTILITY_KEY} must be a utility name", hint, missing=[UTILITY_KEY])

        output = resolver.get(OUTPUT_KEY)
        prompts = resolver.get(PROMPTS_KEY, [])
        return DeployOptions(
            utility=utility,
            output=Path(output) if isinstance(output, str) and output else None,
            prompt_names=tuple(str(name) for name in prompts) if isinstance(prompts, list) else (),
            dry_run=bool(resolver.get(DRY_RUN_KEY, False)),
            force=bool(resolver.get(FORCE_KEY, False)),
        )

    def deploy(self, options: DeployOptions) -> DeployResult:
        """Copy compiled files for ``options.utility`` into the output directory.

        Existing destination files are skipped unless ``options.force`` is set.
        With ``options.dry_run`` nothing is written and the planned copies are
        returned instead.

        Raises:
            ValidationError: If ``options.utility`` is not set.
            NotFoundError: If the utility has no compiled output or no file matches.
            FilesystemError: If a file cannot be copied.
        """

        if not options.utility:
            raise ValidationError("Utility must be specified", ["Pass --utility."], missing=[UTILITY_KEY])
        source_dir = self._paths.compiled_dir / options.utility
        if not source_dir.is_dir():
            raise NotFoundError(options.utility, kind="compiled output for utility")
        files = self.compiled_files(source_dir, options.prompt_names)
        if not files:
            label = ", ".join(options.prompt_names) or options.utility
            raise NotFoundError(label, kind="compiled prompt")

        output_dir = self._output_dir(options.output)
        result = DeployResult(utility=options.utility, output_dir=output_dir, dry_run=options.dry_run)
        for source in files:
            relative = source.relative_to(source_dir)
            entry = DeployedFile(source=relative.as_posix(), destination=output_dir / relative)
            if options.dry_run:
                result.planned.append(entry)
                continue
            existed = entry.destination.exists()
            if existed and not options.force:
                result.skipped.append(entry.model_copy(update={"reason": SKIP_REASON}))
                continue
            try:
                entry.destination.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, entry.destination)
            except OSError as exc:
                raise FilesystemError("deploy file", entry.destination, exc) from exc
            (result.overwritten if existed else result.deployed).append(entry)
            LOGGER.debug("deployed %s -> %s", source, entry.destination)
        return result

    @staticmethod
    def compiled_files(source_dir: Path, prompt_names: Sequence[str] = ()) -> list[Path]:
        """Return compiled Markdown files below ``source_dir``, optionally filtered by prompt name."""

        wanted = set(prompt_names)
        return [
            path
            for path in sorted(source_dir.rglob(f"*{COMPILED_SUFFIX}"))
            if path.is_file() and (not wanted or prompt_name_for(path.name) in wanted)
        ]

    def _output_dir(self, output: Path | None) -> Path:
        if output is None:
            return self.project_root
        return output if output.is_absolute() else self.project_root / output

    def _detect_utility(self) -> str | None:
        snapshot = self._cache.load()
        result = self._detector.detect_with_cache(self.project_root, snapshot.detections)
        self._cache.save(snapshot.fingerprints, snapshot.detections)
        suggestions = self._detector.suggest(result)
        if not suggestions:
            return None
        LOGGER.info("using detected utility %s", suggestions[0].utility)
        return suggestions[0].utility


def format_deploy_result(result: DeployResult) -> list[str]:
    """Return human-readable lines describing ``result``."""

    if result.dry_run:
        lines = [f"Files that would be deployed ({len(result.planned)} file(s)):"]
        lines.extend(f"  {item.source} -> {item.destination}" for item in result.planned)
        return lines
    lines = [f"Utility: {result.utility}", f"Output directory: {result.output_dir}"]
    for label, items in (("Deployed", result.deployed), ("Overwritten", result.overwritten)):
        if items:
            lines.append(f"{label} {len(items)} file(s):")
            lines.extend(f"  {item.source} -> {item.destination}" for item in items)
    if result.skipped:
        lines.append(f"Skipped {len(result.skipped)} file(s):")
        lines.extend(f"  {item.source} -> {item.destination} ({item.reason})" for item in result.skipped)
    return lines


__all__ = [
    "DeployOptions",
    "DeployResult",
    "DeployedFile",
    "DeploymentManager",
    "format_deploy_result",
    "prompt_name_for",
]
