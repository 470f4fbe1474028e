# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect which AI-IDE integrations a project directory already uses."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping, Sequence
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_AGE_MINUTES: Final[int] = 30
DEFAULT_RULES: Final[dict[str, tuple[str, ...]]] = {
    "github-copilot": (
        ".github/copilot/prompts",
        ".github/copilot/instructions",
    ),
    "vscode": (
        ".vscode/settings.json",
        ".vscode/extensions.json",
        ".vscode",
    ),
    "cursor": (
        ".cursor/settings.json",
        ".cursor",
        ".cursorrules",
    ),
}


class FoundPath(BaseModel):
    """Marker path that exists inside the project."""

    model_config = ConfigDict(frozen=True)

    path: str
    full_path: str
    type: Literal["file", "directory"]
    size: int | None = None


class UtilityDetection(BaseModel):
    """Evidence collected for a single utility."""

    found: bool
    found_paths: list[FoundPath] = Field(default_factory=list)
    missing_paths: list[str] = Field(default_factory=list)
    confidence: float = 0.0


class DetectionResult(BaseModel):
    """Outcome of scanning one project directory."""

    project_dir: str
    detected_utilities: list[str] = Field(default_factory=list)
    details: dict[str, UtilityDetection] = Field(default_factory=dict)
    timestamp: str


class Suggestion(BaseModel):
    """Recommended utility with its confidence score."""

    model_config = ConfigDict(frozen=True)

    utility: str
    confidence: float
    reason: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class SmartDetector:
    """Scan project directories for marker files of known utilities."""

    def __init__(self, rules: Mapping[str, Sequence[str]] | None = None) -> None:
        source = DEFAULT_RULES if rules is None else rules
        self._rules: dict[str, tuple[str, ...]] = {name: tuple(patterns) for name, patterns in source.items()}

    def add_rule(self, utility: str, patterns: Sequence[str]) -> None:
        """Register or replace the marker paths used to detect ``utility``."""

        self._rules[utility] = tuple(patterns)

    def supported_utilities(self) -> list[str]:
        """Return the utilities that have detection rules."""

        return list(self._rules)

    def detect(self, project_dir: Path | None = None) -> DetectionResult:
        """Scan ``project_dir`` (default: cwd) and return the detected utilities."""

        root = Path.cwd() if project_dir is None else project_dir
        detected: list[str] = []
        details: dict[str, UtilityDetection] = {}
        for utility, patterns in self._rules.items():
            detection = self._check_patterns(root, patterns)
            if detection.found:
                detected.append(utility)
                details[utility] = detection
        return DetectionResult(
            project_dir=str(root),
            detected_utilities=detected,
            details=details,
            timestamp=_now().isoformat(),
        )

    @staticmethod
    def _check_patterns(root: Path, patterns: Sequence[str]) -> UtilityDetection:
        found: list[FoundPath] = []
        missing: list[str] = []
        for pattern in patterns:
            candidate = root / pattern
            try:
                stat = candidate.stat()
            except OSError:
                missing.append(pattern)
                continue
            is_dir = candidate.is_dir()
            found.append(
                FoundPath(
                    path=pattern,
                    full_path=str(candidate),
                    type="directory" if is_dir else "file",
                    size=None if is_dir else stat.st_size,
                ),
            )
        confidence = len(found) / len(patterns) if patterns else 0.0
        return UtilityDetection(
            found=bool(found),
            found_paths=found,
            missing_paths=missing,
            confidence=confidence,
        )

    @staticmethod
    def suggest(result: DetectionResult) -> list[Suggestion]:
        """Return suggestions ordered by descending confidence."""

        suggestions = [
            Suggestion(
                utility=utility,
                confidence=result.details[utility].confidence,
                reason=f"found {len(result.details[utility].found_paths)} related file(s)/directory(ies)",
            )
            for utility in result.detected_utilities
            if utility in result.details
        ]
        return sorted(suggestions, key=lambda item: item.confidence, reverse=True)

    def format_result(self, result: DetectionResult) -> str:
        """Render ``result`` as a human-readable report."""

        lines = [f"Project detection results ({result.project_dir})", ""]
        if not result.detected_utilities:
            lines.append("No known tool configuration detected.")
            lines.append("")
            lines.append("Hint: pass --utility to choose a target explicitly.")
            return "\n".join(lines)

        suggestions = self.suggest(result)
        lines.append(f"Detected {len(result.detected_utilities)} candidate tool(s):")
        lines.append("")
        for suggestion in suggestions:
            lines.append(f"  {suggestion.utility} (confidence: {round(suggestion.confidence * 100)}%)")
            lines.append(f"     {suggestion.reason}")
            for found in result.details[suggestion.utility].found_paths:
                lines.append(f"     + {found.path} ({found.type})")
            lines.append("")
        top = suggestions[0]
        lines.append(f"Recommended: {top.utility} (confidence: {round(top.confidence * 100)}%)")
        return "\n".join(lines)

    @staticmethod
    def is_cache_valid(
        record: DetectionResult | Mapping[str, Any] | None,
        max_age_minutes: float = DEFAULT_MAX_AGE_MINUTES,
        *,
        now: datetime | None = None,
    ) -> bool:
        """Return ``True`` when ``record`` is younger than ``max_age_minutes``."""

        if record is None:
            return False
        raw = record.timestamp if isinstance(record, DetectionResult) else record.get("timestamp")
        if not isinstance(raw, str) or not (stamp := _parse_timestamp(raw)):
            return False
        current = now or _now()
        return current - stamp < timedelta(minutes=max_age_minutes)

    def detect_with_cache(
        self,
        project_dir: Path | None,
        detection_cache: MutableMapping[str, Any],
        *,
        max_age_minutes: float = DEFAULT_MAX_AGE_MINUTES,
    ) -> DetectionResult:
        """Return a fresh cached result for ``project_dir`` or detect and store one.

        Args:
            project_dir: Directory to scan; defaults to the working directory.
            detection_cache: Mapping keyed by resolved directory path; updated in
                place when a new detection runs.
            max_age_minutes: Maximum age of a reusable cached record.

        Returns:
            DetectionResult: Cached or freshly computed result.
        """

        root = (Path.cwd() if project_dir is None else project_dir).resolve()
        key = str(root)
        cached = detection_cache.get(key)
        if isinstance(cached, Mapping) and self.is_cache_valid(cached, max_age_minutes):
            try:
                result = DetectionResult.model_validate(cached)
            except ValidationError as exc:
                LOGGER.warning("Discarding malformed detection cache entry for %s: %s", key, exc)
            else:
                LOGGER.info("using cached detection result for %s", key)
                return result

        LOGGER.info("running project detection for %s", key)
        result = self.detect(root)
        detection_cache[key] = result.model_dump(mode="json")
        return result


__all__ = [
    "DEFAULT_MAX_AGE_MINUTES",
    "DEFAULT_RULES",
    "DetectionResult",
    "FoundPath",
    "SmartDetector",
    "Suggestion",
    "UtilityDetection",
]
