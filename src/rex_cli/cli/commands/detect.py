# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``rex detect`` command."""

from __future__ import annotations

from pathlib import Path

import typer

from ...cache import CompilationCache
from ...detection import DEFAULT_MAX_AGE_MINUTES, SmartDetector
from ..shared import state_from


def detect(
    ctx: typer.Context,
    root: Path | None = typer.Option(None, "--root", "-r", help="Project directory to scan (default: cwd)."),
    use_cache: bool = typer.Option(True, "--cache/--no-cache", help="Reuse a recent detection result."),
    max_age: float = typer.Option(
        DEFAULT_MAX_AGE_MINUTES,
        "--max-age",
        min=0,
        help="Maximum age in minutes of a reusable cached result.",
    ),
) -> None:
    """Report which AI-IDE integrations the project already uses."""

    state = state_from(ctx)
    detector = SmartDetector()
    project_dir = (root or Path.cwd()).resolve()
    if not use_cache:
        result = detector.detect(project_dir)
    else:
        cache = CompilationCache(state.paths.cache_dir)
        snapshot = cache.load()
        result = detector.detect_with_cache(project_dir, snapshot.detections, max_age_minutes=max_age)
        cache.save(snapshot.fingerprints, snapshot.detections)
    state.logger.echo(detector.format_result(result))


def register(app: typer.Typer) -> None:
    app.command(name="detect")(detect)


__all__ = ["register"]
