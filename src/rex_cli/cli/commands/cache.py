# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compilation cache commands."""

from __future__ import annotations

import typer

from ...cache import CompilationCache
from ..shared import create_typer, render_json, state_from

cache_app = create_typer(name="cache", help_text="Inspect or clear the compilation cache.")


@cache_app.command("stats")
def cache_stats(ctx: typer.Context) -> None:
    """Print fingerprint and detection entry counts."""

    state = state_from(ctx)
    stats = CompilationCache(state.paths.cache_dir).stats()
    state.logger.echo(render_json(stats.model_dump(mode="json")))


@cache_app.command("clear")
def cache_clear(ctx: typer.Context) -> None:
    """Delete the cache directory."""

    state = state_from(ctx)
    cache = CompilationCache(state.paths.cache_dir)
    if not cache.clear():
        state.logger.fail(f"Could not clear cache at {cache.directory}")
        raise typer.Exit(code=1)
    state.logger.ok("Cache cleared")


def register(app: typer.Typer) -> None:
    app.add_typer(cache_app, name="cache")


__all__ = ["cache_app", "register"]
