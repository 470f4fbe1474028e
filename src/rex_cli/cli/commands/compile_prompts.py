# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``rex compile`` and ``rex status`` commands."""

from __future__ import annotations

from typing import Final

import typer

from ...compile import CompilationManager, CompileOptions
from ...config import ConfigurationResolver
from ..shared import CLIState, exit_on_error, render_json, state_from

DEFAULT_UTILITIES_KEY: Final[str] = "compile.utilities"


def _configured_utilities(state: CLIState) -> tuple[str, ...] | None:
    resolver = ConfigurationResolver(state.paths)
    resolver.load()
    configured = resolver.get(DEFAULT_UTILITIES_KEY)
    if isinstance(configured, str):
        return (configured,)
    if isinstance(configured, list) and all(isinstance(item, str) for item in configured):
        return tuple(configured) or None
    return None


def compile_prompts(
    ctx: typer.Context,
    utility: list[str] | None = typer.Option(None, "--utility", "-u", help="Utility to compile with (repeatable)."),
    prompt: list[str] | None = typer.Option(None, "--prompt", "-p", help="Prompt to compile (repeatable)."),
    clean: bool = typer.Option(False, "--clean", help="Remove compiled output and the cache first."),
    incremental: bool = typer.Option(
        True,
        "--incremental/--no-incremental",
        help="Skip prompts whose content is unchanged since the last compile.",
    ),
) -> None:
    """Compile prompts from the library into per-utility output directories."""

    state = state_from(ctx)
    with exit_on_error(state.logger):
        options = CompileOptions(
            utilities=tuple(utility) if utility else _configured_utilities(state),
            prompt_names=tuple(prompt) if prompt else None,
            clean=clean,
            incremental=incremental,
        )
        result = CompilationManager(state.paths).compile(options)

    if result.compiled_prompts == 0:
        state.logger.ok(f"All prompts are up to date ({result.skipped_prompts} skipped)")
        return
    for failure in result.failures:
        state.logger.warn(f"{failure.utility}: {failure.prompt}: {failure.error}")
    summary = (
        f"Compiled {result.compiled_prompts} prompt(s) with {', '.join(result.compiled_utilities)}"
        f" into {result.output_dir}"
    )
    if result.skipped_prompts:
        summary += f"; skipped {result.skipped_prompts} unchanged"
    if not result.success:
        state.logger.fail(summary)
        raise typer.Exit(code=1)
    state.logger.ok(summary)


def status(ctx: typer.Context) -> None:
    """Print the compiled output inventory as JSON."""

    state = state_from(ctx)
    report = CompilationManager(state.paths).status()
    state.logger.echo(render_json(report.model_dump(mode="json")))


def register(app: typer.Typer) -> None:
    app.command(name="compile")(compile_prompts)
    app.command(name="status")(status)


__all__ = ["register"]
