# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``rex deploy`` command."""

from __future__ import annotations

from pathlib import Path

import typer

from ...deploy import DeploymentManager, DeployOptions, format_deploy_result
from ..shared import exit_on_error, state_from


def deploy(
    ctx: typer.Context,
    prompts: list[str] | None = typer.Argument(None, help="Prompt names to deploy (default: all)."),
    utility: str | None = typer.Option(None, "--utility", "-u", help="Compiled utility output to deploy."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Destination directory (default: project root)."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be copied without writing."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite files that already exist."),
) -> None:
    """Copy compiled prompts into the current project."""

    state = state_from(ctx)
    with exit_on_error(state.logger):
        options = DeployOptions(
            utility=utility,
            output=output,
            prompt_names=tuple(prompts or ()),
            dry_run=dry_run,
            force=force,
        )
        result = DeploymentManager(state.paths).deploy_with_config(options)

    if result.dry_run:
        state.logger.info("Dry run: no files will be written")
    for line in format_deploy_result(result):
        state.logger.echo(line)
    if not result.dry_run:
        copied = len(result.deployed) + len(result.overwritten)
        state.logger.ok(f"Deployed {copied} file(s), skipped {len(result.skipped)}")


def register(app: typer.Typer) -> None:
    app.command(name="deploy")(deploy)


__all__ = ["register"]
