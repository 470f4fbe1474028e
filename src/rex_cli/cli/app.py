# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import typer

from .. import __version__
from ..logging import LOG_LEVELS, configure_logging
from .commands import register_commands
from .shared import DEFAULT_LOG_LEVEL, CLIState, build_cli_logger, create_typer

app = create_typer(name="rex", help_text="Manage a prompt library and publish it to AI-IDE configuration.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"rex-cli {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL,
        "--log-level",
        help=f"Diagnostic verbosity: {', '.join(LOG_LEVELS)}.",
    ),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji in console output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured console output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Manage a prompt library and publish it to AI-IDE configuration."""

    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    ctx.obj = CLIState(logger=build_cli_logger(emoji=not no_emoji, no_color=no_color), log_level=log_level)


register_commands(app)

__all__ = ["app"]
