# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``rex init`` command."""

from __future__ import annotations

import typer

from ...paths import ensure_rex_dirs, init_project_config
from ..shared import exit_on_error, state_from


def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config.json."),
) -> None:
    """Create the rex directories and a project configuration file."""

    state = state_from(ctx)
    with exit_on_error(state.logger):
        ensure_rex_dirs(state.paths)
        config_path = init_project_config(state.paths, overwrite=force)
    state.logger.ok(f"Project initialised. Config created at: {config_path}")


def register(app: typer.Typer) -> None:
    app.command(name="init")(init)


__all__ = ["register"]
