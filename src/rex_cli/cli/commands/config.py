# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration inspection and editing commands."""

from __future__ import annotations

import copy
from typing import Final

import typer

from ...config import UNSET, ConfigurationResolver, delete_nested, set_nested
from ..shared import CLIError, CLIState, create_typer, exit_on_error, parse_value, render_json, state_from

config_app = create_typer(name="config", help_text="Inspect and edit layered configuration.")

_MISSING: Final = object()


def _resolver(state: CLIState) -> ConfigurationResolver:
    resolver = ConfigurationResolver(state.paths)
    resolver.load()
    return resolver


@config_app.command("show")
def config_show(
    ctx: typer.Context,
    sources: bool = typer.Option(False, "--sources", help="Also print the global and project fragments."),
) -> None:
    """Print the effective (merged) configuration as JSON."""

    state = state_from(ctx)
    with exit_on_error(state.logger):
        resolver = _resolver(state)
        state.logger.echo(render_json(resolver.get_all()))
        if sources:
            snapshot = resolver.get_sources()
            state.logger.section("Global")
            state.logger.echo(render_json(snapshot.global_fragment or {}))
            state.logger.section("Project")
            state.logger.echo(render_json(snapshot.project_fragment or {}))


@config_app.command("get")
def config_get(ctx: typer.Context, key: str = typer.Argument(..., help="Dotted key path.")) -> None:
    """Print a single configuration value."""

    state = state_from(ctx)
    with exit_on_error(state.logger):
        value = _resolver(state).get(key, _MISSING)
        if value is _MISSING:
            raise CLIError(f"Configuration key '{key}' is not set")
        state.logger.echo(value if isinstance(value, str) else render_json(value))


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Dotted key path."),
    value: str = typer.Argument(..., help="Value; parsed as JSON when possible."),
    global_scope: bool = typer.Option(False, "--global", "-g", help="Write to the global configuration."),
) -> None:
    """Persist a value in the project (default) or global configuration."""

    state = state_from(ctx)
    with exit_on_error(state.logger):
        resolver = _resolver(state)
        snapshot = resolver.get_sources()
        fragment = copy.deepcopy((snapshot.global_fragment if global_scope else snapshot.project_fragment) or {})
        set_nested(fragment, key, parse_value(value))
        if global_scope:
            resolver.save_global_fragment(fragment)
        else:
            resolver.save_project_fragment(fragment)
    scope = "global" if global_scope else "project"
    state.logger.ok(f"Set {key} in {scope} configuration")


@config_app.command("unset")
def config_unset(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Dotted key path."),
    global_scope: bool = typer.Option(False, "--global", "-g", help="Edit the global configuration."),
) -> None:
    """Remove a value from the project (default) or global configuration."""

    state = state_from(ctx)
    scope = "global" if global_scope else "project"
    with exit_on_error(state.logger):
        resolver = _resolver(state)
        snapshot = resolver.get_sources()
        fragment = copy.deepcopy((snapshot.global_fragment if global_scope else snapshot.project_fragment) or {})
        if not delete_nested(fragment, key):
            state.logger.warn(f"{key} is not set in {scope} configuration")
            return
        if global_scope:
            resolver.save_global_fragment(fragment)
        else:
            resolver.save_project_fragment(fragment)
    state.logger.ok(f"Removed {key} from {scope} configuration")


@config_app.command("utility")
def config_utility(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Utility name, e.g. github-copilot."),
    key: str = typer.Argument(..., help="Setting name."),
    value: str | None = typer.Argument(None, help="Value; parsed as JSON when possible."),
    unset: bool = typer.Option(False, "--unset", help="Remove the setting instead of assigning it."),
) -> None:
    """Persist a per-utility setting under ``utilities.<name>`` in the project configuration."""

    state = state_from(ctx)
    with exit_on_error(state.logger):
        if unset:
            resolved = UNSET
        elif value is None:
            raise CLIError("Provide a VALUE or pass --unset")
        else:
            resolved = parse_value(value)
        ConfigurationResolver(state.paths).set_scoped_value(name, key, resolved)
    action = "Removed" if unset else "Set"
    state.logger.ok(f"{action} utilities.{name}.{key}")


def register(app: typer.Typer) -> None:
    app.add_typer(config_app, name="config")


__all__ = ["config_app", "register"]
