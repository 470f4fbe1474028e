# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, app construction)."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Final

import typer

from ..errors import RexError, ValidationError
from ..logging import detect_tty
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import section as core_section
from ..logging import warn as core_warn
from ..paths import RexPaths

DEFAULT_LOG_LEVEL: Final[str] = "warn"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool = True
    use_color: bool | None = None

    def fail(self, message: str) -> None:
        """Print ``message`` as a failure line on standard error."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Print ``message`` as a warning line."""

        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        """Print ``message`` as a success line."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        """Print ``message`` as an informational line."""

        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def section(self, title: str) -> None:
        """Print a section header titled ``title``."""

        core_section(title, use_color=detect_tty() if self.use_color is None else self.use_color)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)


@dataclass(slots=True)
class CLIState:
    """Options shared by every sub-command, stored on ``ctx.obj``."""

    logger: CLILogger = field(default_factory=CLILogger)
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def paths(self) -> RexPaths:
        """Return locations derived from the current environment."""

        return RexPaths.from_environment()


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided emoji preference."""

    return CLILogger(use_emoji=emoji, use_color=False if no_color else None)


def state_from(ctx: typer.Context) -> CLIState:
    """Return the shared state attached by the root callback, creating it if absent."""

    if not isinstance(ctx.obj, CLIState):
        ctx.obj = CLIState()
    return ctx.obj


def create_typer(*, name: str | None = None, help_text: str | None = None) -> typer.Typer:
    """Return a Typer application with the project's defaults applied."""

    return typer.Typer(
        name=name,
        help=help_text,
        no_args_is_help=True,
        add_completion=False,
        pretty_exceptions_enable=False,
    )


@contextmanager
def exit_on_error(logger: CLILogger) -> Iterator[None]:
    """Translate :class:`RexError` and :class:`CLIError` into a failure line and exit code."""

    try:
        yield
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except RexError as exc:
        logger.fail(str(exc))
        if isinstance(exc, ValidationError):
            for suggestion in exc.suggestions:
                logger.info(suggestion)
        raise typer.Exit(code=1) from exc


def parse_value(raw: str) -> Any:
    """Interpret ``raw`` as JSON when possible, otherwise as a plain string."""

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def render_json(value: Any) -> str:
    """Return ``value`` as indented, key-sorted JSON."""

    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False, default=str)


__all__ = [
    "CLIError",
    "CLILogger",
    "CLIState",
    "build_cli_logger",
    "create_typer",
    "exit_on_error",
    "parse_value",
    "render_json",
    "state_from",
]
