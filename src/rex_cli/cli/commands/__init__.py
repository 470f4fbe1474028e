# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from . import cache, compile_prompts, config, deploy, detect, init

__all__ = ["register_commands"]


def register_commands(app: typer.Typer) -> None:
    """Register built-in CLI commands on ``app``."""

    init.register(app)
    config.register(app)
    cache.register(app)
    detect.register(app)
    compile_prompts.register(app)
    deploy.register(app)
