# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from rex_cli.paths import RexPaths


@pytest.fixture
def rex_paths(tmp_path: Path) -> RexPaths:
    """Return isolated global and project locations under ``tmp_path``."""

    return RexPaths(global_dir=tmp_path / "home" / ".rex", project_dir=tmp_path / "project" / ".rex")


@pytest.fixture
def rex_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RexPaths:
    """Point ``$REX_HOME`` and the working directory at ``tmp_path`` for CLI tests."""

    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("REX_HOME", str(tmp_path / "home" / ".rex"))
    monkeypatch.chdir(project)
    return RexPaths.from_environment()


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


@pytest.fixture
def write_json() -> Callable[[Path, object], None]:
    """Return a helper that writes ``payload`` as JSON, creating parent directories."""

    return _write_json
