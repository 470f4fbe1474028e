# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for rex directory resolution and initialisation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rex_cli.errors import FilesystemError, PermissionDeniedError, ValidationError
from rex_cli.paths import RexPaths, ensure_rex_dirs, init_project_config


def test_from_environment_honours_rex_home(tmp_path: Path) -> None:
    paths = RexPaths.from_environment(cwd=tmp_path / "proj", env={"REX_HOME": str(tmp_path / "custom")})

    assert paths.global_dir == tmp_path / "custom"
    assert paths.project_dir == tmp_path / "proj" / ".rex"
    assert paths.global_config == tmp_path / "custom" / "config.json"
    assert paths.project_config == tmp_path / "proj" / ".rex" / "config.json"
    assert paths.hash_cache == tmp_path / "proj" / ".rex" / "cache" / "hashes.json"
    assert paths.detection_cache == tmp_path / "proj" / ".rex" / "cache" / "detection.json"
    assert paths.prompts_dir == tmp_path / "custom" / "prompts"
    assert paths.compiled_dir == tmp_path / "custom" / "compiled"


def test_from_environment_defaults_to_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")

    paths = RexPaths.from_environment(cwd=tmp_path, env={})

    assert paths.global_dir == tmp_path / "home" / ".rex"


def test_ensure_rex_dirs_creates_locations(rex_paths: RexPaths) -> None:
    ensure_rex_dirs(rex_paths)
    ensure_rex_dirs(rex_paths)

    assert rex_paths.global_dir.is_dir()
    assert rex_paths.project_dir.is_dir()
    assert rex_paths.prompts_dir.is_dir()


def test_ensure_rex_dirs_maps_permission_errors(rex_paths: RexPaths, monkeypatch: pytest.MonkeyPatch) -> None:
    def _deny(self: Path, *_args: object, **_kwargs: object) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "mkdir", _deny)

    with pytest.raises(PermissionDeniedError, match="Permission denied"):
        ensure_rex_dirs(rex_paths)


def test_ensure_rex_dirs_wraps_other_failures(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    paths = RexPaths(global_dir=blocker / ".rex", project_dir=tmp_path / ".rex")

    with pytest.raises(FilesystemError, match="Failed to create directory"):
        ensure_rex_dirs(paths)


def test_init_project_config_refuses_to_overwrite(rex_paths: RexPaths) -> None:
    target = init_project_config(rex_paths)
    assert "created" in json.loads(target.read_text(encoding="utf-8"))
    target.write_text('{"custom": true}', encoding="utf-8")

    with pytest.raises(ValidationError) as excinfo:
        init_project_config(rex_paths)

    assert any("--force" in hint for hint in excinfo.value.suggestions)
    assert json.loads(target.read_text(encoding="utf-8")) == {"custom": True}

    init_project_config(rex_paths, overwrite=True)
    assert "custom" not in json.loads(target.read_text(encoding="utf-8"))
