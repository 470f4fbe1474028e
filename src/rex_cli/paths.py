# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the global and project locations used by rex-cli."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Final

from .errors import FilesystemError, PermissionDeniedError, ValidationError

REX_DIR_NAME: Final[str] = ".rex"
REX_HOME_ENV_VAR: Final[str] = "REX_HOME"
CONFIG_FILE_NAME: Final[str] = "config.json"
CACHE_DIR_NAME: Final[str] = "cache"
HASH_CACHE_FILE_NAME: Final[str] = "hashes.json"
DETECTION_CACHE_FILE_NAME: Final[str] = "detection.json"
PROMPTS_DIR_NAME: Final[str] = "prompts"
COMPILED_DIR_NAME: Final[str] = "compiled"


@dataclass(frozen=True, slots=True)
class RexPaths:
    """Describe the global (user-wide) and project (cwd-local) rex roots.

    Attributes:
        global_dir: User-wide directory holding prompts, compiled output and
            the global configuration fragment.
        project_dir: Directory inside the current project holding the project
            configuration fragment and the compilation cache.
    """

    global_dir: Path
    project_dir: Path

    @classmethod
    def from_environment(
        cls,
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> RexPaths:
        """Return paths derived from ``$REX_HOME``, the home directory and ``cwd``.

        Args:
            cwd: Working directory anchoring the project scope. Defaults to
                :func:`Path.cwd`.
            env: Environment mapping consulted instead of :data:`os.environ`.

        Returns:
            RexPaths: Absolute global and project locations.
        """

        environment = os.environ if env is None else env
        override = environment.get(REX_HOME_ENV_VAR)
        global_dir = Path(override).expanduser() if override else Path.home() / REX_DIR_NAME
        base = Path.cwd() if cwd is None else cwd
        return cls(global_dir=global_dir.absolute(), project_dir=(base / REX_DIR_NAME).absolute())

    @property
    def global_config(self) -> Path:
        return self.global_dir / CONFIG_FILE_NAME

    @property
    def project_config(self) -> Path:
        return self.project_dir / CONFIG_FILE_NAME

    @property
    def cache_dir(self) -> Path:
        return self.project_dir / CACHE_DIR_NAME

    @property
    def hash_cache(self) -> Path:
        return self.cache_dir / HASH_CACHE_FILE_NAME

    @property
    def detection_cache(self) -> Path:
        return self.cache_dir / DETECTION_CACHE_FILE_NAME

    @property
    def prompts_dir(self) -> Path:
        return self.global_dir / PROMPTS_DIR_NAME

    @property
    def compiled_dir(self) -> Path:
        return self.global_dir / COMPILED_DIR_NAME


def ensure_rex_dirs(paths: RexPaths) -> None:
    """Create the global, project and prompt directories when missing.

    Args:
        paths: Locations to materialise.

    Raises:
        PermissionDeniedError: If the filesystem refuses to create a directory.
        FilesystemError: If directory creation fails for any other reason.
    """

    for directory in (paths.global_dir, paths.project_dir, paths.prompts_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except PermissionError as exc:
            raise PermissionDeniedError(directory, "Cannot create .rex directory.") from exc
        except OSError as exc:
            raise FilesystemError("create directory", directory, exc) from exc


def init_project_config(paths: RexPaths, *, overwrite: bool = False) -> Path:
    """Write a fresh project configuration file and return its location.

    Args:
        paths: Locations whose project configuration should be created.
        overwrite: Replace an existing configuration file when ``True``.

    Returns:
        Path: Location of the written configuration file.

    Raises:
        ValidationError: If the file exists and ``overwrite`` is ``False``.
        PermissionDeniedError: If the file cannot be written due to permissions.
        FilesystemError: If writing fails for any other reason.
    """

    target = paths.project_config
    if target.exists() and not overwrite:
        raise ValidationError(
            f"{CONFIG_FILE_NAME} already exists at {target}",
            ["Use --force to overwrite the existing configuration."],
        )
    payload = {"created": datetime.now(timezone.utc).isoformat()}
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except PermissionError as exc:
        raise PermissionDeniedError(target, f"Cannot write {CONFIG_FILE_NAME}.") from exc
    except OSError as exc:
        raise FilesystemError("write project config", target, exc) from exc
    return target


__all__ = [
    "CONFIG_FILE_NAME",
    "REX_DIR_NAME",
    "REX_HOME_ENV_VAR",
    "RexPaths",
    "ensure_rex_dirs",
    "init_project_config",
]
