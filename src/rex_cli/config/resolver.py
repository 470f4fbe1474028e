# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layered configuration resolution with global, project and override scopes."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from ..errors import ConfigurationError, FilesystemError, NotLoadedError, ValidationError
from ..paths import RexPaths
from .keypath import UNSET, KeyPath, delete_nested, get_nested, set_nested
from .merge import merge_fragments, sanitize_overrides
from .sources import JsonFragmentSource
from .types import ConfigFragment, ConfigValue

UTILITIES_KEY: Final[str] = "utilities"
_MISSING: Final = object()


@dataclass(frozen=True, slots=True)
class ConfigSources:
    """Snapshot of the in-memory fragments for debugging output."""

    global_fragment: dict[str, ConfigValue] | None
    project_fragment: dict[str, ConfigValue] | None
    merged: dict[str, ConfigValue] | None


class ConfigurationResolver:
    """Merge global, project and override fragments into one queryable view.

    Precedence is override > project > global. Nested mappings merge key by
    key while lists and scalars from the higher-priority fragment replace the
    lower-priority value. The merged result lives only in memory; use the
    ``save_*`` methods to persist a fragment.
    """

    def __init__(self, paths: RexPaths | None = None) -> None:
        """Initialise an unloaded resolver.

        Args:
            paths: Locations of the fragment files. Defaults to
                :meth:`RexPaths.from_environment`.
        """

        self._paths = paths or RexPaths.from_environment()
        self._global_source = JsonFragmentSource(self._paths.global_config, name="global")
        self._project_source = JsonFragmentSource(self._paths.project_config, name="project")
        self._global: dict[str, ConfigValue] | None = None
        self._project: dict[str, ConfigValue] | None = None
        self._merged: dict[str, ConfigValue] | None = None

    @property
    def paths(self) -> RexPaths:
        """Return the locations this resolver reads and writes."""

        return self._paths

    def load(self, overrides: ConfigFragment | None = None) -> dict[str, ConfigValue]:
        """Read both persisted fragments and merge them with ``overrides``.

        Args:
            overrides: Caller-supplied fragment (for example CLI flags). Top-level
                entries whose value is ``None`` or ``UNSET`` are ignored.

        Returns:
            dict[str, ConfigValue]: The merged configuration.

        Raises:
            ConfigurationError: If merging fails unexpectedly.
        """

        self._global = self._global_source.load()
        self._project = self._project_source.load()
        try:
            self._merged = merge_fragments(self._global, self._project, sanitize_overrides(overrides))
        except Exception as exc:
            raise ConfigurationError(f"Failed to load configuration: {exc}") from exc
        return self._merged

    def get(self, key_path: str, default: ConfigValue = None) -> ConfigValue:
        """Return the merged value at ``key_path`` or ``default`` when absent."""

        return get_nested(self._require_loaded(), key_path, default)

    def set(self, key_path: str, value: ConfigValue) -> None:
        """Set ``key_path`` in memory only, creating an empty configuration if needed."""

        if self._merged is None:
            self._merged = {}
        set_nested(self._merged, key_path, value)

    def delete(self, key_path: str) -> bool:
        """Remove ``key_path`` from memory, pruning emptied parents."""

        return delete_nested(self._require_loaded(), key_path)

    def get_all(self) -> dict[str, ConfigValue]:
        """Return a shallow copy of the merged configuration."""

        return dict(self._require_loaded())

    def validate_required(self, key_paths: Iterable[str]) -> None:
        """Ensure every path in ``key_paths`` resolves to a value.

        Raises:
            NotLoadedError: If no configuration has been loaded.
            ValidationError: Listing every missing key path.
        """

        merged = self._require_loaded()
        missing = [path for path in key_paths if get_nested(merged, path, _MISSING) is _MISSING]
        if missing:
            raise ValidationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing=missing,
            )

    def save_project_fragment(self, fragment: ConfigFragment) -> None:
        """Persist ``fragment`` as the project configuration and re-merge.

        Raises:
            FilesystemError: If the fragment cannot be written.
        """

        self._project_source.save(fragment)
        if self._merged is not None:
            self._project = copy.deepcopy(dict(fragment))
            self._merged = merge_fragments(self._global, self._project)

    def save_global_fragment(self, fragment: ConfigFragment) -> None:
        """Persist ``fragment`` as the global configuration and re-merge.

        Raises:
            FilesystemError: If the fragment cannot be written.
        """

        self._global_source.save(fragment)
        if self._merged is not None:
            self._global = copy.deepcopy(dict(fragment))
            self._merged = merge_fragments(self._global, self._project)

    def set_scoped_value(self, scope_name: str, key: str, value: ConfigValue) -> None:
        """Persist ``utilities.<scope_name>.<key>`` in the project fragment.

        Passing :data:`UNSET` deletes the key and prunes the scope mapping and
        the ``utilities`` mapping when they become empty.

        Raises:
            FilesystemError: If the updated project fragment cannot be written.
        """

        if self._project is None:
            self.load({})
        fragment = copy.deepcopy(self._project or {})
        utilities = fragment.get(UTILITIES_KEY)
        if not isinstance(utilities, dict):
            utilities = fragment[UTILITIES_KEY] = {}
        scope = utilities.get(scope_name)
        if not isinstance(scope, dict):
            scope = utilities[scope_name] = {}

        if value is UNSET:
            scope.pop(key, None)
            if not scope:
                del utilities[scope_name]
            if not utilities:
                del fragment[UTILITIES_KEY]
        else:
            scope[key] = value

        try:
            self.save_project_fragment(fragment)
        except FilesystemError as exc:
            raise FilesystemError("set utility config", self._paths.project_config, exc) from exc

    def reset(self) -> None:
        """Forget all fragments, returning to the never-loaded state."""

        self._global = None
        self._project = None
        self._merged = None

    def is_loaded(self) -> bool:
        """Return ``True`` when a merged configuration is held in memory."""

        return self._merged is not None

    def get_sources(self) -> ConfigSources:
        """Return the global, project and merged fragments for inspection.

        Returns:
            ConfigSources: Current in-memory fragments; entries are ``None``
            before the first :meth:`load`.
        """

        return ConfigSources(
            global_fragment=self._global,
            project_fragment=self._project,
            merged=self._merged,
        )

    def _require_loaded(self) -> dict[str, ConfigValue]:
        if self._merged is None:
            raise NotLoadedError
        return self._merged


__all__ = ["ConfigSources", "ConfigurationResolver", "KeyPath", "UNSET", "UTILITIES_KEY"]
