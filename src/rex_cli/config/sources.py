# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""JSON-backed configuration fragment storage."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from ..errors import FilesystemError
from .types import ConfigFragment, ConfigValue

LOGGER = logging.getLogger(__name__)


class JsonFragmentSource:
    """Read and replace one configuration fragment stored as a JSON object."""

    def __init__(self, path: Path, *, name: str) -> None:
        """Bind the source to ``path``.

        Args:
            path: Location of the JSON document.
            name: Scope label used in warnings and error messages
                (``"global"`` or ``"project"``).
        """

        self.path = path
        self.name = name

    def load(self) -> dict[str, ConfigValue]:
        """Return the stored fragment, degrading to ``{}`` on any read problem.

        A missing file is silently empty. Unreadable, malformed or non-object
        documents log a warning and are treated as empty.

        Returns:
            dict[str, ConfigValue]: Parsed fragment or an empty mapping.
        """

        try:
            if not self.path.is_file():
                return {}
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            LOGGER.warning("Could not load %s config: %s", self.name, exc)
            return {}
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            LOGGER.warning(
                "Could not load %s config: %s must contain a JSON object, found %s",
                self.name,
                self.path,
                type(data).__name__,
            )
            return {}
        return dict(data)

    def save(self, fragment: ConfigFragment) -> None:
        """Replace the stored document with ``fragment``.

        Args:
            fragment: Complete replacement content.

        Raises:
            FilesystemError: If the directory cannot be created, the fragment
                cannot be serialised, or the write fails.
        """

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(dict(fragment), indent=2, ensure_ascii=False)
            self.path.write_text(payload + "\n", encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise FilesystemError(f"save {self.name} config", self.path, exc) from exc


__all__ = ["JsonFragmentSource"]
