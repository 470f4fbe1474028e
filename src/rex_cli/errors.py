# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the configuration, cache, and compile layers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class RexError(Exception):
    """Base class for errors raised by rex-cli."""


class NotLoadedError(RexError):
    """Raised when configuration is queried before it has been loaded."""

    def __init__(self, message: str = "Configuration not loaded. Call load() first.") -> None:
        super().__init__(message)


class ValidationError(RexError):
    """Raised when configuration or user input fails validation.

    Attributes:
        suggestions: Optional hints displayed alongside the message.
        missing: Key paths that were required but absent.
    """

    def __init__(
        self,
        message: str,
        suggestions: Sequence[str] | None = None,
        *,
        missing: Sequence[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.suggestions = list(suggestions or [])
        self.missing = list(missing or [])


class FilesystemError(RexError):
    """Raised when a persistence write or directory operation fails."""

    def __init__(self, operation: str, path: Path | str, cause: BaseException) -> None:
        super().__init__(f"Failed to {operation} '{path}': {cause}")
        self.operation = operation
        self.path = str(path)
        self.cause = cause


class ConfigurationError(RexError):
    """Raised when merging configuration fragments fails unexpectedly."""


class NotFoundError(RexError):
    """Raised when a named resource (prompt, utility, key) does not exist."""

    def __init__(self, resource: str, kind: str = "resource") -> None:
        super().__init__(f"{kind} '{resource}' not found")
        self.resource = resource
        self.kind = kind


class PermissionDeniedError(RexError):
    """Raised when the filesystem refuses access to a rex location."""

    def __init__(self, path: Path | str, detail: str) -> None:
        super().__init__(f"Permission denied: {path}. {detail}")
        self.path = str(path)


__all__ = [
    "ConfigurationError",
    "FilesystemError",
    "NotFoundError",
    "NotLoadedError",
    "PermissionDeniedError",
    "RexError",
    "ValidationError",
]
