# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Content-fingerprint cache deciding which prompt sources need recompiling."""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from collections.abc import Callable, Iterable, Mapping, MutableMapping
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Final, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict

from ..paths import DETECTION_CACHE_FILE_NAME, HASH_CACHE_FILE_NAME, RexPaths

LOGGER = logging.getLogger(__name__)

FingerprintMap: TypeAlias = dict[str, str]
DetectionMap: TypeAlias = dict[str, dict[str, Any]]
ByteReader: TypeAlias = Callable[[Path], bytes]
PathT = TypeVar("PathT", bound="str | PathLike[str]")

_JSON_INDENT: Final[int] = 2


class _CacheCorrupt(Exception):
    """Raised when a cache document exists but cannot be used."""


@dataclass(slots=True)
class CacheSnapshot:
    """Fingerprint and detection mappings read from disk."""

    fingerprints: FingerprintMap = field(default_factory=dict)
    detections: DetectionMap = field(default_factory=dict)


@dataclass(slots=True)
class ChangeSet:
    """Partition of input paths into those needing compilation and those not."""

    changed: list[Any] = field(default_factory=list)
    unchanged: list[Any] = field(default_factory=list)


class CacheStats(BaseModel):
    """Diagnostic summary of the persisted cache."""

    model_config = ConfigDict(frozen=True)

    fingerprint_entries: int
    detection_entries: int
    directory: Path
    exists: bool
    error: str | None = None


def cache_key(path: str | PathLike[str]) -> str:
    """Return the mapping key used for ``path`` (its absolute form)."""

    return str(Path(path).absolute())


def _read_bytes(path: Path) -> bytes:
    return path.read_bytes()


class CompilationCache:
    """Persist SHA-256 fingerprints of compiled sources alongside detection results.

    Reads are fail-open: a missing, unreadable or corrupt cache behaves as an
    empty one, and an unreadable source file always counts as changed. Writes
    are fail-safe: a failed save is logged and otherwise ignored.
    """

    def __init__(self, directory: Path | None = None, *, reader: ByteReader | None = None) -> None:
        """Initialise the cache rooted at ``directory``.

        Args:
            directory: Cache directory. Defaults to ``./.rex/cache``.
            reader: Callable returning the raw bytes of a file; defaults to
                reading the file from disk.
        """

        self._dir = directory if directory is not None else RexPaths.from_environment().cache_dir
        self._reader = reader or _read_bytes

    @property
    def directory(self) -> Path:
        """Return the directory holding both cache documents."""

        return self._dir

    @property
    def hash_cache_path(self) -> Path:
        """Return the location of the fingerprint document."""

        return self._dir / HASH_CACHE_FILE_NAME

    @property
    def detection_cache_path(self) -> Path:
        """Return the location of the detection document."""

        return self._dir / DETECTION_CACHE_FILE_NAME

    def load(self) -> CacheSnapshot:
        """Return both persisted mappings, never raising.

        A missing document yields an empty mapping for that document only. If
        either document is unreadable or malformed both mappings are empty and
        a warning is logged.

        Returns:
            CacheSnapshot: Fingerprint and detection mappings.
        """

        try:
            fingerprints = self._read_document(self.hash_cache_path)
            detections = self._read_document(self.detection_cache_path)
        except _CacheCorrupt as exc:
            LOGGER.warning("Could not load cache: %s", exc)
            return CacheSnapshot()
        return CacheSnapshot(
            fingerprints={str(key): str(value) for key, value in fingerprints.items()},
            detections=dict(detections),
        )

    def save(self, fingerprints: Mapping[str, str], detections: Mapping[str, Any]) -> bool:
        """Replace both persisted mappings, logging instead of raising on failure.

        Args:
            fingerprints: Path to digest mapping.
            detections: Directory to detection record mapping.

        Returns:
            bool: ``True`` when both documents were written.
        """

        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            self._write_document(self.hash_cache_path, fingerprints)
            self._write_document(self.detection_cache_path, detections)
        except (OSError, TypeError, ValueError) as exc:
            LOGGER.error("Failed to save cache: %s", exc)
            return False
        LOGGER.debug("cache saved to %s", self._dir)
        return True

    def fingerprint(self, file_path: str | PathLike[str]) -> str | None:
        """Return the SHA-256 hex digest of the file's bytes, or ``None`` if unreadable."""

        path = Path(file_path)
        try:
            content = self._reader(path)
        except Exception as exc:  # any reader failure means "unreadable"
            LOGGER.warning("Failed to fingerprint %s: %s", path, exc)
            return None
        return hashlib.sha256(content).hexdigest()

    def has_changed(self, file_path: str | PathLike[str], fingerprints: Mapping[str, str]) -> bool:
        """Return ``True`` unless the stored digest matches the file's current digest."""

        current = self.fingerprint(file_path)
        if current is None:
            return True
        stored = fingerprints.get(cache_key(file_path))
        return stored is None or stored != current

    def classify(self, file_paths: Iterable[PathT]) -> ChangeSet:
        """Split ``file_paths`` against the persisted fingerprints, preserving order."""

        fingerprints = self.load().fingerprints
        result = ChangeSet()
        for file_path in file_paths:
            if self.has_changed(file_path, fingerprints):
                result.changed.append(file_path)
            else:
                result.unchanged.append(file_path)
        return result

    def update_fingerprint(self, file_path: str | PathLike[str], fingerprints: MutableMapping[str, str]) -> bool:
        """Record the current digest of ``file_path`` in ``fingerprints``.

        A failed read leaves any existing entry untouched, so the file is
        classified as changed again on the next run.

        Returns:
            bool: ``True`` when the mapping was updated.
        """

        digest = self.fingerprint(file_path)
        if digest is None:
            return False
        fingerprints[cache_key(file_path)] = digest
        return True

    def clear(self) -> bool:
        """Delete the cache directory; absent directories are not an error.

        Returns:
            bool: ``True`` when the directory no longer exists afterwards.
        """

        if not self._dir.exists():
            return True
        try:
            shutil.rmtree(self._dir)
        except OSError as exc:
            LOGGER.error("Failed to clear cache: %s", exc)
            return False
        LOGGER.info("cache cleared: %s", self._dir)
        return True

    def stats(self) -> CacheStats:
        """Return entry counts and location details without ever raising."""

        try:
            snapshot = self.load()
            return CacheStats(
                fingerprint_entries=len(snapshot.fingerprints),
                detection_entries=len(snapshot.detections),
                directory=self._dir,
                exists=self._dir.exists(),
            )
        except OSError as exc:
            return CacheStats(
                fingerprint_entries=0,
                detection_entries=0,
                directory=self._dir,
                exists=False,
                error=str(exc),
            )

    def _read_document(self, path: Path) -> dict[str, Any]:
        try:
            if not path.is_file():
                return {}
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise _CacheCorrupt(f"{path}: {exc}") from exc
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise _CacheCorrupt(f"{path} must contain a JSON object")
        return raw

    @staticmethod
    def _write_document(path: Path, payload: Mapping[str, Any]) -> None:
        path.write_text(json.dumps(dict(payload), indent=_JSON_INDENT) + "\n", encoding="utf-8")


__all__ = [
    "CacheSnapshot",
    "CacheStats",
    "ChangeSet",
    "CompilationCache",
    "cache_key",
]
