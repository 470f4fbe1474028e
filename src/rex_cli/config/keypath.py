# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dotted key-path addressing for nested configuration mappings."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Final

from ..errors import ValidationError
from .types import ConfigValue, MutableConfigFragment

KEY_SEPARATOR: Final[str] = "."


class _UnsetType:
    """Marker type whose single instance requests deletion of a key."""

    _instance: _UnsetType | None = None

    def __new__(cls) -> _UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _UnsetType()


def is_mapping(value: object) -> bool:
    """Return ``True`` when ``value`` is a nested mapping (not a list or scalar)."""

    return isinstance(value, Mapping)


@dataclass(frozen=True, slots=True)
class KeyPath:
    """Ordered segments parsed from a dotted key path such as ``deploy.defaultTags``."""

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, dotted: str | KeyPath) -> KeyPath:
        """Return the key path represented by ``dotted``.

        Args:
            dotted: Dotted string or an existing :class:`KeyPath`.

        Returns:
            KeyPath: Parsed key path.

        Raises:
            ValidationError: If the string is empty or contains an empty segment.
        """

        if isinstance(dotted, KeyPath):
            return dotted
        segments = tuple(dotted.split(KEY_SEPARATOR))
        if not dotted or any(not segment for segment in segments):
            raise ValidationError(
                f"Invalid key path: {dotted!r}",
                ["Use dot-separated, non-empty segments such as deploy.defaultUtility."],
            )
        return cls(segments)

    @property
    def parent(self) -> tuple[str, ...]:
        return self.segments[:-1]

    @property
    def leaf(self) -> str:
        return self.segments[-1]

    def __str__(self) -> str:
        return KEY_SEPARATOR.join(self.segments)


def get_nested(data: Mapping[str, ConfigValue], key_path: str | KeyPath, default: ConfigValue = None) -> ConfigValue:
    """Return the value at ``key_path`` or ``default`` when any level is absent."""

    current: ConfigValue = data
    for segment in KeyPath.parse(key_path).segments:
        if not is_mapping(current) or segment not in current:
            return default
        current = current[segment]
    return current


def set_nested(data: MutableConfigFragment, key_path: str | KeyPath, value: ConfigValue) -> None:
    """Assign ``value`` at ``key_path``, replacing non-mapping intermediates with new mappings."""

    path = KeyPath.parse(key_path)
    current: MutableConfigFragment = data
    for segment in path.parent:
        child = current.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            current[segment] = child
        current = child
    current[path.leaf] = value


def delete_nested(data: MutableConfigFragment, key_path: str | KeyPath) -> bool:
    """Remove the leaf at ``key_path`` and prune ancestors left empty.

    The root mapping itself is never removed. Deleting a path that does not
    exist is a no-op.

    Args:
        data: Mapping modified in place.
        key_path: Dotted path of the value to delete.

    Returns:
        bool: ``True`` when a value was removed.
    """

    path = KeyPath.parse(key_path)
    chain: list[MutableConfigFragment] = [data]
    current: ConfigValue = data
    for segment in path.parent:
        if not isinstance(current, MutableMapping) or segment not in current:
            return False
        current = current[segment]
        chain.append(current)
    if not isinstance(current, MutableMapping) or path.leaf not in current:
        return False
    del current[path.leaf]

    for depth in range(len(path.parent), 0, -1):
        container = chain[depth]
        if isinstance(container, MutableMapping) and not container:
            del chain[depth - 1][path.segments[depth - 1]]
        else:
            break
    return True


__all__ = [
    "KEY_SEPARATOR",
    "KeyPath",
    "UNSET",
    "delete_nested",
    "get_nested",
    "is_mapping",
    "set_nested",
]
