# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the rex-cli exception hierarchy."""

from __future__ import annotations

import pytest

from rex_cli.errors import (
    ConfigurationError,
    FilesystemError,
    NotFoundError,
    NotLoadedError,
    PermissionDeniedError,
    RexError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error",
    [
        NotLoadedError(),
        ValidationError("bad"),
        FilesystemError("write", "/tmp/x", OSError("boom")),
        ConfigurationError("broken"),
        NotFoundError("x"),
        PermissionDeniedError("/tmp/x", "nope"),
    ],
)
def test_every_error_derives_from_rex_error(error: RexError) -> None:
    assert isinstance(error, RexError)


def test_filesystem_error_message_and_attributes() -> None:
    cause = OSError("disk full")
    error = FilesystemError("save project config", "/p/.rex/config.json", cause)

    assert str(error) == "Failed to save project config '/p/.rex/config.json': disk full"
    assert error.operation == "save project config"
    assert error.path == "/p/.rex/config.json"
    assert error.cause is cause


def test_messages_for_lookup_errors() -> None:
    assert str(NotLoadedError()) == "Configuration not loaded. Call load() first."
    assert str(NotFoundError("review", kind="prompt")) == "prompt 'review' not found"
    assert str(PermissionDeniedError("/x", "Cannot write.")) == "Permission denied: /x. Cannot write."


def test_validation_error_carries_suggestions_and_missing_keys() -> None:
    error = ValidationError("invalid", ["try this"], missing=["a.b"])

    assert error.suggestions == ["try this"]
    assert error.missing == ["a.b"]
    assert ValidationError("plain").suggestions == []
