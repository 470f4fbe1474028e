# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for project detection of AI-IDE integrations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from rex_cli.detection import DetectionResult, SmartDetector, UtilityDetection


def test_detects_vscode_and_cursor_markers(tmp_path: Path) -> None:
    (tmp_path / ".vscode").mkdir()
    (tmp_path / ".vscode" / "settings.json").write_text("{}", encoding="utf-8")
    (tmp_path / ".cursorrules").write_text("rules", encoding="utf-8")

    result = SmartDetector().detect(tmp_path)

    assert result.detected_utilities == ["vscode", "cursor"]
    vscode = result.details["vscode"]
    assert {found.path for found in vscode.found_paths} == {".vscode/settings.json", ".vscode"}
    assert vscode.missing_paths == [".vscode/extensions.json"]
    assert vscode.confidence == 2 / 3
    cursor_file = result.details["cursor"].found_paths[0]
    assert cursor_file.type == "file"
    assert cursor_file.size == len("rules")


def test_empty_project_detects_nothing(tmp_path: Path) -> None:
    detector = SmartDetector()

    result = detector.detect(tmp_path)

    assert result.detected_utilities == []
    assert result.details == {}
    assert "No known tool configuration detected." in detector.format_result(result)


def test_suggestions_are_sorted_by_confidence(tmp_path: Path) -> None:
    (tmp_path / ".cursorrules").write_text("", encoding="utf-8")
    (tmp_path / ".github" / "copilot" / "prompts").mkdir(parents=True)
    (tmp_path / ".github" / "copilot" / "instructions").mkdir(parents=True)
    detector = SmartDetector()

    result = detector.detect(tmp_path)
    suggestions = detector.suggest(result)

    assert [item.utility for item in suggestions] == ["github-copilot", "cursor"]
    assert suggestions[0].confidence == 1.0
    assert "Recommended: github-copilot (confidence: 100%)" in detector.format_result(result)


def test_custom_rules_replace_defaults(tmp_path: Path) -> None:
    (tmp_path / "AGENTS.md").write_text("", encoding="utf-8")
    detector = SmartDetector(rules={"agents": ["AGENTS.md"]})
    detector.add_rule("windsurf", [".windsurfrules"])

    result = detector.detect(tmp_path)

    assert detector.supported_utilities() == ["agents", "windsurf"]
    assert result.detected_utilities == ["agents"]


def test_cache_validity_window() -> None:
    now = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
    fresh = {"timestamp": (now - timedelta(minutes=29)).isoformat()}
    stale = {"timestamp": (now - timedelta(minutes=30)).isoformat()}

    assert SmartDetector.is_cache_valid(fresh, now=now)
    assert not SmartDetector.is_cache_valid(stale, now=now)
    assert SmartDetector.is_cache_valid(stale, 60, now=now)
    assert not SmartDetector.is_cache_valid(None, now=now)
    assert not SmartDetector.is_cache_valid({"timestamp": "yesterday"}, now=now)
    assert not SmartDetector.is_cache_valid({}, now=now)


def test_detect_with_cache_reuses_fresh_record(tmp_path: Path) -> None:
    key = str(tmp_path.resolve())
    cached = DetectionResult(
        project_dir=key,
        detected_utilities=["cursor"],
        details={"cursor": UtilityDetection(found=True, confidence=1.0)},
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    store = {key: cached.model_dump(mode="json")}

    result = SmartDetector().detect_with_cache(tmp_path, store)

    assert result.detected_utilities == ["cursor"]


def test_detect_with_cache_refreshes_stale_record(tmp_path: Path) -> None:
    key = str(tmp_path.resolve())
    stale_time = datetime.now(timezone.utc) - timedelta(hours=2)
    store = {
        key: DetectionResult(
            project_dir=key,
            detected_utilities=["cursor"],
            timestamp=stale_time.isoformat(),
        ).model_dump(mode="json"),
    }

    result = SmartDetector().detect_with_cache(tmp_path, store)

    assert result.detected_utilities == []
    assert store[key]["timestamp"] == result.timestamp
    assert store[key]["detected_utilities"] == []
