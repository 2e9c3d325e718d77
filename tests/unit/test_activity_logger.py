"""Unit tests for the activity logger's JSON-lines file."""

from __future__ import annotations

import json

from app_logging.activity_logger import ActivityLogger


def test_no_file_written_without_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    ActivityLogger("test").info("something_happened", pr_number=1)
    assert list(tmp_path.iterdir()) == []


def test_events_appended_as_json_lines(tmp_path, monkeypatch):
    log_path = tmp_path / "logs" / "activity.jsonl"
    monkeypatch.setenv("ACTIVITY_LOG_PATH", str(log_path))

    logger = ActivityLogger("issue_linker")
    logger.info("issue_keys_collected", keys=["ABC-1"])
    logger.error("jira_description_failed", exc=RuntimeError("boom"))

    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [r["event"] for r in records] == ["issue_keys_collected", "jira_description_failed"]
    assert records[0]["component"] == "issue_linker"
    assert records[0]["keys"] == ["ABC-1"]
    assert records[1]["level"] == "error"
    assert records[1]["error_type"] == "RuntimeError"
    assert records[1]["error_message"] == "boom"
