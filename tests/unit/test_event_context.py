"""Unit tests for loading the GitHub event payload."""

from __future__ import annotations

import json

import pytest

from clients.event_context import load_event_context, parse_event_payload
from linker.errors import NoOwnerFoundError

PR_PAYLOAD = {
    "organization": {"login": "acme-org"},
    "repository": {"name": "web-app", "owner": {"login": "acme-user"}},
    "pull_request": {
        "number": 42,
        "title": "ABC-1 Add login",
        "body": None,
        "head": {"ref": "feature/ABC-1-login"},
    },
}


def test_load_event_context_from_file(tmp_path):
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps(PR_PAYLOAD), encoding="utf-8")

    context = load_event_context("pull_request", str(event_path))

    assert context.is_pr_action
    assert context.owner == "acme-org"
    assert context.repo == "web-app"
    assert context.pull_request.number == 42
    assert context.pull_request.head_ref == "feature/ABC-1-login"
    assert context.pull_request.title == "ABC-1 Add login"
    assert context.pull_request.body == ""


def test_owner_falls_back_to_repository_owner():
    payload = {k: v for k, v in PR_PAYLOAD.items() if k != "organization"}
    assert parse_event_payload("pull_request", payload).owner == "acme-user"


def test_no_owner_raises():
    with pytest.raises(NoOwnerFoundError):
        parse_event_payload("pull_request", {"repository": {"name": "web-app"}})


def test_missing_event_file_has_no_owner(tmp_path):
    with pytest.raises(NoOwnerFoundError):
        load_event_context("pull_request", str(tmp_path / "missing.json"))


def test_push_event_is_not_pr_action():
    payload = {"repository": {"name": "web-app", "owner": {"login": "acme"}}}
    context = parse_event_payload("push", payload)
    assert context.pull_request is None
    assert context.is_pr_action is False
