from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from app_logging.activity_logger import ActivityLogger
from linker.errors import NoOwnerFoundError
from schemas.github import GithubEventContext, PullRequestContext

logger = ActivityLogger("event_context")


def _read_payload(event_path: str) -> dict:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        logger.warning("github_event_file_missing", event_path=event_path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _resolve_owner(payload: dict) -> str:
    organization = payload.get("organization") or {}
    if organization.get("login"):
        return organization["login"]

    logger.info("github_organization_not_found", message="using repository owner instead")
    owner = ((payload.get("repository") or {}).get("owner") or {}).get("login")
    if not owner:
        raise NoOwnerFoundError("Could not find owner.")
    return owner


def _parse_pull_request(data: Any) -> PullRequestContext | None:
    if not isinstance(data, dict) or data.get("number") is None:
        return None
    return PullRequestContext(
        number=data["number"],
        title=data.get("title") or "",
        head_ref=(data.get("head") or {}).get("ref", ""),
        body=data.get("body") or "",
    )


def parse_event_payload(event_name: str, payload: dict) -> GithubEventContext:
    """Build the run context from a webhook payload as the Actions runner stores it."""
    return GithubEventContext(
        event_name=event_name,
        owner=_resolve_owner(payload),
        repo=(payload.get("repository") or {}).get("name", ""),
        pull_request=_parse_pull_request(payload.get("pull_request")),
    )


def load_event_context(event_name: str, event_path: str) -> GithubEventContext:
    """Load GITHUB_EVENT_PATH. Raises NoOwnerFoundError if no owner can be found."""
    context = parse_event_payload(event_name, _read_payload(event_path))
    logger.info(
        "github_event_loaded",
        event_name=event_name,
        owner=context.owner,
        repo=context.repo,
        pr_number=context.pull_request.number if context.pull_request else None,
    )
    return context
