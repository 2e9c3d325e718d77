"""Shared fixtures for unit tests: settings and Jira/GitHub fakes."""

from __future__ import annotations

import pytest

from config.settings import Settings
from schemas.github import GithubEventContext, PullRequestContext
from schemas.ticket import TicketDetails, TicketType


@pytest.fixture
def make_settings():
    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


def make_ticket(key: str, summary: str = "Some work") -> TicketDetails:
    return TicketDetails(
        key=key,
        summary=summary,
        url=f"https://acme.atlassian.net/browse/{key}",
        type=TicketType(name="Story", icon="https://acme.atlassian.net/story.svg"),
    )


@pytest.fixture
def ticket_factory():
    return make_ticket


@pytest.fixture
def pr_context():
    def _make(head_ref: str = "feature/ABC-1-login", title: str = "", event_name: str = "pull_request"):
        return GithubEventContext(
            event_name=event_name,
            owner="acme",
            repo="web-app",
            pull_request=PullRequestContext(number=42, title=title, head_ref=head_ref),
        )

    return _make
