from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

PR_EVENT_NAMES = frozenset({"pull_request", "pull_request_target"})


class PullRequestContext(BaseModel):
    number: int
    title: str = ""
    head_ref: str
    body: str = ""


class GithubEventContext(BaseModel):
    event_name: str
    owner: str
    repo: str
    pull_request: Optional[PullRequestContext] = None

    @property
    def is_pr_action(self) -> bool:
        return self.event_name in PR_EVENT_NAMES and self.pull_request is not None
