"""Async GitHub REST client for the pull request operations the linker needs."""

from __future__ import annotations

from typing import Optional

import httpx

from app_logging.activity_logger import ActivityLogger
from config.settings import Settings
from linker.errors import CommitFetchError

logger = ActivityLogger("github_client")

COMMITS_PER_PAGE = 100
# GitHub stops listing PR commits after this many.
MAX_PR_COMMITS = 250


def _headers(token: str) -> dict:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class GithubClient:
    """
    Thin wrapper over the pulls endpoints.

    Use as an async context manager; the underlying httpx.AsyncClient is
    closed on exit.
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            headers=_headers(token),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> GithubClient:
        return cls(
            token=settings.github_token,
            api_url=settings.github_api_url,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> GithubClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ── Pull requests ─────────────────────────────────────────────────────────

    async def list_commit_messages(self, owner: str, repo: str, pr_number: int) -> list[str]:
        """Messages of every commit on the PR, oldest first."""
        messages: list[str] = []
        page = 1
        try:
            while len(messages) < MAX_PR_COMMITS:
                r = await self._client.get(
                    f"/repos/{owner}/{repo}/pulls/{pr_number}/commits",
                    params={"per_page": COMMITS_PER_PAGE, "page": page},
                )
                r.raise_for_status()
                commits = r.json()
                if not isinstance(commits, list):
                    raise CommitFetchError(f"Unexpected commit list payload: {type(commits).__name__}")
                messages.extend(
                    (c.get("commit") or {}).get("message") or ""
                    for c in commits
                    if isinstance(c, dict)
                )
                if len(commits) < COMMITS_PER_PAGE:
                    break
                page += 1
        except (httpx.HTTPError, ValueError) as exc:
            raise CommitFetchError(f"Failed to fetch commit messages: {exc}") from exc

        logger.debug("github_commits_listed", pr_number=pr_number, count=len(messages))
        return messages

    async def get_description(self, owner: str, repo: str, pr_number: int) -> str:
        """Current PR body; None from the API comes back as an empty string."""
        r = await self._client.get(f"/repos/{owner}/{repo}/pulls/{pr_number}")
        r.raise_for_status()
        return r.json().get("body") or ""

    async def set_description(self, owner: str, repo: str, pr_number: int, body: str) -> None:
        r = await self._client.patch(
            f"/repos/{owner}/{repo}/pulls/{pr_number}",
            json={"body": body},
        )
        r.raise_for_status()
        logger.info("github_pr_description_updated", pr_number=pr_number, body_length=len(body))
