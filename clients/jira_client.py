"""Async Jira REST client: issue lookup for the PR summary block."""

from __future__ import annotations

from typing import Optional

import httpx

from app_logging.activity_logger import ActivityLogger
from config.settings import Settings
from linker.errors import TicketLookupError, TicketNotFoundError
from schemas.ticket import TicketDetails, TicketProject, TicketType

logger = ActivityLogger("jira_client")

ISSUE_FIELDS = "project,summary,issuetype"


def _parse_issue(data: dict, base_url: str) -> TicketDetails:
    """Convert a raw /rest/api/2/issue response to TicketDetails."""
    key = data["key"]
    fields = data.get("fields") or {}
    issue_type = fields.get("issuetype") or {}
    project = fields.get("project") or {}

    return TicketDetails(
        key=key,
        summary=fields.get("summary") or "",
        url=f"{base_url}/browse/{key}",
        type=TicketType(
            name=issue_type.get("name", ""),
            icon=issue_type.get("iconUrl", ""),
        ),
        project=TicketProject(
            key=project["key"],
            name=project.get("name", ""),
            url=f"{base_url}/browse/{project['key']}",
        )
        if project.get("key")
        else None,
    )


class JiraClient:
    def __init__(
        self,
        base_url: str,
        token: str,
        username: str = "",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        auth = None
        if username:
            auth = httpx.BasicAuth(username, token)
        elif token:
            # Pre-encoded "user:token" credential, sent as-is.
            headers["Authorization"] = f"Basic {token}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            auth=auth,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> JiraClient:
        return cls(
            base_url=settings.jira_api_base,
            token=settings.jira_token,
            username=settings.jira_username,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> JiraClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get_ticket_details(self, key: str) -> TicketDetails:
        """
        Fetch one issue.

        Raises TicketNotFoundError on 404 and TicketLookupError for any other
        HTTP or payload failure.
        """
        try:
            r = await self._client.get(f"/rest/api/2/issue/{key}", params={"fields": ISSUE_FIELDS})
        except httpx.HTTPError as exc:
            raise TicketLookupError(key, f"Failed to fetch Jira issue {key}: {exc}") from exc

        if r.status_code == 404:
            raise TicketNotFoundError(key)
        try:
            r.raise_for_status()
            details = _parse_issue(r.json(), self.base_url)
        except (httpx.HTTPError, ValueError, KeyError) as exc:
            raise TicketLookupError(key, f"Failed to fetch Jira issue {key}: {exc}") from exc

        logger.info("jira_ticket_fetched", issue_key=details.key, summary=details.summary)
        return details
