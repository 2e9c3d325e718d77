"""Unit tests for the Jira REST client (httpx.MockTransport)."""

from __future__ import annotations

import base64

import httpx
import pytest

from clients.jira_client import JiraClient, _parse_issue
from linker.errors import NotFoundError, TicketLookupError, TicketNotFoundError

ISSUE_PAYLOAD = {
    "key": "ABC-1",
    "fields": {
        "summary": "Add login",
        "issuetype": {"name": "Story", "iconUrl": "https://acme.atlassian.net/story.svg"},
        "project": {"key": "ABC", "name": "Alphabet"},
    },
}


def test_parse_issue():
    details = _parse_issue(ISSUE_PAYLOAD, "https://acme.atlassian.net")
    assert details.key == "ABC-1"
    assert details.summary == "Add login"
    assert details.url == "https://acme.atlassian.net/browse/ABC-1"
    assert details.type.name == "Story"
    assert details.type.icon == "https://acme.atlassian.net/story.svg"
    assert details.project.url == "https://acme.atlassian.net/browse/ABC"


def test_parse_issue_without_project():
    payload = {"key": "ABC-1", "fields": {"summary": "x", "issuetype": {"name": "Bug"}}}
    details = _parse_issue(payload, "https://jira")
    assert details.project is None
    assert details.type.icon == ""


@pytest.mark.asyncio
async def test_get_ticket_details_with_preencoded_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/rest/api/2/issue/ABC-1"
        assert request.url.params["fields"] == "project,summary,issuetype"
        assert request.headers["Authorization"] == "Basic dXNlcjp0b2tlbg=="
        return httpx.Response(200, json=ISSUE_PAYLOAD)

    client = JiraClient(
        "https://acme.atlassian.net/", token="dXNlcjp0b2tlbg==", transport=httpx.MockTransport(handler)
    )
    async with client:
        details = await client.get_ticket_details("ABC-1")

    assert details.url == "https://acme.atlassian.net/browse/ABC-1"


@pytest.mark.asyncio
async def test_get_ticket_details_with_username():
    expected = "Basic " + base64.b64encode(b"bot@acme.io:secret").decode()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == expected
        return httpx.Response(200, json=ISSUE_PAYLOAD)

    client = JiraClient(
        "https://acme.atlassian.net", token="secret", username="bot@acme.io", transport=httpx.MockTransport(handler)
    )
    async with client:
        assert (await client.get_ticket_details("ABC-1")).key == "ABC-1"


@pytest.mark.asyncio
async def test_missing_ticket_raises_not_found():
    client = JiraClient("https://jira", token="t", transport=httpx.MockTransport(lambda r: httpx.Response(404)))
    async with client:
        with pytest.raises(TicketNotFoundError) as exc_info:
            await client.get_ticket_details("ABC-404")

    assert isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.key == "ABC-404"


@pytest.mark.asyncio
async def test_server_error_raises_lookup_error():
    client = JiraClient("https://jira", token="t", transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    async with client:
        with pytest.raises(TicketLookupError) as exc_info:
            await client.get_ticket_details("ABC-1")

    assert not isinstance(exc_info.value, TicketNotFoundError)


@pytest.mark.asyncio
async def test_transport_error_raises_lookup_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = JiraClient("https://jira", token="t", transport=httpx.MockTransport(handler))
    async with client:
        with pytest.raises(TicketLookupError, match="connection refused"):
            await client.get_ticket_details("ABC-1")


@pytest.mark.asyncio
async def test_malformed_payload_raises_lookup_error():
    client = JiraClient(
        "https://jira", token="t", transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"fields": {}}))
    )
    async with client:
        with pytest.raises(TicketLookupError):
            await client.get_ticket_details("ABC-1")


@pytest.mark.asyncio
async def test_from_settings_uses_configured_site_and_credentials(make_settings):
    settings = make_settings(jira_base_url="https://acme.atlassian.net/", jira_token="secret", jira_username="bot@acme.io")
    expected = "Basic " + base64.b64encode(b"bot@acme.io:secret").decode()

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.host == "acme.atlassian.net"
        assert request.headers["Authorization"] == expected
        return httpx.Response(200, json=ISSUE_PAYLOAD)

    async with JiraClient.from_settings(settings, transport=httpx.MockTransport(handler)) as client:
        details = await client.get_ticket_details("ABC-1")

    assert details.url == "https://acme.atlassian.net/browse/ABC-1"
