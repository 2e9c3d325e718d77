from __future__ import annotations

from typing import Optional


class IssueLinkerError(Exception):
    """Base class for every failure the linker reports."""


class NotFoundError(IssueLinkerError):
    pass


class NoOwnerFoundError(IssueLinkerError):
    pass


class NoIssueKeyFoundError(NotFoundError):
    pass


class TicketLookupError(IssueLinkerError):
    def __init__(self, key: str, message: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message or f"Failed to fetch Jira issue {key}")


class TicketNotFoundError(TicketLookupError, NotFoundError):
    def __init__(self, key: str) -> None:
        super().__init__(key, f"Jira issue {key} not found")


class NoValidTicketsFoundError(IssueLinkerError):
    pass


class CommitFetchError(IssueLinkerError):
    pass
