from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MatchSource(str, Enum):
    BRANCH = "branch"
    PR_TITLE = "prTitle"
    COMMITS = "commits"
    BOTH = "both"      # legacy: title first, branch as fallback
    ALL = "all"        # every source, multi-result


class IssueKeyHit(BaseModel):
    key: str = Field(..., description="Upper-cased Jira issue key, e.g. PROJ-123")
    source: MatchSource


class ExtractionResult(BaseModel):
    """Issue keys in first-seen order, each tagged with the source it came from."""

    hits: list[IssueKeyHit] = Field(default_factory=list)

    @classmethod
    def from_hits(cls, hits: list[IssueKeyHit]) -> ExtractionResult:
        """Drop repeated keys, keeping the earliest hit (and so its source)."""
        seen: set[str] = set()
        unique: list[IssueKeyHit] = []
        for hit in hits:
            if hit.key not in seen:
                seen.add(hit.key)
                unique.append(hit)
        return cls(hits=unique)

    @property
    def keys(self) -> list[str]:
        return [h.key for h in self.hits]

    @property
    def sources(self) -> list[MatchSource]:
        return [h.source for h in self.hits]

    @property
    def primary(self) -> Optional[IssueKeyHit]:
        return self.hits[0] if self.hits else None

    def __len__(self) -> int:
        return len(self.hits)
