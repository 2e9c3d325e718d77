from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel

from schemas.source import MatchSource

OutputValue = Union[str, int, bool, None]


def _to_output_value(value: OutputValue) -> str:
    """Stringify a step output the way @actions/core does."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ActionOutputs(BaseModel):
    """Step outputs. Multi-issue fields stay None in the single-issue shape."""

    issue_key: Optional[str] = None
    issue_found: bool = False
    issue_source: Optional[MatchSource] = None
    issue_keys: Optional[list[str]] = None
    issue_sources: Optional[list[MatchSource]] = None

    @classmethod
    def not_found(cls) -> ActionOutputs:
        return cls()

    @classmethod
    def single(cls, key: str, source: MatchSource) -> ActionOutputs:
        return cls(issue_key=key, issue_found=True, issue_source=source)

    @classmethod
    def multiple(cls, keys: list[str], sources: list[MatchSource]) -> ActionOutputs:
        return cls(
            issue_key=keys[0] if keys else None,
            issue_found=bool(keys),
            issue_source=sources[0] if sources else None,
            issue_keys=keys,
            issue_sources=sources,
        )

    @property
    def is_multiple(self) -> bool:
        return self.issue_keys is not None

    def as_dict(self) -> dict[str, str]:
        values: dict[str, OutputValue] = {
            "jira-issue-key": self.issue_key,
            "jira-issue-found": self.issue_found,
            "jira-issue-source": self.issue_source.value if self.issue_source else "null",
        }
        if self.is_multiple:
            values["jira-issue-keys"] = ",".join(self.issue_keys or [])
            values["jira-issue-count"] = len(self.issue_keys or [])
            values["jira-issue-sources"] = ",".join(s.value for s in self.issue_sources or [])
        return {name: _to_output_value(value) for name, value in values.items()}


class RunResult(BaseModel):
    outputs: ActionOutputs
    exit_code: int = 0
    pr_body: Optional[str] = None
    error_message: Optional[str] = None
