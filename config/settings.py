import re
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schemas.source import MatchSource


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        frozen=True,
    )

    # ── Issue key extraction ─────────────────────────────────────────────────
    what_to_use: MatchSource = MatchSource.BRANCH
    custom_issue_number_regexp: str = ""
    jira_project_key: str = ""
    branch_ignore_pattern: str = ""

    # ── Behaviour ────────────────────────────────────────────────────────────
    fail_when_jira_issue_not_found: bool = False
    use_multiple_jira_issues: bool = False
    dry_run: bool = False

    # ── GitHub ───────────────────────────────────────────────────────────────
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    github_event_name: str = ""
    github_event_path: str = ""
    github_output: str = ""        # file the runner collects step outputs from

    # ── Jira ─────────────────────────────────────────────────────────────────
    jira_base_url: str = ""        # e.g. https://your-org.atlassian.net
    jira_token: str = ""
    jira_username: str = ""

    # ── HTTP ─────────────────────────────────────────────────────────────────
    http_timeout_seconds: float = 30.0

    # ── Logging ──────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    activity_log_path: str = ""

    @field_validator("custom_issue_number_regexp", "branch_ignore_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        if value:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value

    # ── Derived helpers ──────────────────────────────────────────────────────
    @property
    def uses_custom_regexp(self) -> bool:
        return bool(self.custom_issue_number_regexp)

    @property
    def jira_api_base(self) -> str:
        return self.jira_base_url.rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
