from __future__ import annotations

import re
from typing import Optional

from app_logging.activity_logger import ActivityLogger
from config.settings import Settings

logger = ActivityLogger("issue_key_matcher")

# Project key (letters, optional digits, optional hyphen-joined segments), a hyphen, digits.
JIRA_REGEX_MATCHER = re.compile(r"([A-Z][A-Z0-9]*(?:-[A-Z][A-Z0-9]*)*-\d+)", re.IGNORECASE)


def _last_group(match: re.Match) -> Optional[str]:
    """Value of the last capture group, or the whole match for group-less patterns."""
    if match.re.groups == 0:
        return match.group(0)
    return match.group(match.re.groups)


class IssueKeyMatcher:
    """
    Finds Jira issue keys in free text.

    Without a custom pattern the built-in key pattern is used and the whole
    token is the key. With one, the last capture group is taken as the issue
    number and prefixed with the project key when one is configured.
    """

    def __init__(self, custom_regexp: str = "", project_key: str = "") -> None:
        self.project_key = project_key
        self.uses_custom_regexp = bool(custom_regexp)
        self._pattern = (
            re.compile(custom_regexp, re.IGNORECASE) if custom_regexp else JIRA_REGEX_MATCHER
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> IssueKeyMatcher:
        return cls(settings.custom_issue_number_regexp, settings.jira_project_key)

    def _to_key(self, captured: str) -> str:
        if self.uses_custom_regexp and self.project_key:
            captured = f"{self.project_key}-{captured}"
        return captured.upper()

    def find_first(self, text: Optional[str]) -> Optional[str]:
        """Key from the first match in text, or None."""
        if not text:
            return None
        match = self._pattern.search(text)
        if match is None:
            return None
        captured = _last_group(match)
        return self._to_key(captured) if captured else None

    def find_all(self, text: Optional[str]) -> list[str]:
        """Keys from every match in text, left to right, repeats included."""
        if not text:
            return []
        keys = [
            self._to_key(captured)
            for captured in (_last_group(m) for m in self._pattern.finditer(text))
            if captured
        ]
        logger.debug("issue_keys_matched", text=text, keys=keys)
        return keys
