"""Root conftest.py: loads .env before any tests run."""
import pytest
from dotenv import load_dotenv

load_dotenv()

# Set by the Actions runner; must not leak into unit tests when CI runs them.
_RUNNER_ENV_VARS = (
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_OUTPUT",
    "WHAT_TO_USE",
    "CUSTOM_ISSUE_NUMBER_REGEXP",
    "JIRA_PROJECT_KEY",
    "BRANCH_IGNORE_PATTERN",
    "FAIL_WHEN_JIRA_ISSUE_NOT_FOUND",
    "USE_MULTIPLE_JIRA_ISSUES",
    "ACTIVITY_LOG_PATH",
    "DRY_RUN",
)


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch):
    """Clear the lru_cache on get_settings so monkeypatch.setenv takes effect."""
    from config.settings import get_settings
    for name in _RUNNER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
