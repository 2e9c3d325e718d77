from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from app_logging.activity_logger import ActivityLogger

logger = ActivityLogger("branch_policy")

BOT_BRANCH_PATTERNS = [re.compile(r"^dependabot"), re.compile(r"^all-contributors")]
DEFAULT_BRANCH_PATTERNS = [
    re.compile(r"^master$"),
    re.compile(r"^main$"),
    re.compile(r"^production$"),
    re.compile(r"^gh-pages$"),
]


class SkipReason(str, Enum):
    BOT = "bot"
    DEFAULT_BRANCH = "default_branch"
    IGNORE_PATTERN = "ignore_pattern"


def branch_skip_reason(branch: str, ignore_pattern: Optional[str] = None) -> Optional[SkipReason]:
    """Why the branch should be left alone, or None. Checked bot, default, custom."""
    if any(p.search(branch) for p in BOT_BRANCH_PATTERNS):
        return SkipReason.BOT
    if any(p.search(branch) for p in DEFAULT_BRANCH_PATTERNS):
        return SkipReason.DEFAULT_BRANCH
    if ignore_pattern and re.search(ignore_pattern, branch):
        return SkipReason.IGNORE_PATTERN
    return None


def should_skip_branch(branch: str, ignore_pattern: Optional[str] = None) -> bool:
    reason = branch_skip_reason(branch, ignore_pattern)
    if reason is None:
        return False

    if reason == SkipReason.BOT:
        logger.info("branch_skipped_bot", branch=branch)
    elif reason == SkipReason.DEFAULT_BRANCH:
        logger.info("branch_skipped_default", branch=branch)
    else:
        logger.info("branch_skipped_ignore_pattern", branch=branch, ignore_pattern=ignore_pattern)
    return True
