from __future__ import annotations

from typing import Iterable, Optional

from app_logging.activity_logger import ActivityLogger
from linker.errors import NoIssueKeyFoundError
from linker.issue_key_matcher import IssueKeyMatcher
from schemas.source import ExtractionResult, IssueKeyHit, MatchSource

logger = ActivityLogger("source_aggregator")

_BRANCH_POLICIES = {MatchSource.BRANCH, MatchSource.BOTH, MatchSource.ALL}
_TITLE_POLICIES = {MatchSource.PR_TITLE, MatchSource.BOTH, MatchSource.ALL}
_COMMIT_POLICIES = {MatchSource.COMMITS, MatchSource.ALL}


def uses_branch(policy: MatchSource) -> bool:
    return policy in _BRANCH_POLICIES


def uses_title(policy: MatchSource) -> bool:
    return policy in _TITLE_POLICIES


def uses_commits(policy: MatchSource) -> bool:
    return policy in _COMMIT_POLICIES


class SourceAggregator:
    """Runs the matcher over the PR's text sources and merges the results."""

    def __init__(self, matcher: IssueKeyMatcher) -> None:
        self.matcher = matcher

    # ── Multi-issue mode ──────────────────────────────────────────────────────

    def collect(
        self,
        policy: MatchSource,
        branch_name: str,
        pr_title: Optional[str],
        commit_messages: Iterable[str] = (),
    ) -> ExtractionResult:
        """
        Collect keys from every source the policy enables, always in the order
        branch, PR title, commit messages. A key seen in more than one place
        keeps its first position and the source it was first found in.

        Raises NoIssueKeyFoundError when nothing matched.
        """
        hits: list[IssueKeyHit] = []

        if uses_branch(policy):
            hits.extend(self._hits(branch_name, MatchSource.BRANCH))
        if uses_title(policy):
            hits.extend(self._hits(pr_title or "", MatchSource.PR_TITLE))
        if uses_commits(policy):
            for message in commit_messages:
                hits.extend(self._hits(message, MatchSource.COMMITS, log=False))
            commit_keys = [h.key for h in hits if h.source == MatchSource.COMMITS]
            if commit_keys:
                logger.info("issue_keys_found", source=MatchSource.COMMITS.value, keys=commit_keys)

        result = ExtractionResult.from_hits(hits)
        if not result.hits:
            raise NoIssueKeyFoundError("No JIRA keys found")

        logger.info("issue_keys_collected", count=len(result), keys=result.keys)
        return result

    def _hits(self, text: str, source: MatchSource, log: bool = True) -> list[IssueKeyHit]:
        keys = self.matcher.find_all(text)
        if keys and log:
            logger.info("issue_keys_found", source=source.value, keys=keys)
        return [IssueKeyHit(key=key, source=source) for key in keys]

    # ── Legacy single-issue mode ──────────────────────────────────────────────

    def collect_single(
        self,
        policy: MatchSource,
        branch_name: str,
        pr_title: Optional[str],
    ) -> IssueKeyHit:
        """
        Find exactly one key. `both` tries the PR title first and falls back to
        the branch; `commits` and `all` need multi-issue mode.

        Raises NoIssueKeyFoundError when nothing matched.
        """
        hit: Optional[IssueKeyHit] = None

        if policy == MatchSource.BRANCH:
            hit = self._first_hit(branch_name, MatchSource.BRANCH)
        elif policy == MatchSource.PR_TITLE:
            hit = self._first_hit(pr_title, MatchSource.PR_TITLE)
        elif policy == MatchSource.BOTH:
            hit = self._first_hit(pr_title, MatchSource.PR_TITLE) or self._first_hit(
                branch_name, MatchSource.BRANCH
            )
        else:
            raise NoIssueKeyFoundError(
                f"Source '{policy.value}' is only supported with multiple JIRA issues enabled"
            )

        if hit is None:
            raise NoIssueKeyFoundError("JIRA key not found")

        logger.info("issue_key_found", key=hit.key, source=hit.source.value)
        return hit

    def _first_hit(self, text: Optional[str], source: MatchSource) -> Optional[IssueKeyHit]:
        logger.debug("issue_key_lookup", source=source.value, text=text)
        key = self.matcher.find_first(text)
        return IssueKeyHit(key=key, source=source) if key else None
