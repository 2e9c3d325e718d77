from __future__ import annotations

from typing import Optional

from app_logging.activity_logger import ActivityLogger
from clients.event_context import load_event_context
from clients.github_client import GithubClient
from clients.jira_client import JiraClient
from config.settings import Settings
from linker.branch_policy import should_skip_branch
from linker.errors import CommitFetchError, NoValidTicketsFoundError, TicketLookupError
from linker.issue_key_matcher import IssueKeyMatcher
from linker.pr_description import merge_pr_description
from linker.source_aggregator import SourceAggregator, uses_commits
from linker.ticket_renderer import render_ticket, render_tickets
from schemas.github import GithubEventContext
from schemas.outputs import ActionOutputs, RunResult
from schemas.source import MatchSource
from schemas.ticket import TicketDetails
from workflow.outputs import emit_error_annotation, write_outputs

logger = ActivityLogger("issue_linker")


class IssueLinker:
    """
    One run of the action: find the PR's Jira keys, look the issues up and
    write the summary block into the PR description.

    Every network call is awaited in turn; nothing runs concurrently.
    """

    def __init__(
        self,
        settings: Settings,
        github: GithubClient,
        jira: JiraClient,
        matcher: Optional[IssueKeyMatcher] = None,
    ) -> None:
        self.settings = settings
        self.github = github
        self.jira = jira
        self.aggregator = SourceAggregator(matcher or IssueKeyMatcher.from_settings(settings))

    @property
    def strict(self) -> bool:
        return self.settings.fail_when_jira_issue_not_found

    # ── Public entry point ────────────────────────────────────────────────────

    async def run(self, context: Optional[GithubEventContext] = None) -> RunResult:
        """
        Returns the outputs that were written and the exit code for the step.
        Failures never propagate: they produce the not-found outputs, exit 1 in
        strict mode and 0 otherwise.
        """
        try:
            if context is None:
                context = load_event_context(
                    self.settings.github_event_name, self.settings.github_event_path
                )
            result = await self._run(context)
        except Exception as exc:
            logger.error("jira_description_failed", exc=exc, strict=self.strict)
            emit_error_annotation(str(exc))
            result = RunResult(
                outputs=ActionOutputs.not_found(),
                exit_code=1 if self.strict else 0,
                error_message=str(exc),
            )

        write_outputs(result.outputs, self.settings.github_output)
        return result

    async def _run(self, context: GithubEventContext) -> RunResult:
        if not context.is_pr_action:
            logger.info("not_a_pull_request_event", event_name=context.event_name)
            return RunResult(outputs=ActionOutputs.not_found())

        if should_skip_branch(context.pull_request.head_ref, self.settings.branch_ignore_pattern):
            return RunResult(outputs=ActionOutputs.not_found())

        if self.settings.use_multiple_jira_issues:
            return await self._link_multiple(context)
        return await self._link_single(context)

    # ── Single issue ──────────────────────────────────────────────────────────

    async def _link_single(self, context: GithubEventContext) -> RunResult:
        pr = context.pull_request
        hit = self.aggregator.collect_single(self.settings.what_to_use, pr.head_ref, pr.title)

        details = await self.jira.get_ticket_details(hit.key)
        body = await self._update_description(context, render_ticket(details))

        return RunResult(outputs=ActionOutputs.single(hit.key, hit.source), pr_body=body)

    # ── Multiple issues ───────────────────────────────────────────────────────

    async def _link_multiple(self, context: GithubEventContext) -> RunResult:
        pr = context.pull_request
        policy = self.settings.what_to_use

        commit_messages = await self._fetch_commit_messages(context) if uses_commits(policy) else []
        extraction = self.aggregator.collect(policy, pr.head_ref, pr.title, commit_messages)

        details_list: list[TicketDetails] = []
        keys: list[str] = []
        sources: list[MatchSource] = []
        for hit in extraction.hits:
            try:
                details = await self.jira.get_ticket_details(hit.key)
            except TicketLookupError as exc:
                logger.warning("jira_ticket_fetch_failed", issue_key=hit.key, error=str(exc))
                if self.strict:
                    raise
                continue
            details_list.append(details)
            keys.append(hit.key)
            sources.append(hit.source)

        if not details_list:
            raise NoValidTicketsFoundError("No valid JIRA issues found")

        body = await self._update_description(context, render_tickets(details_list))
        return RunResult(outputs=ActionOutputs.multiple(keys, sources), pr_body=body)

    async def _fetch_commit_messages(self, context: GithubEventContext) -> list[str]:
        try:
            return await self.github.list_commit_messages(
                context.owner, context.repo, context.pull_request.number
            )
        except CommitFetchError as exc:
            logger.warning("github_commit_fetch_failed", error=str(exc))
            return []

    # ── PR description ────────────────────────────────────────────────────────

    async def _update_description(self, context: GithubEventContext, details: str) -> str:
        number = context.pull_request.number
        # Re-read right before merging: other steps in the same job may have edited it.
        latest_body = await self.github.get_description(context.owner, context.repo, number)
        new_body = merge_pr_description(latest_body, details)

        if new_body == latest_body:
            logger.info("github_pr_description_unchanged", pr_number=number)
        elif self.settings.dry_run:
            logger.info("dry_run_pr_update_skipped", pr_number=number, body=new_body)
        else:
            await self.github.set_description(context.owner, context.repo, number, new_body)
        return new_body


async def run_action(settings: Settings) -> RunResult:
    """Build the HTTP clients from settings and run the linker once."""
    async with GithubClient.from_settings(settings) as github, JiraClient.from_settings(settings) as jira:
        return await IssueLinker(settings, github, jira).run()
