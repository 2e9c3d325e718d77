"""
Jira PR Linker: entry point

Runs as a GitHub Action step on pull_request / pull_request_target events.
Configuration comes from the environment (see config/settings.py); action.yml
maps the action inputs onto it.

Usage:
    # Inside a workflow (env prepared by action.yml)
    python main.py

    # Compute the new description without updating the PR
    python main.py --dry-run

    # More verbose logs
    python main.py --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError


def _configure(log_level: str | None) -> None:
    from config.logging_config import configure_logging
    configure_logging(log_level)


def run(dry_run: bool, log_level: str | None) -> int:
    _configure(log_level)

    from app_logging.activity_logger import ActivityLogger
    from config.settings import get_settings
    from workflow.issue_linker import run_action

    logger = ActivityLogger("main")
    settings = get_settings()
    if dry_run:
        settings = settings.model_copy(update={"dry_run": True})

    logger.info(
        "action_started",
        what_to_use=settings.what_to_use.value,
        multiple=settings.use_multiple_jira_issues,
        strict=settings.fail_when_jira_issue_not_found,
        dry_run=settings.dry_run,
    )

    result = asyncio.run(run_action(settings))

    logger.info(
        "action_finished",
        exit_code=result.exit_code,
        outputs=result.outputs.as_dict(),
        error=result.error_message,
    )
    return result.exit_code


def main() -> None:
    parser = argparse.ArgumentParser(description="Link a pull request to its Jira issues")
    parser.add_argument("--dry-run", action="store_true", help="Do not update the PR description")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (e.g. DEBUG)")

    args = parser.parse_args()

    try:
        exit_code = run(args.dry_run, args.log_level)
    except ValidationError as exc:
        print(f"::error::Invalid configuration: {exc.errors()}", file=sys.stdout)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
