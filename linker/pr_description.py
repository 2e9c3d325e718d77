from __future__ import annotations

import re
from typing import Optional

# Literal sentinels: changing any of them orphans blocks written by earlier runs.
WARNING_MESSAGE_ABOUT_HIDDEN_MARKERS = (
    "<!--do not remove this marker as it will break jira-description-action functionality-->"
)
HIDDEN_MARKER_START = "<!--jira-description-action-hidden-marker-start-->"
HIDDEN_MARKER_END = "<!--jira-description-action-hidden-marker-end-->"

_FLAGS = re.IGNORECASE | re.MULTILINE | re.DOTALL

_DETAILS_BLOCK_RE = re.compile(
    rf"{re.escape(HIDDEN_MARKER_START)}(.*){re.escape(HIDDEN_MARKER_END)}\s?", _FLAGS
)
_WARNING_MESSAGE_RE = re.compile(rf"{re.escape(WARNING_MESSAGE_ABOUT_HIDDEN_MARKERS)}\s?", _FLAGS)
_STRAY_SENTINEL_RE = re.compile(
    "|".join(
        rf"{re.escape(s)}\s?"
        for s in (WARNING_MESSAGE_ABOUT_HIDDEN_MARKERS, HIDDEN_MARKER_START, HIDDEN_MARKER_END)
    ),
    _FLAGS,
)


def build_details_block(details: str) -> str:
    return (
        f"{WARNING_MESSAGE_ABOUT_HIDDEN_MARKERS}\n"
        f"{HIDDEN_MARKER_START}\n"
        f"{details}\n"
        f"{HIDDEN_MARKER_END}\n"
    )


def merge_pr_description(old_body: Optional[str], details: str) -> str:
    """
    Put the rendered ticket details into the PR body.

    A block left by an earlier run is replaced in place, together with its
    warning line. Otherwise the block is prepended; the existing body is kept
    below it with only stray sentinel comments removed.
    Merging the same details twice gives the same body.
    """
    body = old_body or ""
    block = build_details_block(details)

    if not _DETAILS_BLOCK_RE.search(body):
        # Leftover sentinels are dropped so the prepended block is the only one.
        return block + _STRAY_SENTINEL_RE.sub("", body)

    # The warning line goes first so a copy sitting outside the span is not duplicated.
    body = _WARNING_MESSAGE_RE.sub("", body)
    return _DETAILS_BLOCK_RE.sub(lambda _: block, body)
