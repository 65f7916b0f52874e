"""Create or update the marker-tagged comment on an issue or pull request."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console

from prnote_core.gh.client import get_issue, get_repo

if TYPE_CHECKING:
    from prnote_core.inputs import Inputs

console = Console()
logger = logging.getLogger(__name__)


def find_comment(comments, prefix: str):
    """Return the first comment whose body starts with prefix, or None.

    ``comments`` is consumed lazily: with a PyGithub PaginatedList, pages after
    the one holding the match are never requested.
    """
    return next((c for c in comments if (c.body or "").startswith(prefix)), None)


def upsert_comment(inputs: Inputs, repo_obj=None):
    """Update the comment tagged with ``inputs.prefix`` or post a new one.

    Exactly one write happens per call: an edit of the matching comment, or a
    create when there is no prefix or nothing matches.
    """
    repo = repo_obj if repo_obj is not None else get_repo(inputs.owner, inputs.repo, token=inputs.token)
    issue = get_issue(repo, inputs.issue_number)

    if inputs.prefix:
        comment = find_comment(issue.get_comments(), inputs.prefix)
        if comment is not None:
            console.print(f"Comment found ('[blue]{comment.id}[/blue]'), attempting update ...")
            comment.edit(body=inputs.body)
            console.print(f"Comment updated: [blue]{comment.id}[/blue]")
            return comment

    logger.warning("Comment not found, attempting create ...")
    comment = issue.create_comment(inputs.body)
    console.print(f"New comment created: [blue]{comment.id}[/blue]")
    return comment
