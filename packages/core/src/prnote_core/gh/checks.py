"""Check run lifecycle: open, update in annotation chunks, close.

GitHub caps ``output.annotations`` at 50 entries per request, so larger sets
are posted as a series of in-progress updates on the same check run. Each
update adds its annotations to the run; nothing is replaced.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from github import GithubException
from rich.console import Console

from prnote_core.annotations import Annotation, read_annotations
from prnote_core.gh.client import get_repo

if TYPE_CHECKING:
    from prnote_core.inputs import Inputs

console = Console()
logger = logging.getLogger(__name__)

CHUNK_SIZE = 50


class CheckStartError(RuntimeError):
    """Raised when a check run cannot be opened; nothing else can be posted without it."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def start_check(repo, sha: str, name: str):
    """Open a new, in-progress check run on sha and return it."""
    console.print("[blue]Opening check...[/blue]")
    try:
        return repo.create_check_run(
            name=name,
            head_sha=sha,
            started_at=_now(),
            status="in_progress",
        )
    except GithubException as e:
        logger.error("Failed to open check '%s'.", name)
        raise CheckStartError(f"Failed to open check '{name}': {e}") from e


def update_check(check_run, output: dict):
    console.print("[blue]Updating check...[/blue]")
    check_run.edit(status="in_progress", output=output)
    return check_run


def close_check(check_run, title: str, conclusion: str, text: str | None = None) -> None:
    """Complete the check run with conclusion and a generated summary."""
    console.print("[blue]Closing check...[/blue]")
    output = {"title": title, "summary": f"{title} concluded with status {conclusion}"}
    if text is not None:
        output["text"] = text
    try:
        check_run.edit(
            status="completed",
            conclusion=conclusion,
            completed_at=_now(),
            output=output,
        )
    except GithubException:
        logger.error("Failed to close check '%s'.", check_run.id)
        raise


def chunk_annotations(annotations: list[Annotation], chunk_size: int = CHUNK_SIZE) -> list[list[Annotation]]:
    """Split annotations into consecutive slices of at most chunk_size, keeping order."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [annotations[i : i + chunk_size] for i in range(0, len(annotations), chunk_size)]


def post_annotated_check(check_run, title: str, annotations: list[Annotation], chunk_size: int = CHUNK_SIZE) -> list:
    """Attach annotations to check_run, one update per chunk.

    Returns one confirmation per chunk, in chunk order. A failing update is
    raised as is; chunks already posted stay on the run.
    """
    total = len(annotations)
    chunks = chunk_annotations(annotations, chunk_size)
    chunk_count = math.ceil(total / chunk_size)

    confirmations = []
    for index, chunk in enumerate(chunks, 1):
        summary = f"Processing {total} annotations, chunk {index} out of {chunk_count}..."
        console.print(f"[blue]{summary}[/blue]")
        confirmations.append(
            update_check(
                check_run,
                output={
                    "title": title,
                    "summary": summary,
                    "annotations": [a.to_api() for a in chunk],
                },
            )
        )
    return confirmations


def post_check(inputs: Inputs, repo_obj=None, report: str | None = None) -> None:
    """Open a check run, post every annotation from ``inputs.annotations``, then close it."""
    annotations = read_annotations(inputs.annotations)

    repo = repo_obj if repo_obj is not None else get_repo(inputs.owner, inputs.repo, token=inputs.token)
    try:
        check_run = start_check(repo, inputs.sha, inputs.name)
        post_annotated_check(check_run, check_run.name, annotations)
        close_check(check_run, check_run.name, inputs.conclusion.value, text=report)
    except Exception:
        logger.error("Error while processing check '%s'.", inputs.name)
        raise


def post_report(inputs: Inputs, repo_obj=None):
    """Create an already completed check run carrying a single summary report."""
    repo = repo_obj if repo_obj is not None else get_repo(inputs.owner, inputs.repo, token=inputs.token)
    try:
        return repo.create_check_run(
            name=inputs.name,
            head_sha=inputs.sha,
            status="completed",
            conclusion=inputs.conclusion.value,
            completed_at=_now(),
            output={
                "title": inputs.title,
                "summary": inputs.summary,
                "text": inputs.body,
            },
        )
    except GithubException:
        logger.error("Error while processing check '%s'.", inputs.name)
        raise
