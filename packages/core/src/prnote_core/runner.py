"""Dispatch a resolved command to the comment or check posting path."""

from __future__ import annotations

import logging

from rich.console import Console

from prnote_core.annotations import read_annotations
from prnote_core.gh.checks import CHUNK_SIZE, chunk_annotations, post_check, post_report
from prnote_core.gh.comments import upsert_comment
from prnote_core.inputs import Inputs, Mode

console = Console()
logger = logging.getLogger(__name__)


def run(inputs: Inputs, repo_obj=None) -> None:
    """Post the feedback described by inputs.

    Comment mode upserts the marker comment. Check mode posts an annotated
    check run when an annotation file is given, otherwise a single completed
    report.
    """
    if inputs.mode == Mode.COMMENT:
        upsert_comment(inputs, repo_obj=repo_obj)
    elif inputs.mode == Mode.CHECK and inputs.annotations:
        post_check(inputs, repo_obj=repo_obj, report=inputs.body)
    elif inputs.mode == Mode.CHECK:
        post_report(inputs, repo_obj=repo_obj)
    else:
        raise ValueError(f"Mode '{inputs.mode}' is not supported.")


def print_dry_run(inputs: Inputs) -> None:
    """Print what run() would post without calling GitHub."""
    console.print(f"\n[bold]Dry run — {inputs.mode.value} on [cyan]{inputs.full_repo}[/cyan] (not posted)[/bold]\n")
    if inputs.mode == Mode.COMMENT:
        console.print(f"  Issue / PR:  #{inputs.issue_number}")
        console.print(f"  Prefix:      {inputs.prefix}")
    else:
        console.print(f"  Commit:      {inputs.sha}")
        console.print(f"  Check:       {inputs.name}")
        console.print(f"  Title:       {inputs.title}")
        console.print(f"  Summary:     {inputs.summary}")
        console.print(f"  Conclusion:  {inputs.conclusion.value}")
        if inputs.annotations:
            annotations = read_annotations(inputs.annotations)
            chunks = chunk_annotations(annotations, CHUNK_SIZE)
            console.print(f"  Annotations: {len(annotations)} in {len(chunks)} chunk(s) of up to {CHUNK_SIZE}")
    console.print()
    console.print(inputs.body, markup=False)
