"""Resolve raw action inputs and the run context into one validated command."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from prnote_core.context import ActionContext

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    COMMENT = "comment"
    CHECK = "check"


class Conclusion(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


class InputError(ValueError):
    """Raised when the action inputs are missing or inconsistent."""


@dataclass(frozen=True)
class Inputs:
    """The fully resolved command for one run.

    Only the fields needed by ``mode`` are guaranteed to be set: prefix and
    issue_number for comments, name/title/summary/conclusion and sha for checks.
    """

    mode: Mode
    token: str | None
    body: str
    owner: str
    repo: str
    prefix: str | None = None
    name: str | None = None
    title: str | None = None
    summary: str | None = None
    conclusion: Conclusion | None = None
    annotations: str | None = None
    sha: str | None = None
    issue_number: int | None = None

    @property
    def full_repo(self) -> str:
        return f"{self.owner}/{self.repo}"


def add_prefix(body: str, prefix: str | None) -> str:
    """Put prefix on its own line above body, unless body already starts with it."""
    if prefix and not body.startswith(prefix):
        return f"{prefix}\n{body}"
    return body


def _is_mode(mode: str | None) -> bool:
    return mode in {m.value for m in Mode}


def _is_conclusion(conclusion: str | None) -> bool:
    return not conclusion or conclusion in {c.value for c in Conclusion}


def parse_inputs(raw: dict, context: ActionContext) -> Inputs:
    """Validate raw inputs against the run context and return the command.

    Static input errors are raised before anything is read from ``context``,
    so a missing prefix is reported ahead of a missing issue number.
    """
    token = raw.get("token") or None
    file = raw.get("file") or None
    message = raw.get("message") or None
    mode = raw.get("mode") or None
    prefix = raw.get("prefix") or None
    name = raw.get("name") or None
    title = raw.get("title") or None
    summary = raw.get("summary") or None
    conclusion = raw.get("conclusion") or None
    annotations = raw.get("annotations") or None

    logger.debug("Resolved inputs:")
    logger.debug("  token: '%s'", bool(token))
    logger.debug("  file: '%s'", file)
    logger.debug("  message: '%s'", message)
    logger.debug("  mode: '%s'", mode)
    logger.debug("  prefix: '%s'", prefix)
    logger.debug("  name: '%s'", name)
    logger.debug("  title: '%s'", title)
    logger.debug("  summary: '%s'", summary)
    logger.debug("  conclusion: '%s'", conclusion)
    logger.debug("  annotations: '%s'", annotations)

    if not _is_mode(mode):
        raise InputError(f"Mode {mode} is not supported")
    if not _is_conclusion(conclusion):
        raise InputError(f"Conclusion '{conclusion}' is not a valid value of 'success', 'failure' or 'cancelled'.")

    if not message and not file:
        raise InputError('Either "file" or "message" is required as input.')

    if mode == Mode.COMMENT and not prefix:
        raise InputError(f"Input \"prefix\" is required as for mode '{mode}'.")
    if mode == Mode.CHECK and not (name and title and summary and conclusion):
        raise InputError(f'Missing required input "name", "title", "summary" or "conclusion" for mode \'{mode}\'.')

    body = message
    if not message:
        body = Path(file).read_text(encoding="utf-8")
    if not body:
        raise InputError("A body is required.")
    if mode == Mode.COMMENT:
        body = add_prefix(body, prefix)

    sha = context.pr_head_sha or context.sha
    if mode == Mode.CHECK and not context.pr_head_sha:
        logger.warning("No commit sha found in pull_request context. Falling back to head sha.")

    logger.debug("Context info:")
    logger.debug("  repo: '%s'", context.repo)
    logger.debug("  owner: '%s'", context.owner)
    logger.debug("  sha: '%s'", sha)
    logger.debug("  issue_number: '%s'", context.issue_number)

    if mode == Mode.COMMENT and not context.issue_number:
        raise InputError("No issue/pull request in input neither in current context.")
    if mode == Mode.CHECK and not sha:
        raise InputError("No sha could be resolved.")

    return Inputs(
        mode=Mode(mode),
        token=token,
        body=body,
        owner=context.owner,
        repo=context.repo,
        prefix=prefix,
        name=name,
        title=title,
        summary=summary,
        conclusion=Conclusion(conclusion) if conclusion else None,
        annotations=annotations,
        sha=sha,
        issue_number=context.issue_number,
    )
