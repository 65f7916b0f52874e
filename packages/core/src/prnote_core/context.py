"""Execution context of a GitHub Actions run.

Everything the resolver needs from the surrounding workflow run (repository,
commit, pull request) is captured once into an immutable ActionContext and
passed in explicitly, so tests build one directly instead of patching globals.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionContext:
    owner: str = ""
    repo: str = ""
    sha: str | None = None
    pr_head_sha: str | None = None
    issue_number: int | None = None

    @classmethod
    def from_env(cls, environ: dict | None = None) -> ActionContext:
        """Build the context from the variables the Actions runner exports.

        GITHUB_REPOSITORY gives ``owner/name``, GITHUB_SHA the commit that
        triggered the run, and GITHUB_EVENT_PATH the webhook payload holding
        the pull request head SHA and the issue / pull request number.
        """
        env = os.environ if environ is None else environ

        owner, _, repo = (env.get("GITHUB_REPOSITORY") or "").partition("/")
        payload = _load_payload(env.get("GITHUB_EVENT_PATH"))

        pull_request = payload.get("pull_request") or {}
        head_sha = (pull_request.get("head") or {}).get("sha")

        # Same lookup order as the Actions toolkit: issue, then pull_request, then payload.
        issue_number = (payload.get("issue") or pull_request or payload).get("number")

        return cls(
            owner=owner,
            repo=repo,
            sha=env.get("GITHUB_SHA") or None,
            pr_head_sha=head_sha or None,
            issue_number=int(issue_number) if issue_number else None,
        )


def _load_payload(event_path: str | None) -> dict:
    """Return the webhook payload at event_path, or {} when there is none."""
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        logger.warning("GITHUB_EVENT_PATH %s does not exist", event_path)
        return {}
    payload = json.loads(path.read_text(encoding="utf-8"))
    return payload if isinstance(payload, dict) else {}
