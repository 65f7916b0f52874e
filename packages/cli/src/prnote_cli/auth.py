"""Pick the token prnote posts with.

In a workflow the ``token`` action input (defaulting to ``github.token``) is
always set. Outside Actions, e.g. when previewing with ``prnote run --dry-run``
or posting by hand, the token falls back to GITHUB_TOKEN and then to the
session of a logged-in GitHub CLI (`gh auth token`).
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)


def resolve_github_token(explicit: str | None = None) -> str | None:
    """Return a GitHub token or None if no valid source is available.

    Never raises — callers should check for None and emit a UsageError.
    """
    if explicit:
        return explicit

    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except (FileNotFoundError, subprocess.TimeoutExpired):
        # gh is not installed or timed out.
        pass

    return None
