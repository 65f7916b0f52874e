"""run command — post a comment or a check run on the current pull request."""

from __future__ import annotations

import logging

import click
from rich.console import Console

from prnote_core.context import ActionContext
from prnote_core.gh.checks import CheckStartError
from prnote_core.inputs import parse_inputs
from prnote_core.runner import print_dry_run, run

console = Console()
logger = logging.getLogger(__name__)

# Distinct from click's 1 (error) and 2 (usage) so workflows can tell it apart.
CHECK_START_EXIT_CODE = 3


@click.command("run")
@click.option("--mode", type=click.Choice(["comment", "check"]), default=None, help="Post a comment or a check run.")
@click.option("--message", default=None, help="Body text. Takes precedence over --file.")
@click.option("--file", "file", default=None, help="Path to a file holding the body text.")
@click.option("--prefix", default=None, help="Marker identifying the comment to update (comment mode).")
@click.option("--name", default=None, help="Check run name (check mode).")
@click.option("--title", default=None, help="Check run title (check mode).")
@click.option("--summary", default=None, help="Check run summary (check mode).")
@click.option(
    "--conclusion",
    type=click.Choice(["success", "failure", "cancelled"]),
    default=None,
    help="Check run conclusion (check mode).",
)
@click.option("--annotations", default=None, help="Path to a JSON array of check run annotations (check mode).")
@click.option("--token", default=None, help="GitHub token. Defaults to GITHUB_TOKEN or the gh CLI session.")
@click.option("--dry-run", is_flag=True, help="Print what would be posted without calling GitHub.")
@click.pass_context
def run_cmd(
    ctx,
    mode: str | None,
    message: str | None,
    file: str | None,
    prefix: str | None,
    name: str | None,
    title: str | None,
    summary: str | None,
    conclusion: str | None,
    annotations: str | None,
    token: str | None,
    dry_run: bool,
):
    """Post feedback on a pull request.

    Inputs are read from .prnote.yml, then from the INPUT_* variables set by
    GitHub Actions, then from the options below (highest precedence). The
    repository, commit and pull request come from the workflow run.
    """
    from prnote_core.config import load_config
    from prnote_cli.auth import resolve_github_token

    config_path = ctx.obj.get("config_path", ".prnote.yml") if ctx.obj else ".prnote.yml"
    raw = load_config(
        config_path,
        cli_overrides={
            "mode": mode,
            "message": message,
            "file": file,
            "prefix": prefix,
            "name": name,
            "title": title,
            "summary": summary,
            "conclusion": conclusion,
            "annotations": annotations,
            "token": token,
        },
    )

    raw["token"] = resolve_github_token(raw.get("token"))

    try:
        inputs = parse_inputs(raw, ActionContext.from_env())
        if not inputs.token and not dry_run:
            raise click.UsageError(
                "No GitHub token found. Pass --token, set GITHUB_TOKEN or run `gh auth login` first."
            )
        if dry_run:
            print_dry_run(inputs)
        else:
            run(inputs)
        logger.debug("prnote ran successfully")
    except CheckStartError as e:
        logger.debug("prnote encountered an error")
        console.print(f"[red]{e}[/red]")
        ctx.exit(CHECK_START_EXIT_CODE)
    except click.ClickException:
        logger.debug("prnote encountered an error")
        raise
    except Exception as e:
        logger.debug("prnote encountered an error")
        raise click.ClickException(str(e)) from e
