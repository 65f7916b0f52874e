"""CLI entry point for prnote.

Commands:
  run          — post a comment or a check run on the current pull request
  annotations  — validate an annotation file and summarise it
"""

from __future__ import annotations

import importlib.metadata
import logging
import os
import sys

import click

from prnote_cli.commands.annotations import annotations_cmd
from prnote_cli.commands.run import run_cmd


def _configure_logging(verbose: bool) -> None:
    # The Actions runner sets RUNNER_DEBUG=1 when step debug logging is enabled.
    debug = verbose or os.environ.get("RUNNER_DEBUG") == "1"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("prnote"),
    prog_name="prnote",
)
@click.option(
    "--config",
    "config_path",
    default=".prnote.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRNOTE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Post comments and check runs on GitHub pull requests from CI."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(run_cmd)
main.add_command(annotations_cmd)
