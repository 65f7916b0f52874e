"""annotations command — validate an annotation file before posting it."""

from __future__ import annotations

from collections import Counter

import click
from rich.console import Console
from rich.table import Table

from prnote_core.annotations import ANNOTATION_LEVELS, AnnotationError, read_annotations
from prnote_core.gh.checks import CHUNK_SIZE, chunk_annotations

console = Console()


@click.command("annotations")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--top", default=10, show_default=True, help="Number of most annotated files to show.")
def annotations_cmd(path: str, top: int):
    """Check that PATH holds a valid annotation list and summarise it.

    Reports the number of annotations per level, the most annotated files
    and how many check run updates posting them would take.
    """
    try:
        annotations = read_annotations(path)
    except AnnotationError as e:
        raise click.ClickException(str(e)) from e

    if not annotations:
        console.print("[yellow]No annotations found.[/yellow]")
        return

    level_counter: Counter[str] = Counter(a.annotation_level for a in annotations)
    file_counter: Counter[str] = Counter(a.path for a in annotations)
    chunks = chunk_annotations(annotations, CHUNK_SIZE)

    console.print(f"\n[bold]{len(annotations)} annotation(s) in [cyan]{path}[/cyan][/bold]")
    console.print(f"  Check run updates: {len(chunks)} (up to {CHUNK_SIZE} per update)")

    level_table = Table(title="Levels", show_header=True)
    level_table.add_column("Level", style="bold")
    level_table.add_column("Count", justify="right")
    _level_style = {"failure": "red", "warning": "yellow", "notice": "blue"}
    for level in ANNOTATION_LEVELS:
        style = _level_style[level]
        level_table.add_row(f"[{style}]{level}[/{style}]", str(level_counter.get(level, 0)))
    console.print(level_table)

    file_table = Table(title=f"Top {top} Most Annotated Files", show_header=True)
    file_table.add_column("File")
    file_table.add_column("Annotations", justify="right")
    for file_path, count in file_counter.most_common(top):
        file_table.add_row(file_path, str(count))
    console.print(file_table)
