"""Check command - parse templates and report syntax errors"""

from __future__ import annotations

from pathlib import Path
from typing import List

import typer
from rich.table import Table

from quire.template import ParseError, Template

from .utils import console


def check_command(
    templates: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Template files to check."),
) -> None:
    """Parse each template and report parse errors."""
    table = Table()
    table.add_column("Template", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")

    failed = 0
    for path in templates:
        try:
            template = Template.parse(path.read_text())
        except ParseError as err:
            failed += 1
            table.add_row(str(path), "[red]error[/red]", f"{err.message} ({err.location()})")
            continue
        table.add_row(str(path), "[green]ok[/green]", f"{len(template.nodes)} nodes")

    console.print(table)
    if failed:
        raise typer.Exit(code=1)
