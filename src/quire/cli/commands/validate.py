"""Validate command - check a data file against a schema"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from quire import schema as s
from quire.exceptions import QuireError

from .utils import console, err_console, handle_error, load_config, load_value


def validate_command(
    schema: str = typer.Argument(..., help="Schema file, or a schema name from quire.yaml."),
    data: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML or JSON data file."),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Path to quire.yaml."),
) -> None:
    """Validate DATA against SCHEMA."""
    try:
        schema_path = Path(schema)
        if schema_path.exists():
            validator = s.load(schema_path)
        else:
            cfg, base_dir = load_config(config, Path.cwd())
            validator = cfg.load_schema(schema, base_dir)
        value = load_value(data)
    except KeyError as exc:
        typer.secho(f"Error: {exc.args[0]}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except QuireError as exc:
        handle_error(exc)

    try:
        validator.validate(value)
    except s.ValidError as err:
        err_console.print(err.render(), markup=False, highlight=False)
        raise typer.Exit(code=1)

    console.print("[green]ok[/green]")
