"""Render command - render a template file"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from quire.exceptions import QuireError
from quire.template import Template

from .utils import handle_error, load_config, load_value, parse_var


def render_command(
    template: Path = typer.Argument(..., exists=True, dir_okay=False, help="Template file to render."),
    var: List[str] = typer.Option([], "--var", help="Variable as key=value, repeatable."),
    vars_file: Optional[Path] = typer.Option(None, "--vars", exists=True, dir_okay=False, help="YAML or JSON file of variables."),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Path to quire.yaml."),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write output to file instead of stdout."),
) -> None:
    """Render TEMPLATE with variables and the configured templates."""
    try:
        cfg, base_dir = load_config(config, template.parent)
        scope = cfg.build_scope(base_dir)

        if vars_file is not None:
            data = load_value(vars_file)
            if not data.is_struct():
                raise typer.BadParameter(f"{vars_file} must contain a map of variables")
            for key, value in data.as_struct().items():
                scope.set_var(str(key), value)

        for item in var:
            key, value = parse_var(item)
            scope.set_var(key, value)

        result = Template.parse(template.read_text()).render(scope)
    except QuireError as exc:
        handle_error(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")
        typer.echo(f"Wrote {output}")
    else:
        typer.echo(result, nl=False)
