"""Quire CLI Main Entry Point

Usage:
    quire render page.tpl --var name=Ada     # render a template
    quire validate schema.yaml data.yaml     # validate data against a schema
    quire check page.tpl header.tpl          # report template parse errors
    quire --version                          # show version
"""

from __future__ import annotations

from typing import Optional

import typer

from quire._version import __version__

from .commands import check_command, render_command, validate_command
from .commands.utils import setup_logging

typer_app = typer.Typer(help="Render templates and validate data.", no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"quire {__version__}")
        raise typer.Exit()


@typer_app.callback()
def cli(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show info-level logs."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Render templates and validate data."""
    setup_logging(verbose)


typer_app.command("render")(render_command)
typer_app.command("validate")(validate_command)
typer_app.command("check")(check_command)


def app() -> None:
    """Entry point for the CLI."""
    typer_app()


if __name__ == "__main__":
    app()
