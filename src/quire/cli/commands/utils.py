"""Shared utilities for CLI commands"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, NoReturn

import msgspec
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from quire.config import QuireConfig, find_config
from quire.exceptions import QuireError
from quire.template import ParseError, SpanError
from quire.value import Value
from quire.value.serial import decode_json, decode_yaml

console = Console()
err_console = Console(stderr=True)

log = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the quire CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (QUIRE_DEBUG=1): DEBUG level - template parsing, includes, schema loading
    """
    debug = bool(os.environ.get("QUIRE_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    quire_logger = logging.getLogger("quire")
    quire_logger.setLevel(level)
    quire_logger.handlers = [handler]
    quire_logger.propagate = False


def describe_error(error: QuireError) -> str:
    """One-line description, with line and column where the error has a span."""
    if isinstance(error, ParseError):
        return f"{error.message} ({error.location()})"
    if isinstance(error, SpanError):
        line, col = error.span.line_col()
        return f"{error.message} (line {line}, column {col})"
    return str(error)


def handle_error(error: QuireError) -> NoReturn:
    """Print a quire error and exit with status 1."""
    typer.secho(f"Error: {describe_error(error)}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def load_config(config: Path | None, start: Path) -> tuple[QuireConfig, Path]:
    """Load the given config, or the nearest quire.yaml above ``start``.

    Returns:
        The config and the directory its relative paths resolve against.
    """
    path = config or find_config(start)
    if path is None:
        return QuireConfig(), start
    log.info("using config %s", path)
    return QuireConfig.load(path), path.parent


def load_value(path: Path) -> Value:
    """Read a YAML or JSON data file into a value."""
    data = path.read_bytes()
    try:
        if path.suffix in (".yaml", ".yml"):
            return decode_yaml(data)
        return decode_json(data)
    except msgspec.DecodeError as exc:
        raise typer.BadParameter(f"{path}: {exc}") from exc


def parse_var(item: str) -> tuple[str, Any]:
    """Parse ``key=value``; the value is read as a YAML scalar."""
    key, sep, raw = item.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"expected key=value, got '{item}'")
    try:
        value = yaml.safe_load(raw) if raw else ""
    except yaml.YAMLError:
        value = raw
    if not isinstance(value, (str, int, float, bool, list, dict, type(None))):
        value = raw
    return key, value
