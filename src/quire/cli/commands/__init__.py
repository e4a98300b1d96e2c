"""CLI commands"""

from .check import check_command
from .render import render_command
from .validate import validate_command

__all__ = ["check_command", "render_command", "validate_command"]
