"""Quire Exceptions

Root of the errors raised by the value, schema and template libraries.
"""

from __future__ import annotations


class QuireError(Exception):
    """Base exception for all quire errors."""

    pass
