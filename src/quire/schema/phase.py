"""Rule evaluation phases."""

from __future__ import annotations

from enum import IntEnum


class Phase(IntEnum):
    """Rules run in ascending phase order, ties keep insertion order."""

    PRESENCE = 0
    TYPE = 1
    COERCE = 2
    CONSTRAINT = 3
    REFINE = 4
