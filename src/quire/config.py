"""Configuration parsing for quire.yaml"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from quire import schema as s
from quire.template import Scope, Template
from quire.template.scope import DEFAULT_MAX_INCLUDE_DEPTH

log = logging.getLogger(__name__)

CONFIG_FILE = "quire.yaml"

# upper bound on include nesting; deeper chains overflow the interpreter stack
MAX_INCLUDE_DEPTH = 256


class QuireConfig(BaseModel):
    """Full quire.yaml configuration"""

    templates: dict[str, str] = {}
    vars: dict[str, Any] = {}
    schemas: dict[str, str] = {}
    max_include_depth: int = Field(default=DEFAULT_MAX_INCLUDE_DEPTH, ge=1, le=MAX_INCLUDE_DEPTH)

    @classmethod
    def load(cls, path: Path) -> "QuireConfig":
        """Load config from yaml file"""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.model_validate(data)

    def build_scope(self, base_dir: Path) -> Scope:
        """Scope with the default pipes, configured vars and templates.

        Template paths are resolved relative to ``base_dir``.
        """
        scope = Scope.with_defaults(self.vars, max_include_depth=self.max_include_depth)
        for name, rel in self.templates.items():
            path = base_dir / rel
            log.debug("loading template %s from %s", name, path)
            scope.set_template(name, Template.parse(path.read_text()))
        return scope

    def load_schema(self, name: str, base_dir: Path) -> s.Schema:
        """Load a configured schema by name"""
        if name not in self.schemas:
            raise KeyError(f"schema not found: {name}")
        return s.load(base_dir / self.schemas[name])


def find_config(start: Path | None = None) -> Path | None:
    """Find quire.yaml in ``start`` (default: cwd) or its parents."""
    cwd = (start or Path.cwd()).resolve()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILE
        if candidate.exists():
            return candidate
    return None
