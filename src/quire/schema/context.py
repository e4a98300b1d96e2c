"""Validation context passed to every rule."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from quire.value import Ident, Path, Value

from .error import ValidError


@dataclass(frozen=True)
class Context:
    """The value under validation, where it lives and which rule is running."""

    value: Value
    path: Path = field(default_factory=Path)
    rule: str = "schema"

    @classmethod
    def root(cls, value: Value, rule: str = "schema") -> "Context":
        return cls(value=value, rule=rule)

    def child(self, ident: Ident | str | int, value: Value) -> "Context":
        return replace(self, path=self.path.child(ident), value=value)

    def with_rule(self, rule: str) -> "Context":
        return replace(self, rule=rule)

    def with_value(self, value: Value) -> "Context":
        return replace(self, value=value)

    def error(self, message: str) -> ValidError:
        return ValidError(self.rule, self.path, message)

    def aggregate(self, errors: list[ValidError]) -> ValidError:
        return ValidError(self.rule, self.path, errors=errors)
