"""Validation rules and the ordered rule set that runs them.

Every rule is a small frozen dataclass with a serialization ``key``, an
evaluation ``phase`` and a ``validate`` method that either returns the
(possibly rebuilt) value or raises ``ValidError``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterator

import msgspec

from quire.value import Number, Value, to_value
from quire.value.serial import to_builtins as value_to_builtins

from .context import Context
from .error import ValidError
from .phase import Phase

if TYPE_CHECKING:
    from .schema import Schema

SchemaEncoder = Callable[["Schema"], Any]
SchemaDecoder = Callable[[Any], "Schema"]


class Rule(ABC):
    """Base class for all rules."""

    key: ClassVar[str]
    phase: ClassVar[Phase]

    @abstractmethod
    def validate(self, ctx: Context) -> Value:
        """Check ``ctx.value`` and return the value to hand to the next rule."""

    @abstractmethod
    def encode(self, schema: SchemaEncoder) -> Any:
        """Serialize the rule payload to plain data."""

    @classmethod
    @abstractmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "Rule":
        """Build the rule from plain data.

        Raises:
            msgspec.ValidationError: The payload has the wrong shape.
        """


# =============================================================================
# Presence
# =============================================================================


@dataclass(frozen=True)
class Required(Rule):
    """Reject null. ``Required(False)`` is kept as a no-op."""

    key: ClassVar[str] = "required"
    phase: ClassVar[Phase] = Phase.PRESENCE

    value: bool = True

    def validate(self, ctx: Context) -> Value:
        if self.value and ctx.value.is_null():
            raise ctx.error("required")
        return ctx.value

    def encode(self, schema: SchemaEncoder) -> Any:
        return self.value

    @classmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "Required":
        return cls(msgspec.convert(payload, type=bool, strict=True))


# =============================================================================
# Constraints
# =============================================================================


@dataclass(frozen=True)
class Equals(Rule):
    key: ClassVar[str] = "equals"
    phase: ClassVar[Phase] = Phase.CONSTRAINT

    value: Value

    def validate(self, ctx: Context) -> Value:
        if ctx.value != self.value:
            raise ctx.error(f"{ctx.value} is not equal to {self.value}")
        return ctx.value

    def encode(self, schema: SchemaEncoder) -> Any:
        return value_to_builtins(self.value)

    @classmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "Equals":
        return cls(to_value(payload))


@dataclass(frozen=True)
class Options(Rule):
    key: ClassVar[str] = "options"
    phase: ClassVar[Phase] = Phase.CONSTRAINT

    values: tuple[Value, ...]

    def validate(self, ctx: Context) -> Value:
        if ctx.value not in self.values:
            raise ctx.error(f"must be one of {Value.from_array(self.values)}")
        return ctx.value

    def encode(self, schema: SchemaEncoder) -> Any:
        return [value_to_builtins(v) for v in self.values]

    @classmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "Options":
        items = msgspec.convert(payload, type=list, strict=True)
        return cls(tuple(to_value(item) for item in items))


class _Bound(Rule):
    """Numeric bound for numbers, length bound for strings and containers."""

    phase: ClassVar[Phase] = Phase.CONSTRAINT

    bound: Number

    @abstractmethod
    def _violates(self, order: int | None) -> bool: ...

    def validate(self, ctx: Context) -> Value:
        value = ctx.value
        if value.is_null():
            return value

        if value.is_number():
            order = value.as_number().partial_cmp(self.bound)
            if self._violates(order):
                raise ctx.error(f"expected {self.key} of {self.bound}, received {value}")
            return value

        if value.is_string() or value.is_object():
            length = Number.u64(len(value))
            if self._violates(length.partial_cmp(self.bound)):
                raise ctx.error(
                    f"expected {self.key} length of {self.bound}, received {length}"
                )
            return value

        raise ctx.error(f"{self.key} is not applicable to {value.type_name}")

    def encode(self, schema: SchemaEncoder) -> Any:
        return self.bound.value

    @classmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "_Bound":
        return cls(Number.of(msgspec.convert(payload, type=int | float, strict=True)))


@dataclass(frozen=True)
class Min(_Bound):
    key: ClassVar[str] = "min"

    bound: Number

    def _violates(self, order: int | None) -> bool:
        return order is None or order < 0


@dataclass(frozen=True)
class Max(_Bound):
    key: ClassVar[str] = "max"

    bound: Number

    def _violates(self, order: int | None) -> bool:
        return order is None or order > 0


@dataclass(frozen=True)
class Pattern(Rule):
    key: ClassVar[str] = "pattern"
    phase: ClassVar[Phase] = Phase.CONSTRAINT

    pattern: str

    def validate(self, ctx: Context) -> Value:
        try:
            regex = re.compile(self.pattern)
        except re.error as err:
            raise ctx.error(str(err)) from err

        value = ctx.value
        if value.is_null():
            return value
        if not value.is_string():
            raise ctx.error(f"expected string, received {value.type_name}")
        if regex.search(value.as_string()) is None:
            raise ctx.error(f"'{value}' does not match pattern '{self.pattern}'")
        return value

    def encode(self, schema: SchemaEncoder) -> Any:
        return self.pattern

    @classmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "Pattern":
        return cls(msgspec.convert(payload, type=str, strict=True))


# =============================================================================
# Coercion
# =============================================================================


@dataclass(frozen=True)
class Items(Rule):
    """Validate every element of an array against one schema."""

    key: ClassVar[str] = "items"
    phase: ClassVar[Phase] = Phase.COERCE

    schema: "Schema"

    def validate(self, ctx: Context) -> Value:
        value = ctx.value
        if not value.is_array():
            return value

        items: list[Value] = []
        errors: list[ValidError] = []
        for i, item in enumerate(value.as_array().items()):
            try:
                items.append(self.schema.check(ctx.child(i, item)))
            except ValidError as err:
                errors.append(err)

        if errors:
            raise ctx.aggregate(errors)
        return Value.from_array(items)

    def encode(self, schema: SchemaEncoder) -> Any:
        return schema(self.schema)

    @classmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "Items":
        return cls(schema(payload))


@dataclass(frozen=True)
class Fields(Rule):
    """Validate named fields of a struct and reject undeclared ones."""

    key: ClassVar[str] = "fields"
    phase: ClassVar[Phase] = Phase.COERCE

    fields: dict[str, "Schema"] = field(default_factory=dict)

    def validate(self, ctx: Context) -> Value:
        value = ctx.value
        if not value.is_struct():
            return value

        struct = value.as_struct()
        validated: list[tuple[str, Value]] = []
        errors: list[ValidError] = []

        for name, schema in self.fields.items():
            item = struct.field(name)
            try:
                result = schema.check(ctx.child(name, Value.null() if item is None else item))
            except ValidError as err:
                errors.append(err)
                continue
            if item is not None:
                validated.append((name, result))

        for ident, item in struct.items():
            if not (ident.is_key() and str(ident) in self.fields):
                errors.append(ctx.child(ident, item).error(f"unexpected field '{ident}'"))

        if errors:
            raise ctx.aggregate(errors)
        return Value.from_struct(validated)

    def encode(self, schema: SchemaEncoder) -> Any:
        return {name: schema(s) for name, s in self.fields.items()}

    @classmethod
    def decode(cls, payload: Any, schema: SchemaDecoder) -> "Fields":
        mapping = msgspec.convert(payload, type=dict[str, Any], strict=True)
        return cls({name: schema(data) for name, data in mapping.items()})


RULES: dict[str, type[Rule]] = {
    rule.key: rule for rule in (Required, Equals, Options, Min, Max, Pattern, Items, Fields)
}


# =============================================================================
# Rule set
# =============================================================================


@dataclass(frozen=True)
class RuleSet:
    """An ordered collection holding at most one rule per key."""

    rules: tuple[Rule, ...] = ()

    def add(self, rule: Rule) -> "RuleSet":
        """Return a new set with ``rule`` added, replacing one with the same key in place."""
        rules = list(self.rules)
        for i, existing in enumerate(rules):
            if existing.key == rule.key:
                rules[i] = rule
                return RuleSet(tuple(rules))
        rules.append(rule)
        return RuleSet(tuple(rules))

    def get(self, key: str) -> Rule | None:
        for rule in self.rules:
            if rule.key == key:
                return rule
        return None

    def ordered(self) -> list[Rule]:
        return sorted(self.rules, key=lambda rule: rule.phase)

    def run(self, ctx: Context) -> tuple[Value, list[ValidError]]:
        """Run every rule, collecting failures.

        A failing rule leaves the value unchanged for the rules after it.
        Aggregates raised at the current path are merged into this level.
        """
        value = ctx.value
        errors: list[ValidError] = []

        for rule in self.ordered():
            try:
                value = rule.validate(ctx.with_rule(rule.key).with_value(value))
            except ValidError as err:
                if err.errors and err.path == ctx.path:
                    errors.extend(err.errors)
                else:
                    errors.append(err)

        return value, errors

    def validate(self, ctx: Context) -> Value:
        value, errors = self.run(ctx)
        if errors:
            raise ctx.aggregate(errors)
        return value

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __contains__(self, key: object) -> bool:
        return any(rule.key == key for rule in self.rules)
