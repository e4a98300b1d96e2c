"""Schema types.

A schema is a type tag plus a ``RuleSet``. Builder methods never mutate:
each returns a new schema with the rule added.

Usage:
    from quire import schema as s

    person = s.object().field("name", s.string().required().min(1))
    person.validate({"name": "Ada"})
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, Mapping

from quire.value import Number, Value, to_value

from .context import Context
from .error import ValidError
from .rules import Equals, Fields, Items, Max, Min, Options, Pattern, Required, Rule, RuleSet

log = logging.getLogger(__name__)


class Schema:
    """Base schema; accepts any value."""

    type_name: ClassVar[str] = "any"

    def __init__(self, rules: RuleSet | Iterable[Rule] | None = None):
        if rules is None:
            rules = RuleSet()
        elif not isinstance(rules, RuleSet):
            ruleset = RuleSet()
            for rule in rules:
                ruleset = ruleset.add(rule)
            rules = ruleset
        self._rules = rules

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def rule(self, rule: Rule) -> "Schema":
        return type(self)(self._rules.add(rule))

    def required(self, flag: bool = True) -> "Schema":
        return self.rule(Required(flag))

    def equals(self, value: Any) -> "Schema":
        return self.rule(Equals(to_value(value)))

    def options(self, values: Iterable[Any]) -> "Schema":
        return self.rule(Options(tuple(to_value(v) for v in values)))

    def is_required(self) -> bool:
        rule = self._rules.get(Required.key)
        return isinstance(rule, Required) and rule.value

    def accepts(self, value: Value) -> bool:
        """Type check for non-null values."""
        return True

    def check(self, ctx: Context) -> Value:
        """Run the rule set, then the type check, inside ``ctx``."""
        ctx = ctx.with_rule(self.type_name)
        value, errors = self._rules.run(ctx)

        if not value.is_null() and not self.accepts(value):
            errors.append(ctx.with_rule("type").error(f"expected {self.type_name}"))

        if errors:
            raise ctx.aggregate(errors)
        return value

    def validate(self, value: Any) -> Value:
        """Validate Python data or a ``Value``.

        Returns:
            The validated, possibly rebuilt, value.

        Raises:
            ValidError: Aggregate of every failure found.
        """
        if not isinstance(value, Value):
            value = to_value(value)
        try:
            return self.check(Context.root(value, self.type_name))
        except ValidError as err:
            log.debug("%s schema rejected value with %d error(s)", self.type_name, len(list(err.leaves())))
            raise

    def is_valid(self, value: Any) -> bool:
        try:
            self.validate(value)
        except ValidError:
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return type(self) is type(other) and self._rules == other._rules

    def __hash__(self) -> int:
        return hash((type(self), tuple(rule.key for rule in self._rules)))

    def __repr__(self) -> str:
        rules = ", ".join(rule.key for rule in self._rules)
        return f"{type(self).__name__}({rules})"


class _Bounded(Schema):
    def min(self, n: int | float | Number) -> "Schema":
        return self.rule(Min(Number.of(n)))

    def max(self, n: int | float | Number) -> "Schema":
        return self.rule(Max(Number.of(n)))


class AnySchema(Schema):
    type_name = "any"


class BoolSchema(Schema):
    type_name = "bool"

    def accepts(self, value: Value) -> bool:
        return value.is_bool()


class StringSchema(_Bounded):
    type_name = "string"

    def pattern(self, regex: str) -> "StringSchema":
        return self.rule(Pattern(regex))

    def accepts(self, value: Value) -> bool:
        return value.is_string()


class NumberSchema(_Bounded):
    type_name = "number"

    def int(self) -> "IntSchema":
        return IntSchema(self._rules)

    def float(self) -> "FloatSchema":
        return FloatSchema(self._rules)

    def accepts(self, value: Value) -> bool:
        return value.is_number()


class IntSchema(_Bounded):
    type_name = "int"

    def accepts(self, value: Value) -> bool:
        return value.is_integer()


class FloatSchema(_Bounded):
    type_name = "float"

    def accepts(self, value: Value) -> bool:
        return value.is_float()


class ArraySchema(_Bounded):
    type_name = "array"

    def items(self, schema: Schema) -> "ArraySchema":
        return self.rule(Items(schema))

    def accepts(self, value: Value) -> bool:
        return value.is_array()


class ObjectSchema(Schema):
    type_name = "object"

    def field(self, name: str, schema: Schema) -> "ObjectSchema":
        current = self._rules.get(Fields.key)
        fields = dict(current.fields) if isinstance(current, Fields) else {}
        fields[name] = schema
        return self.rule(Fields(fields))

    def fields(self, mapping: Mapping[str, Schema]) -> "ObjectSchema":
        result = self
        for name, schema in mapping.items():
            result = result.field(name, schema)
        return result

    def accepts(self, value: Value) -> bool:
        return value.is_struct()


SCHEMAS: dict[str, type[Schema]] = {
    cls.type_name: cls
    for cls in (
        StringSchema,
        BoolSchema,
        NumberSchema,
        IntSchema,
        FloatSchema,
        ArraySchema,
        ObjectSchema,
        AnySchema,
    )
}
