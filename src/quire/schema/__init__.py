"""Composable validators over ``quire.value.Value``.

Builders (``string``, ``int``, ``object``, ...) shadow Python builtins and
are meant to be used module-qualified.
"""

from .builders import any, array, bool, float, int, number, object, string  # noqa: A004
from .context import Context
from .error import SchemaDecodeError, ValidError
from .phase import Phase
from .rules import RULES, Equals, Fields, Items, Max, Min, Options, Pattern, Required, Rule, RuleSet
from .schema import (
    SCHEMAS,
    AnySchema,
    ArraySchema,
    BoolSchema,
    FloatSchema,
    IntSchema,
    NumberSchema,
    ObjectSchema,
    Schema,
    StringSchema,
)
from .serial import decode, encode, from_builtins, load, to_builtins

__all__ = [
    "RULES",
    "SCHEMAS",
    "AnySchema",
    "ArraySchema",
    "BoolSchema",
    "Context",
    "Equals",
    "Fields",
    "FloatSchema",
    "IntSchema",
    "Items",
    "Max",
    "Min",
    "NumberSchema",
    "ObjectSchema",
    "Options",
    "Pattern",
    "Phase",
    "Required",
    "Rule",
    "RuleSet",
    "Schema",
    "SchemaDecodeError",
    "StringSchema",
    "ValidError",
    "decode",
    "encode",
    "from_builtins",
    "load",
    "to_builtins",
]
