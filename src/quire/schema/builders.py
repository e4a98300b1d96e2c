"""Schema constructors.

These names shadow Python builtins, so import the module rather than the
functions: ``from quire import schema as s; s.int().min(0)``.
"""

from __future__ import annotations

from .schema import (
    AnySchema,
    ArraySchema,
    BoolSchema,
    FloatSchema,
    IntSchema,
    NumberSchema,
    ObjectSchema,
    StringSchema,
)


def string() -> StringSchema:
    return StringSchema()


def bool() -> BoolSchema:  # noqa: A001
    return BoolSchema()


def number() -> NumberSchema:
    return NumberSchema()


def int() -> IntSchema:  # noqa: A001
    return IntSchema()


def float() -> FloatSchema:  # noqa: A001
    return FloatSchema()


def array() -> ArraySchema:
    return ArraySchema()


def object() -> ObjectSchema:  # noqa: A001
    return ObjectSchema()


def any() -> AnySchema:  # noqa: A001
    return AnySchema()
