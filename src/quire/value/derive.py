"""Class decorators that teach ``to_value`` how to lower user types.

Usage:
    @derive.struct
    @dataclass
    class Point:
        x: int
        y: int

    to_value(Point(1, 2))  # Struct "Point" {x: 1, y: 2}

Enums are modelled as a decorated base class with one subclass per
variant. A variant with no fields lowers to null, a tuple variant to a
tuple and any other variant to a struct named after the variant. With
``tagged=True`` the lowered value is wrapped in a single-key struct keyed
by the variant name.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Callable, TypeVar

T = TypeVar("T", bound=type)


class Shape(Enum):
    STRUCT = "struct"
    TUPLE = "tuple"
    ENUM = "enum"


SHAPE_ATTR = "__quire_shape__"
NAME_ATTR = "__quire_name__"
TAGGED_ATTR = "__quire_tagged__"
VARIANT_TUPLE_ATTR = "__quire_tuple_variant__"


def _decorator(shape: Shape, **attrs: Any) -> Callable[[T], T]:
    def wrap(cls: T) -> T:
        setattr(cls, SHAPE_ATTR, shape)
        for key, value in attrs.items():
            setattr(cls, key, value)
        return cls

    return wrap


def struct(cls: T | None = None, *, name: str | None = None) -> Any:
    """Lower instances to a struct with one field per attribute."""
    if cls is None:
        return _decorator(Shape.STRUCT, **{NAME_ATTR: name})
    return _decorator(Shape.STRUCT, **{NAME_ATTR: name})(cls)


def tuple(cls: T | None = None) -> Any:
    """Lower instances to a tuple of their attribute values."""
    if cls is None:
        return _decorator(Shape.TUPLE)
    return _decorator(Shape.TUPLE)(cls)


def enum(cls: T | None = None, *, tagged: bool = False) -> Any:
    """Mark a base class whose subclasses are the enum's variants."""
    if cls is None:
        return _decorator(Shape.ENUM, **{TAGGED_ATTR: tagged})
    return _decorator(Shape.ENUM, **{TAGGED_ATTR: tagged})(cls)


def variant(cls: T | None = None, *, tuple: bool = False, name: str | None = None) -> Any:
    """Configure one enum variant.

    Args:
        tuple: Lower the variant to a tuple instead of a struct.
        name: Variant name used in struct names and tags.
    """

    def wrap(inner: T) -> T:
        setattr(inner, VARIANT_TUPLE_ATTR, tuple)
        setattr(inner, NAME_ATTR, name)
        return inner

    if cls is None:
        return wrap
    return wrap(cls)


def shape_of(obj: Any) -> Shape | None:
    return getattr(type(obj), SHAPE_ATTR, None)


def type_name(obj: Any) -> str:
    cls = type(obj)
    return cls.__dict__.get(NAME_ATTR) or cls.__name__


def field_names(obj: Any) -> list[str]:
    """Declared attribute names of a dataclass or named tuple, in order."""
    if dataclasses.is_dataclass(obj):
        return [f.name for f in dataclasses.fields(obj)]
    fields = getattr(type(obj), "_fields", None)
    if fields is not None:
        return list(fields)
    raise TypeError(f"{type(obj).__name__} is neither a dataclass nor a named tuple")


def is_tagged(obj: Any) -> bool:
    return bool(getattr(type(obj), TAGGED_ATTR, False))


def is_tuple_variant(obj: Any) -> bool:
    return bool(type(obj).__dict__.get(VARIANT_TUPLE_ATTR, False))
