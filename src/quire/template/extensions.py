"""Standard pipes and functions for template rendering."""

from __future__ import annotations

import msgspec

from quire.value import Value
from quire.value.serial import to_builtins

from .errors import ValueTypeError
from .scope import Scope


def _string(value: Value) -> str:
    if not value.is_string():
        raise ValueTypeError("string", value.type_name)
    return value.as_string()


def _integer(value: Value) -> int:
    if not value.is_integer():
        raise ValueTypeError("integer", value.type_name)
    return value.as_number().value


def upper(value: Value) -> str:
    return _string(value).upper()


def lower(value: Value) -> str:
    return _string(value).lower()


def trim(value: Value) -> str:
    return _string(value).strip()


def length(value: Value) -> int:
    """Length of a string, array, tuple or struct."""
    if not (value.is_string() or value.is_object()):
        raise ValueTypeError("string or object", value.type_name)
    return len(value)


def join(value: Value, sep: Value | None = None) -> str:
    """Join the display forms of an array's items.

    Args:
        value: Array or tuple to join.
        sep: Separator, defaults to an empty string.

    Returns:
        The joined string.
    """
    if not (value.is_array() or value.is_tuple()):
        raise ValueTypeError("array", value.type_name)
    separator = "" if sep is None else str(sep)
    return separator.join(str(item) for item in value.as_object().items())


def default(value: Value, fallback: Value | None = None) -> Value:
    """Replace null with ``fallback``."""
    if value.is_null():
        return fallback if fallback is not None else Value.from_str("")
    return value


def to_json(value: Value) -> str:
    return msgspec.json.encode(to_builtins(value)).decode()


def range_(*args: Value) -> list[int]:
    """``range(stop)`` or ``range(start, stop)`` as an array of integers."""
    bounds = [_integer(arg) for arg in args]
    if len(bounds) == 1:
        return list(range(bounds[0]))
    if len(bounds) == 2:
        return list(range(bounds[0], bounds[1]))
    raise ValueTypeError("one or two integers", f"{len(bounds)} arguments")


def len_(value: Value) -> int:
    return length(value)


def str_(value: Value) -> str:
    return str(value)


PIPES = {
    "upper": upper,
    "lower": lower,
    "trim": trim,
    "length": length,
    "join": join,
    "default": default,
    "json": to_json,
}

FUNCS = {
    "range": range_,
    "len": len_,
    "str": str_,
}


def install_defaults(scope: Scope) -> Scope:
    """Register the standard pipes and functions on ``scope``.

    Returns:
        The same scope, for chaining.
    """
    for name, pipe in PIPES.items():
        scope.set_pipe(name, pipe)
    for name, func in FUNCS.items():
        scope.set_func(name, func)
    return scope
