"""JSON and YAML serialization of values.

The mapping is untagged: structs become objects, arrays and tuples become
lists. Decoding yields ``i64`` integers (``u64`` when only that width
fits), ``f64`` floats, struct objects and arrays.
"""

from __future__ import annotations

from typing import Any

import msgspec

from .convert import to_value
from .value import Kind, Value


def to_builtins(value: Value) -> Any:
    """Lower a value to plain Python data."""
    kind = value.kind
    if kind is Kind.NULL:
        return None
    if kind is Kind.BOOL:
        return value.as_bool()
    if kind is Kind.NUMBER:
        return value.as_number().value
    if kind is Kind.STRING:
        return value.as_string()
    if value.is_struct():
        return {str(k): to_builtins(v) for k, v in value.as_struct().items()}
    return [to_builtins(v) for v in value.as_object().items()]


def from_builtins(obj: Any) -> Value:
    return to_value(obj)


def encode_json(value: Value) -> bytes:
    return msgspec.json.encode(to_builtins(value))


def decode_json(data: bytes | str) -> Value:
    return to_value(msgspec.json.decode(data))


def encode_yaml(value: Value) -> bytes:
    return msgspec.yaml.encode(to_builtins(value))


def decode_yaml(data: bytes | str) -> Value:
    return to_value(msgspec.yaml.decode(data))
