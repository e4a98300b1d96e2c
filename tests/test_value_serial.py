"""Tests for JSON/YAML serialization of values."""

from quire.value import Value, to_value
from quire.value.serial import decode_json, decode_yaml, encode_json, to_builtins


def test_decode_json_types():
    """JSON integers decode to i64, floats to f64, objects to structs."""
    value = decode_json(b'{"a": [1, 2.5, "x", null, true]}')
    assert value.is_struct()
    assert value.get("a/0").is_i64()
    assert value.get("a/1").is_f64()
    assert value.get("a/2") == Value.from_str("x")
    assert value.get("a/3").is_null()
    assert value.get("a/4") == Value.from_bool(True)


def test_encode_json_is_untagged():
    value = to_value({"a": [1, 2.5, "x", None, True], "t": (1, 2)})
    assert encode_json(value) == b'{"a":[1,2.5,"x",null,true],"t":[1,2]}'


def test_json_round_trip():
    value = to_value({"name": "ada", "tags": ["x", "y"], "age": 36})
    assert decode_json(encode_json(value)) == value


def test_decode_yaml():
    value = decode_yaml("name: ada\nscores:\n  - 1\n  - 2\n")
    assert value.get("scores/1") == Value.from_i64(2)


def test_to_builtins_keeps_number_values():
    assert to_builtins(Value.from_u8(255)) == 255
    assert to_builtins(Value.null()) is None
