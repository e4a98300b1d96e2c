"""Tests for the dynamic value model."""

import math

import pytest

from quire.value import (
    Ident,
    Index,
    Key,
    ListArray,
    MapStruct,
    Number,
    NumberKind,
    Path,
    Value,
    to_value,
    truthy,
)


# =============================================================================
# Identifiers and paths
# =============================================================================


class TestIdent:
    def test_key_and_index_are_distinct(self):
        """Key("0") and Index(0) never compare equal."""
        assert Key("0") != Index(0)
        assert str(Key("0")) == str(Index(0)) == "0"

    def test_parse_numeric_is_index(self):
        """Purely numeric text parses to an index."""
        assert Ident.parse("12") == Index(12)
        assert Ident.parse("name") == Key("name")
        assert Ident.parse("1a") == Key("1a")


class TestPath:
    def test_parse_and_render(self):
        """Paths render slash-joined."""
        path = Path.parse("a/0/b")
        assert path.segments == (Key("a"), Index(0), Key("b"))
        assert str(path) == "a/0/b"

    def test_root_renders_empty(self):
        assert str(Path()) == ""
        assert Path().is_root()

    def test_child(self):
        """child() returns a new path and leaves the original alone."""
        root = Path()
        child = root / "items" / 3
        assert str(child) == "items/3"
        assert root.is_root()
        assert child.parent() == Path.parse("items")


# =============================================================================
# Numbers
# =============================================================================


class TestNumber:
    def test_width_is_preserved(self):
        assert Value.from_i8(5).is_i8()
        assert Value.from_u16(5).is_u16()
        assert Value.from_f32(1.5).is_f32()

    def test_constructors_wrap(self):
        """Out-of-range integers wrap like a numeric cast."""
        assert Number.i8(300).value == 44
        assert Number.i8(128).value == -128
        assert Number.u8(-1).value == 255
        assert Number.u64(-1).value == 2**64 - 1

    def test_f32_rounds(self):
        assert Number.f32(0.1).value != 0.1
        assert str(Number.f32(0.1)) == "0.1"

    def test_from_int_picks_u64_for_large_values(self):
        assert Number.from_int(2**63).kind is NumberKind.U64
        assert Number.from_int(-1).kind is NumberKind.I64

    def test_display(self):
        """Integral floats print without a fraction; NaN and infinities by name."""
        assert str(Value.from_f64(1.0)) == "1"
        assert str(Value.from_f64(1.5)) == "1.5"
        assert str(Value.from_f64(1e-7)) == "0.0000001"
        assert str(Value.from_f64(math.nan)) == "NaN"
        assert str(Value.from_f64(math.inf)) == "inf"
        assert str(Value.from_f64(-math.inf)) == "-inf"
        assert str(Value.from_i64(-42)) == "-42"


# =============================================================================
# Equality and ordering
# =============================================================================


class TestEquality:
    @pytest.mark.parametrize("n", [-128, -1, 0, 1, 127])
    def test_widths_compare_equal(self, n):
        """Integers of different widths are equal when their values are."""
        assert Value.from_i32(n) == Value.from_i64(n)
        assert Value.from_i8(n) == Value.from_i32(n)

    def test_int_equals_float(self):
        assert Value.from_i64(1) == Value.from_f64(1.0)
        assert hash(Value.from_i64(1)) == hash(Value.from_f64(1.0))

    def test_nan_equals_nan(self):
        """Floats use total equality."""
        nan = Value.from_f64(math.nan)
        assert nan == Value.from_f64(math.nan)
        assert hash(nan) == hash(Value.from_f64(math.nan))

    def test_zero_signs_equal(self):
        assert Value.from_f64(0.0) == Value.from_f64(-0.0)

    def test_kinds_never_equal(self):
        assert Value.from_bool(True) != Value.from_i64(1)
        assert Value.null() != Value.from_str("")
        assert to_value([1, 2]) != to_value((1, 2))

    def test_structs_compare_structurally(self):
        assert to_value({"a": 1, "b": [True]}) == to_value({"b": [True], "a": 1})
        assert to_value({"a": 1}) != to_value({"a": 2})

    def test_ordering(self):
        assert Value.from_i64(1) < Value.from_f64(1.5)
        assert Value.from_str("a") < Value.from_str("b")
        assert to_value([1, 2]) < to_value([1, 3])

    def test_incomparable_values(self):
        """Comparisons across kinds are all false."""
        a, b = Value.from_str("a"), Value.from_i64(1)
        assert a.partial_cmp(b) is None
        assert not a < b
        assert not a > b
        assert not a <= b


# =============================================================================
# Accessors and display
# =============================================================================


class TestAccessors:
    def test_typed_accessors(self):
        assert Value.from_bool(True).as_bool() is True
        assert Value.from_i64(3).as_int() == 3
        assert Value.from_u8(3).as_uint() == 3
        assert Value.from_f64(2.5).as_float() == 2.5
        assert Value.from_str("hi").as_string() == "hi"

    def test_mismatch_raises(self):
        """A wrong downcast names both types."""
        with pytest.raises(TypeError, match="expected Bool, received Number"):
            Value.from_i64(1).as_bool()
        with pytest.raises(TypeError, match="expected String, received Null"):
            Value.null().as_string()

    def test_predicates(self):
        v = Value.from_u32(1)
        assert v.is_number() and v.is_uint() and v.is_integer()
        assert not v.is_int()
        assert to_value([1]).is_array()
        assert to_value((1,)).is_tuple()
        assert to_value({"a": 1}).is_struct()

    def test_len(self):
        assert len(Value.from_str("abc")) == 3
        assert len(to_value([1, 2])) == 2
        with pytest.raises(TypeError):
            len(Value.from_i64(1))

    def test_display(self):
        assert str(Value.null()) == "<null>"
        assert str(Value.from_bool(False)) == "false"
        assert str(to_value([1, "a", None])) == "[1, a, <null>]"
        assert str(to_value({"a": 1, "b": True})) == "{a: 1, b: true}"
        assert str(to_value((1, 2))) == "(1, 2)"

    def test_tuple_name(self):
        assert to_value((1, 2, 3)).as_tuple().name == "Tuple3"

    def test_get_path(self):
        value = to_value({"users": [{"name": "ada"}]})
        assert value.get("users/0/name") == Value.from_str("ada")
        assert value.get("users/1/name") is None
        assert value.get("users/0/name/x") is None
        assert value.get("") == value

    def test_truthiness(self):
        assert not truthy(Value.null())
        assert not truthy(Value.from_i64(0))
        assert not truthy(Value.from_str(""))
        assert not truthy(to_value([]))
        assert truthy(Value.from_f64(0.5))
        assert truthy(to_value({"a": None}))


class TestObjects:
    def test_objects_are_shared(self):
        """Copying a value keeps a reference to the same object."""
        array = ListArray([Value.from_i64(1)])
        a = Value.from_object(array)
        b = Value.from_object(a.as_array())
        assert b.as_array() is array

    def test_map_struct_fields(self):
        struct = MapStruct({"x": Value.from_i64(1)}, name="Point")
        assert struct.name == "Point"
        assert struct.field("x") == Value.from_i64(1)
        assert struct.field("y") is None
        assert [str(k) for k in struct.keys()] == ["x"]

    def test_containers_require_values(self):
        with pytest.raises(TypeError):
            ListArray([1])
