"""Tests for conversions into values and the derive decorators."""

from dataclasses import dataclass
from typing import NamedTuple

import pytest

from quire.value import Value, as_value, derive, to_value
from quire.value.convert import MappingView, SequenceView


# =============================================================================
# Builtins
# =============================================================================


class TestToValue:
    @pytest.mark.parametrize(
        "data, accessor",
        [
            (True, "as_bool"),
            (42, "as_int"),
            (-7, "as_int"),
            (2.5, "as_float"),
            ("text", "as_string"),
        ],
    )
    def test_primitive_round_trip(self, data, accessor):
        """Primitives convert and read back unchanged."""
        assert getattr(to_value(data), accessor)() == data

    def test_widths(self):
        assert to_value(1).is_i64()
        assert to_value(2**63).is_u64()
        assert to_value(1.0).is_f64()
        assert to_value(None).is_null()

    def test_containers(self):
        """Containers keep their length and element values."""
        data = [1, "two", [3.0], {"four": None}]
        value = to_value(data)
        assert len(value) == len(data)
        assert list(value) == [to_value(item) for item in data]

    def test_tuple_and_dict(self):
        assert to_value((1, "a")).is_tuple()
        struct = to_value({"a": 1, "b": 2}).as_struct()
        assert [str(k) for k in struct.keys()] == ["a", "b"]

    def test_value_passes_through(self):
        v = Value.from_u8(3)
        assert to_value(v) is v

    def test_unordered_sets_rejected(self):
        with pytest.raises(TypeError, match="unordered"):
            to_value({1, 2})

    def test_unknown_type_rejected(self):
        with pytest.raises(TypeError, match="cannot convert"):
            to_value(object())

    def test_quire_value_hook(self):
        """Objects can describe themselves with __quire_value__."""

        class Money:
            def __init__(self, cents):
                self.cents = cents

            def __quire_value__(self):
                return {"cents": self.cents}

        assert to_value(Money(150)).get("cents") == Value.from_i64(150)


class TestAsValue:
    def test_agrees_with_to_value(self):
        data = {"a": [1, 2, {"b": (True, None)}], "c": "x"}
        assert as_value(data) == to_value(data)

    def test_views_borrow(self):
        """Views read through to the underlying container."""
        items = [1, 2]
        value = as_value(items)
        assert isinstance(value.as_array(), SequenceView)
        items.append(3)
        assert len(value) == 3
        assert value.as_array().index(2) == Value.from_i64(3)

    def test_mapping_view_lookup(self):
        value = as_value({"name": "ada"})
        assert isinstance(value.as_struct(), MappingView)
        assert value.get("name") == Value.from_str("ada")
        assert value.get("missing") is None


# =============================================================================
# Derived types
# =============================================================================


@derive.struct
@dataclass
class Point:
    x: int
    y: int


@derive.tuple
@dataclass
class Pair:
    left: str
    right: str


@derive.struct
class Size(NamedTuple):
    width: int
    height: int


@derive.enum
class Figure:
    pass


@dataclass
class Empty(Figure):
    pass


@derive.variant(tuple=True)
@dataclass
class Segment(Figure):
    start: int
    end: int


@dataclass
class Circle(Figure):
    radius: float


@derive.enum(tagged=True)
class Event:
    pass


@dataclass
class Clicked(Event):
    x: int


class TestDerive:
    def test_struct(self):
        value = to_value(Point(1, 2))
        struct = value.as_struct()
        assert struct.name == "Point"
        assert struct.type_id is Point
        assert [str(k) for k in struct.keys()] == ["x", "y"]
        assert value.get("y") == Value.from_i64(2)

    def test_struct_view(self):
        """as_value reads attributes lazily but agrees with to_value."""
        point = Point(1, 2)
        assert as_value(point) == to_value(point)
        assert as_value(point).as_struct().type_id is Point

    def test_named_tuple_struct(self):
        value = to_value(Size(3, 4))
        assert value.is_struct()
        assert value.get("height") == Value.from_i64(4)

    def test_tuple(self):
        value = to_value(Pair("a", "b"))
        assert value.is_tuple()
        assert str(value) == "(a, b)"

    def test_enum_unit_variant_is_null(self):
        assert to_value(Empty()).is_null()

    def test_enum_tuple_variant(self):
        value = to_value(Segment(1, 5))
        assert value.is_tuple()
        assert len(value) == 2

    def test_enum_named_variant(self):
        """Named variants lower flat, without a discriminator."""
        value = to_value(Circle(2.0))
        assert value.as_struct().name == "Circle"
        assert value.get("radius") == Value.from_f64(2.0)

    def test_tagged_enum(self):
        value = to_value(Clicked(3))
        assert value.get("Clicked/x") == Value.from_i64(3)

    def test_nested_derived_values(self):
        value = to_value({"points": [Point(0, 1)]})
        assert value.get("points/0/y") == Value.from_i64(1)
