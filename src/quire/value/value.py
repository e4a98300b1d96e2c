"""The dynamic ``Value`` type."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Iterator, Mapping

from .ident import Ident
from .number import Number, NumberKind
from .object import Array, ListArray, MapStruct, Object, Struct, Tuple, ValueTuple, lookup
from .path import Path


class Kind(Enum):
    NULL = "Null"
    BOOL = "Bool"
    NUMBER = "Number"
    STRING = "String"
    OBJECT = "Object"


class Value:
    """A null, bool, number, string or object.

    Values are immutable. Objects are held by reference, so copying a value
    never copies the data behind it.
    """

    __slots__ = ("_kind", "_data")

    def __init__(self, kind: Kind, data: Any = None):
        self._kind = kind
        self._data = data

    # -- constructors ------------------------------------------------------

    @classmethod
    def null(cls) -> "Value":
        return _NULL

    @classmethod
    def from_bool(cls, value: bool) -> "Value":
        return _TRUE if value else _FALSE

    @classmethod
    def from_number(cls, value: Number) -> "Value":
        return cls(Kind.NUMBER, value)

    @classmethod
    def from_i8(cls, value: int) -> "Value":
        return cls.from_number(Number.i8(value))

    @classmethod
    def from_i16(cls, value: int) -> "Value":
        return cls.from_number(Number.i16(value))

    @classmethod
    def from_i32(cls, value: int) -> "Value":
        return cls.from_number(Number.i32(value))

    @classmethod
    def from_i64(cls, value: int) -> "Value":
        return cls.from_number(Number.i64(value))

    @classmethod
    def from_u8(cls, value: int) -> "Value":
        return cls.from_number(Number.u8(value))

    @classmethod
    def from_u16(cls, value: int) -> "Value":
        return cls.from_number(Number.u16(value))

    @classmethod
    def from_u32(cls, value: int) -> "Value":
        return cls.from_number(Number.u32(value))

    @classmethod
    def from_u64(cls, value: int) -> "Value":
        return cls.from_number(Number.u64(value))

    @classmethod
    def from_f32(cls, value: float) -> "Value":
        return cls.from_number(Number.f32(value))

    @classmethod
    def from_f64(cls, value: float) -> "Value":
        return cls.from_number(Number.f64(value))

    @classmethod
    def from_int(cls, value: int) -> "Value":
        return cls.from_number(Number.from_int(value))

    @classmethod
    def from_float(cls, value: float) -> "Value":
        return cls.from_number(Number.from_float(value))

    @classmethod
    def from_str(cls, value: str) -> "Value":
        return cls(Kind.STRING, value)

    from_string = from_str

    @classmethod
    def from_object(cls, obj: Object) -> "Value":
        if not isinstance(obj, (Struct, Array, Tuple)):
            raise TypeError(f"expected Struct, Array or Tuple, received {type(obj).__name__}")
        return cls(Kind.OBJECT, obj)

    @classmethod
    def from_array(cls, items: Iterable["Value"]) -> "Value":
        return cls.from_object(ListArray(items))

    @classmethod
    def from_tuple(cls, items: Iterable["Value"]) -> "Value":
        return cls.from_object(ValueTuple(items))

    @classmethod
    def from_struct(
        cls, fields: Mapping[Ident | str, "Value"] | Iterable[tuple[Ident | str, "Value"]]
    ) -> "Value":
        return cls.from_object(MapStruct(fields))

    # -- tags --------------------------------------------------------------

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def type_name(self) -> str:
        """Lowercase name of the value's type, for messages."""
        if self._kind is Kind.OBJECT:
            if isinstance(self._data, Struct):
                return "struct"
            if isinstance(self._data, Array):
                return "array"
            return "tuple"
        return self._kind.value.lower()

    def is_null(self) -> bool:
        return self._kind is Kind.NULL

    def is_bool(self) -> bool:
        return self._kind is Kind.BOOL

    def is_number(self) -> bool:
        return self._kind is Kind.NUMBER

    def is_string(self) -> bool:
        return self._kind is Kind.STRING

    is_str = is_string

    def is_object(self) -> bool:
        return self._kind is Kind.OBJECT

    def is_struct(self) -> bool:
        return isinstance(self._data, Struct)

    def is_array(self) -> bool:
        return isinstance(self._data, Array)

    def is_tuple(self) -> bool:
        return isinstance(self._data, Tuple)

    def is_int(self) -> bool:
        return self.is_number() and self._data.is_int()

    def is_uint(self) -> bool:
        return self.is_number() and self._data.is_uint()

    def is_float(self) -> bool:
        return self.is_number() and self._data.is_float()

    def is_integer(self) -> bool:
        """True for signed and unsigned integers alike."""
        return self.is_number() and self._data.is_integer()

    def _is_width(self, kind: NumberKind) -> bool:
        return self.is_number() and self._data.kind is kind

    def is_i8(self) -> bool:
        return self._is_width(NumberKind.I8)

    def is_i16(self) -> bool:
        return self._is_width(NumberKind.I16)

    def is_i32(self) -> bool:
        return self._is_width(NumberKind.I32)

    def is_i64(self) -> bool:
        return self._is_width(NumberKind.I64)

    def is_u8(self) -> bool:
        return self._is_width(NumberKind.U8)

    def is_u16(self) -> bool:
        return self._is_width(NumberKind.U16)

    def is_u32(self) -> bool:
        return self._is_width(NumberKind.U32)

    def is_u64(self) -> bool:
        return self._is_width(NumberKind.U64)

    def is_f32(self) -> bool:
        return self._is_width(NumberKind.F32)

    def is_f64(self) -> bool:
        return self._is_width(NumberKind.F64)

    # -- accessors ---------------------------------------------------------

    def _expect(self, ok: bool, expected: str) -> Any:
        if not ok:
            raise TypeError(f"expected {expected}, received {self._received()}")
        return self._data

    def _received(self) -> str:
        if self._kind is Kind.OBJECT:
            return self._data.name
        return self._kind.value

    def as_bool(self) -> bool:
        return self._expect(self.is_bool(), "Bool")

    def as_number(self) -> Number:
        return self._expect(self.is_number(), "Number")

    def as_string(self) -> str:
        return self._expect(self.is_string(), "String")

    as_str = as_string

    def as_object(self) -> Object:
        return self._expect(self.is_object(), "Object")

    def as_struct(self) -> Struct:
        return self._expect(self.is_struct(), "Struct")

    def as_array(self) -> Array:
        return self._expect(self.is_array(), "Array")

    def as_tuple(self) -> Tuple:
        return self._expect(self.is_tuple(), "Tuple")

    def as_int(self) -> int:
        return self._expect(self.is_int(), "Int").value

    def as_uint(self) -> int:
        return self._expect(self.is_uint(), "UInt").value

    def as_float(self) -> float:
        return self._expect(self.is_float(), "Float").value

    def to_bool(self) -> bool:
        return self.as_bool()

    def to_int(self) -> int:
        """Any number as a Python int; floats truncate."""
        return self.as_number().to_int()

    def to_float(self) -> float:
        return self.as_number().to_float()

    def to_str(self) -> str:
        return self.as_string()

    def get(self, path: Path | str | Iterable[Ident | str | int]) -> "Value | None":
        """Walk ``path`` through structs and sequences.

        Returns ``None`` as soon as a segment is missing or the current
        value is not an object.
        """
        if isinstance(path, str):
            path = Path.parse(path)
        elif not isinstance(path, Path):
            path = Path(path)

        current: Value | None = self
        for ident in path:
            if current is None or not current.is_object():
                return None
            current = lookup(current._data, ident)
        return current

    def __len__(self) -> int:
        if self._kind is Kind.STRING or self._kind is Kind.OBJECT:
            return len(self._data)
        raise TypeError(f"{self.type_name} has no length")

    def __iter__(self) -> Iterator[Any]:
        if self.is_array() or self.is_tuple():
            return self._data.items()
        if self.is_struct():
            return self._data.keys()
        raise TypeError(f"{self.type_name} is not iterable")

    def __bool__(self) -> bool:
        return truthy(self)

    # -- equality and ordering ---------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self._kind is not Kind.OBJECT:
            return self._data == other._data
        a, b = self._data, other._data
        if isinstance(a, Struct):
            if not isinstance(b, Struct) or len(a) != len(b):
                return False
            return all(b.field(k) == v for k, v in a.items())
        if isinstance(a, Array) != isinstance(b, Array) or isinstance(a, Tuple) != isinstance(b, Tuple):
            return False
        if len(a) != len(b):
            return False
        return all(x == y for x, y in zip(a.items(), b.items()))

    def __hash__(self) -> int:
        if self._kind is not Kind.OBJECT:
            return hash((self._kind, self._data))
        if isinstance(self._data, Struct):
            return hash((Struct, frozenset(self._data.items())))
        return hash((self.type_name, tuple(self._data.items())))

    def partial_cmp(self, other: "Value") -> int | None:
        """Three-way compare, or ``None`` when the values are incomparable."""
        if self._kind is not other._kind:
            return None
        if self._kind is Kind.NULL:
            return 0
        if self._kind is Kind.NUMBER:
            return self._data.partial_cmp(other._data)
        if self._kind in (Kind.BOOL, Kind.STRING):
            a, b = self._data, other._data
            return (a > b) - (a < b)
        if (self.is_array() and other.is_array()) or (self.is_tuple() and other.is_tuple()):
            for x, y in zip(self._data.items(), other._data.items()):
                order = x.partial_cmp(y)
                if order != 0:
                    return order
            a, b = len(self._data), len(other._data)
            return (a > b) - (a < b)
        return 0 if self == other else None

    def __lt__(self, other: "Value") -> bool:
        return self.partial_cmp(other) == -1

    def __le__(self, other: "Value") -> bool:
        return self.partial_cmp(other) in (-1, 0)

    def __gt__(self, other: "Value") -> bool:
        return self.partial_cmp(other) == 1

    def __ge__(self, other: "Value") -> bool:
        return self.partial_cmp(other) in (0, 1)

    # -- display -----------------------------------------------------------

    def __str__(self) -> str:
        if self._kind is Kind.NULL:
            return "<null>"
        if self._kind is Kind.BOOL:
            return "true" if self._data else "false"
        if self._kind is Kind.OBJECT:
            obj = self._data
            if isinstance(obj, Struct):
                return "{" + ", ".join(f"{k}: {v}" for k, v in obj.items()) + "}"
            inner = ", ".join(str(v) for v in obj.items())
            return f"[{inner}]" if isinstance(obj, Array) else f"({inner})"
        return str(self._data)

    def __repr__(self) -> str:
        if self._kind is Kind.STRING:
            return f"Value({self._data!r})"
        return f"Value({self})"


def truthy(value: Value) -> bool:
    """Null and false are falsy, numbers by non-zero, strings and objects by length."""
    kind = value.kind
    if kind is Kind.NULL:
        return False
    if kind is Kind.BOOL:
        return value.as_bool()
    if kind is Kind.NUMBER:
        return not value.as_number().is_zero()
    return len(value) > 0


_NULL = Value(Kind.NULL)
_TRUE = Value(Kind.BOOL, True)
_FALSE = Value(Kind.BOOL, False)
