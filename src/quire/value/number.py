"""Width-preserving numbers.

A ``Number`` remembers the width it was built with (``i8`` .. ``u64``,
``f32``, ``f64``). Integers of different widths compare exactly; as soon as
a float is involved both sides are compared as ``f64``. Floats use a total
equality where ``NaN == NaN``.
"""

from __future__ import annotations

import math
import struct
from decimal import Decimal
from enum import Enum


class NumberKind(Enum):
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"

    @property
    def bits(self) -> int:
        return int(self.value[1:])

    @property
    def is_int(self) -> bool:
        return self.value[0] == "i"

    @property
    def is_uint(self) -> bool:
        return self.value[0] == "u"

    @property
    def is_float(self) -> bool:
        return self.value[0] == "f"

    @property
    def is_integer(self) -> bool:
        return not self.is_float

    @property
    def min(self) -> int | float:
        if self.is_float:
            return -math.inf
        if self.is_uint:
            return 0
        return -(1 << (self.bits - 1))

    @property
    def max(self) -> int | float:
        if self.is_float:
            return math.inf
        if self.is_uint:
            return (1 << self.bits) - 1
        return (1 << (self.bits - 1)) - 1


I64_MIN = NumberKind.I64.min
I64_MAX = NumberKind.I64.max
U64_MAX = NumberKind.U64.max

_NAN_HASH = hash("NaN")


def _wrap(value: int, kind: NumberKind) -> int:
    """Wrap an integer into ``kind`` the way a numeric cast truncates."""
    mask = (1 << kind.bits) - 1
    value &= mask
    if kind.is_int and value > kind.max:
        value -= 1 << kind.bits
    return value


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _plain(text: str) -> str:
    # 1e-07 -> 0.0000001
    if "e" in text or "E" in text:
        return format(Decimal(text), "f")
    return text


def _format_float(value: float, kind: NumberKind) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    if kind is NumberKind.F32:
        for precision in range(1, 10):
            text = f"{value:.{precision}g}"
            if _to_f32(float(text)) == value:
                return _plain(text)
    return _plain(repr(value))


class Number:
    """An integer or float together with the width it was built with."""

    __slots__ = ("_kind", "_value")

    def __init__(self, value: int | float, kind: NumberKind):
        if kind.is_float:
            value = float(value)
            if kind is NumberKind.F32:
                value = _to_f32(value)
        else:
            if isinstance(value, float):
                value = math.trunc(value) if math.isfinite(value) else 0
            value = _wrap(int(value), kind)
        self._kind = kind
        self._value = value

    # -- constructors ------------------------------------------------------

    @classmethod
    def i8(cls, value: int) -> "Number":
        return cls(value, NumberKind.I8)

    @classmethod
    def i16(cls, value: int) -> "Number":
        return cls(value, NumberKind.I16)

    @classmethod
    def i32(cls, value: int) -> "Number":
        return cls(value, NumberKind.I32)

    @classmethod
    def i64(cls, value: int) -> "Number":
        return cls(value, NumberKind.I64)

    @classmethod
    def u8(cls, value: int) -> "Number":
        return cls(value, NumberKind.U8)

    @classmethod
    def u16(cls, value: int) -> "Number":
        return cls(value, NumberKind.U16)

    @classmethod
    def u32(cls, value: int) -> "Number":
        return cls(value, NumberKind.U32)

    @classmethod
    def u64(cls, value: int) -> "Number":
        return cls(value, NumberKind.U64)

    @classmethod
    def f32(cls, value: float) -> "Number":
        return cls(value, NumberKind.F32)

    @classmethod
    def f64(cls, value: float) -> "Number":
        return cls(value, NumberKind.F64)

    @classmethod
    def from_int(cls, value: int) -> "Number":
        """Pick ``i64``, or ``u64`` for values only that width can hold."""
        if I64_MAX < value <= U64_MAX:
            return cls.u64(value)
        return cls.i64(value)

    @classmethod
    def from_float(cls, value: float) -> "Number":
        return cls.f64(value)

    @classmethod
    def of(cls, value: "int | float | Number") -> "Number":
        if isinstance(value, Number):
            return value
        if isinstance(value, bool):
            raise TypeError("bool is not a number")
        if isinstance(value, int):
            return cls.from_int(value)
        if isinstance(value, float):
            return cls.from_float(value)
        raise TypeError(f"expected a number, received {type(value).__name__}")

    # -- accessors ---------------------------------------------------------

    @property
    def kind(self) -> NumberKind:
        return self._kind

    @property
    def value(self) -> int | float:
        return self._value

    def is_int(self) -> bool:
        return self._kind.is_int

    def is_uint(self) -> bool:
        return self._kind.is_uint

    def is_float(self) -> bool:
        return self._kind.is_float

    def is_integer(self) -> bool:
        return self._kind.is_integer

    def is_nan(self) -> bool:
        return self._kind.is_float and math.isnan(self._value)

    def is_zero(self) -> bool:
        return self._value == 0

    def to_float(self) -> float:
        return float(self._value)

    def to_int(self) -> int:
        """The integer value; floats are truncated toward zero."""
        if self._kind.is_float:
            if not math.isfinite(self._value):
                raise ValueError(f"cannot convert {self} to an integer")
            return math.trunc(self._value)
        return self._value

    # -- comparison --------------------------------------------------------

    def partial_cmp(self, other: "Number") -> int | None:
        """Three-way compare; ``None`` when a NaN is involved."""
        if self._kind.is_integer and other._kind.is_integer:
            a, b = self._value, other._value
        else:
            a, b = float(self._value), float(other._value)
            if math.isnan(a) or math.isnan(b):
                return 0 if math.isnan(a) and math.isnan(b) else None
        return (a > b) - (a < b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        if self._kind.is_integer and other._kind.is_integer:
            return self._value == other._value
        a, b = float(self._value), float(other._value)
        if math.isnan(a) or math.isnan(b):
            return math.isnan(a) and math.isnan(b)
        return a == b

    def __hash__(self) -> int:
        if self.is_nan():
            return _NAN_HASH
        return hash(float(self._value))

    def __lt__(self, other: "Number") -> bool:
        return self.partial_cmp(other) == -1

    def __le__(self, other: "Number") -> bool:
        return self.partial_cmp(other) in (-1, 0)

    def __gt__(self, other: "Number") -> bool:
        return self.partial_cmp(other) == 1

    def __ge__(self, other: "Number") -> bool:
        return self.partial_cmp(other) in (0, 1)

    # -- display -----------------------------------------------------------

    def __str__(self) -> str:
        if self._kind.is_float:
            return _format_float(self._value, self._kind)
        return str(self._value)

    def __repr__(self) -> str:
        return f"Number.{self._kind.value}({self._value!r})"
