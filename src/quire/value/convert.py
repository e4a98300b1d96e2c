"""Conversions from Python data into ``Value``.

``to_value`` builds an owned value, copying containers eagerly.
``as_value`` wraps containers in lazy views that convert elements on
access. Both agree: ``to_value(x) == as_value(x)`` for every supported
``x``.

New types can register with either function through
``functools.singledispatch``::

    @to_value.register
    def _(obj: Decimal) -> Value:
        return Value.from_float(float(obj))

or implement ``__quire_value__`` returning any convertible object, or use
the decorators in ``quire.value.derive``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import singledispatch
from typing import Any, Callable, Iterator

from . import derive
from .ident import Ident, Index, Key
from .number import Number
from .object import Array, ListArray, MapStruct, Struct, Tuple, ValueTuple
from .value import Value


# =============================================================================
# Lazy views
# =============================================================================


class SequenceView(Array):
    """An array over a borrowed Python sequence."""

    def __init__(self, items: Sequence[Any], name: str = "Array"):
        self._items = items
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> Iterator[Value]:
        for item in self._items:
            yield as_value(item)

    def index(self, i: int) -> Value | None:
        if 0 <= i < len(self._items):
            return as_value(self._items[i])
        return None


class TupleView(Tuple):
    """A tuple over a borrowed Python sequence."""

    def __init__(self, items: Sequence[Any]):
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> Iterator[Value]:
        for item in self._items:
            yield as_value(item)

    def index(self, i: int) -> Value | None:
        if 0 <= i < len(self._items):
            return as_value(self._items[i])
        return None


class MappingView(Struct):
    """A struct over a borrowed Python mapping."""

    def __init__(self, mapping: Mapping[Any, Any], name: str = "Struct"):
        self._mapping = mapping
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._mapping)

    def items(self) -> Iterator[tuple[Ident, Value]]:
        for key, item in self._mapping.items():
            yield Ident.of(key), as_value(item)

    def field(self, ident: Ident | str) -> Value | None:
        key = _raw(ident)
        if key not in self._mapping:
            return None
        return as_value(self._mapping[key])


class AttrStruct(Struct):
    """A struct over the attributes of a derived object."""

    def __init__(self, obj: Any, names: list[str], name: str):
        self._obj = obj
        self._names = names
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def type_id(self) -> Any:
        return type(self._obj)

    def __len__(self) -> int:
        return len(self._names)

    def items(self) -> Iterator[tuple[Ident, Value]]:
        for name in self._names:
            yield Key(name), as_value(getattr(self._obj, name))

    def field(self, ident: Ident | str) -> Value | None:
        key = str(ident) if isinstance(ident, Key) else ident
        if not isinstance(key, str) or key not in self._names:
            return None
        return as_value(getattr(self._obj, key))


def _raw(ident: Ident | str) -> str | int:
    if isinstance(ident, Key):
        return ident.name
    if isinstance(ident, Index):
        return ident.index
    return ident


# =============================================================================
# Owned conversion
# =============================================================================


@singledispatch
def to_value(obj: Any) -> Value:
    """Convert ``obj`` into an owned ``Value``.

    Raises:
        TypeError: ``obj`` has no conversion.
    """
    return _fallback(obj, to_value, owned=True)


@to_value.register(type(None))
def _(obj: None) -> Value:
    return Value.null()


@to_value.register
def _(obj: Value) -> Value:
    return obj


@to_value.register
def _(obj: bool) -> Value:
    return Value.from_bool(obj)


@to_value.register
def _(obj: int) -> Value:
    return Value.from_int(obj)


@to_value.register
def _(obj: float) -> Value:
    return Value.from_float(obj)


@to_value.register
def _(obj: Number) -> Value:
    return Value.from_number(obj)


@to_value.register
def _(obj: str) -> Value:
    return Value.from_str(obj)


@to_value.register(Struct)
@to_value.register(Array)
@to_value.register(Tuple)
def _(obj: Any) -> Value:
    return Value.from_object(obj)


@to_value.register
def _(obj: list) -> Value:
    return Value.from_object(ListArray(to_value(item) for item in obj))


@to_value.register
def _(obj: tuple) -> Value:
    if derive.shape_of(obj) is not None or hasattr(obj, "__quire_value__"):
        return _fallback(obj, to_value, owned=True)
    return Value.from_object(ValueTuple(to_value(item) for item in obj))


@to_value.register
def _(obj: Mapping) -> Value:
    return Value.from_object(MapStruct((Ident.of(k), to_value(v)) for k, v in obj.items()))


@to_value.register(set)
@to_value.register(frozenset)
def _(obj: Any) -> Value:
    raise TypeError(f"cannot convert unordered {type(obj).__name__} to a value")


# =============================================================================
# Borrowed conversion
# =============================================================================


@singledispatch
def as_value(obj: Any) -> Value:
    """Convert ``obj`` into a ``Value`` that views it without copying."""
    return _fallback(obj, as_value, owned=False)


as_value.register(type(None), to_value.dispatch(type(None)))
as_value.register(Value, to_value.dispatch(Value))
as_value.register(bool, to_value.dispatch(bool))
as_value.register(int, to_value.dispatch(int))
as_value.register(float, to_value.dispatch(float))
as_value.register(Number, to_value.dispatch(Number))
as_value.register(str, to_value.dispatch(str))
as_value.register(Struct, to_value.dispatch(Struct))
as_value.register(Array, to_value.dispatch(Array))
as_value.register(Tuple, to_value.dispatch(Tuple))
as_value.register(set, to_value.dispatch(set))
as_value.register(frozenset, to_value.dispatch(frozenset))


@as_value.register
def _(obj: list) -> Value:
    return Value.from_object(SequenceView(obj))


@as_value.register
def _(obj: tuple) -> Value:
    if derive.shape_of(obj) is not None or hasattr(obj, "__quire_value__"):
        return _fallback(obj, as_value, owned=False)
    return Value.from_object(TupleView(obj))


@as_value.register
def _(obj: Mapping) -> Value:
    return Value.from_object(MappingView(obj))


# =============================================================================
# Derived and custom types
# =============================================================================


def _fallback(obj: Any, convert: Callable[[Any], Value], owned: bool) -> Value:
    hook = getattr(obj, "__quire_value__", None)
    if hook is not None:
        return convert(hook())

    shape = derive.shape_of(obj)
    if shape is None:
        raise TypeError(f"cannot convert {type(obj).__name__} to a value")

    if shape is derive.Shape.STRUCT:
        return _lower_struct(obj, derive.type_name(obj), owned)
    if shape is derive.Shape.TUPLE:
        return _lower_tuple(obj, owned)

    lowered = _lower_variant(obj, owned)
    if derive.is_tagged(obj):
        return Value.from_object(MapStruct({derive.type_name(obj): lowered}))
    return lowered


def _lower_struct(obj: Any, name: str, owned: bool) -> Value:
    names = derive.field_names(obj)
    if owned:
        return Value.from_object(
            MapStruct(
                ((n, to_value(getattr(obj, n))) for n in names),
                name=name,
                type_id=type(obj),
            )
        )
    return Value.from_object(AttrStruct(obj, names, name))


def _lower_tuple(obj: Any, owned: bool) -> Value:
    items = [getattr(obj, n) for n in derive.field_names(obj)]
    if owned:
        return Value.from_object(ValueTuple(to_value(item) for item in items))
    return Value.from_object(TupleView(items))


def _lower_variant(obj: Any, owned: bool) -> Value:
    names = derive.field_names(obj)
    if not names:
        return Value.null()
    if derive.is_tuple_variant(obj):
        return _lower_tuple(obj, owned)
    return _lower_struct(obj, derive.type_name(obj), owned)
