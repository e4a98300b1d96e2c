"""Object capabilities: structs, arrays and tuples.

User types plug into the value model by implementing one of the abstract
bases below. Values hold objects by reference and never copy them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping

from .ident import Ident, Index, Key

if TYPE_CHECKING:
    from .value import Value


class Object(ABC):
    """Common surface of every object kind."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Type name, used in display and error messages."""

    @property
    def type_id(self) -> Any:
        """Identity of the underlying type."""
        return type(self)

    @abstractmethod
    def __len__(self) -> int: ...

    def is_empty(self) -> bool:
        return len(self) == 0


class Struct(Object):
    """Named fields in a stable order."""

    @abstractmethod
    def items(self) -> Iterator[tuple[Ident, "Value"]]: ...

    @abstractmethod
    def field(self, ident: Ident | str) -> "Value | None": ...

    def keys(self) -> Iterator[Ident]:
        for ident, _ in self.items():
            yield ident

    def values(self) -> Iterator["Value"]:
        for _, value in self.items():
            yield value

    def __contains__(self, ident: object) -> bool:
        if not isinstance(ident, (Ident, str)):
            return False
        return self.field(ident) is not None


class _Indexed(Object):
    @abstractmethod
    def items(self) -> Iterator["Value"]: ...

    @abstractmethod
    def index(self, i: int) -> "Value | None": ...

    def __iter__(self) -> Iterator["Value"]:
        return self.items()


class Array(_Indexed):
    """An ordered, homogeneous-by-convention sequence of values."""


class Tuple(_Indexed):
    """A fixed-length heterogeneous sequence of values."""

    @property
    def name(self) -> str:
        return f"Tuple{len(self)}"


# -- built-in implementations ---------------------------------------------


class MapStruct(Struct):
    """A struct backed by an insertion-ordered mapping."""

    __slots__ = ("_fields", "_name", "_type_id")

    def __init__(
        self,
        fields: Mapping[Ident | str, "Value"] | Iterable[tuple[Ident | str, "Value"]] = (),
        name: str = "Struct",
        type_id: Any = None,
    ):
        pairs = fields.items() if isinstance(fields, Mapping) else fields
        self._fields: dict[Ident, Value] = {}
        for key, value in pairs:
            self._fields[Ident.of(key)] = _check(value)
        self._name = name
        self._type_id = type_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def type_id(self) -> Any:
        return self._type_id if self._type_id is not None else type(self)

    def __len__(self) -> int:
        return len(self._fields)

    def items(self) -> Iterator[tuple[Ident, "Value"]]:
        return iter(self._fields.items())

    def field(self, ident: Ident | str) -> "Value | None":
        if isinstance(ident, str):
            ident = Key(ident)
        return self._fields.get(ident)


class ListArray(Array):
    """An array backed by a tuple of values."""

    __slots__ = ("_items", "_name")

    def __init__(self, items: Iterable["Value"] = (), name: str = "Array"):
        self._items: tuple[Value, ...] = tuple(_check(v) for v in items)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> Iterator["Value"]:
        return iter(self._items)

    def index(self, i: int) -> "Value | None":
        if 0 <= i < len(self._items):
            return self._items[i]
        return None


class ValueTuple(Tuple):
    """A tuple backed by a tuple of values."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable["Value"] = ()):
        self._items: tuple[Value, ...] = tuple(_check(v) for v in items)

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> Iterator["Value"]:
        return iter(self._items)

    def index(self, i: int) -> "Value | None":
        if 0 <= i < len(self._items):
            return self._items[i]
        return None


def _check(value: Any) -> "Value":
    from .value import Value

    if not isinstance(value, Value):
        raise TypeError(f"expected Value, received {type(value).__name__}")
    return value


def lookup(obj: Object, ident: Ident) -> "Value | None":
    """Resolve one path segment against an object."""
    if isinstance(obj, Struct):
        return obj.field(ident)
    if isinstance(obj, _Indexed) and isinstance(ident, Index):
        return obj.index(ident.index)
    return None
