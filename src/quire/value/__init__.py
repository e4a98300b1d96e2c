"""Dynamic values.

A ``Value`` is null, a bool, a width-preserving ``Number``, a string or an
object (``Struct``, ``Array`` or ``Tuple``). Python data converts into
values with ``to_value`` (owned) or ``as_value`` (borrowed views).
"""

from . import derive
from .convert import AttrStruct, MappingView, SequenceView, TupleView, as_value, to_value
from .ident import Ident, Index, Key
from .number import Number, NumberKind
from .object import Array, ListArray, MapStruct, Object, Struct, Tuple, ValueTuple
from .path import Path
from .value import Kind, Value, truthy

__all__ = [
    "Array",
    "AttrStruct",
    "Ident",
    "Index",
    "Key",
    "Kind",
    "ListArray",
    "MapStruct",
    "MappingView",
    "Number",
    "NumberKind",
    "Object",
    "Path",
    "SequenceView",
    "Struct",
    "Tuple",
    "TupleView",
    "Value",
    "ValueTuple",
    "as_value",
    "derive",
    "to_value",
    "truthy",
]
