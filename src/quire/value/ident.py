"""Identifiers addressing a field of a struct or an element of a sequence."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Ident:
    """A struct key or a sequence index.

    ``Key`` and ``Index`` never compare equal, even when they print the
    same: ``Key("0") != Index(0)``.
    """

    @classmethod
    def parse(cls, text: str) -> "Ident":
        """Parse a path segment: purely numeric text is an index."""
        if text.isdigit() and text.isascii():
            return Index(int(text))
        return Key(text)

    @classmethod
    def of(cls, item: "Ident | str | int") -> "Ident":
        if isinstance(item, Ident):
            return item
        if isinstance(item, bool):
            raise TypeError(f"cannot build an ident from {item!r}")
        if isinstance(item, int):
            return Index(item)
        if isinstance(item, str):
            return Key(item)
        raise TypeError(f"cannot build an ident from {type(item).__name__}")

    def is_key(self) -> bool:
        return isinstance(self, Key)

    def is_index(self) -> bool:
        return isinstance(self, Index)


@dataclass(frozen=True)
class Key(Ident):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index(Ident):
    index: int

    def __str__(self) -> str:
        return str(self.index)
