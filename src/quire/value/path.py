"""Slash separated paths of identifiers, used for error locations."""

from __future__ import annotations

from typing import Iterable, Iterator

from .ident import Ident


class Path:
    """An immutable sequence of ``Ident`` segments.

    Renders as the segments joined by ``/``; the root path renders as an
    empty string.
    """

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Ident | str | int] = ()):
        self._segments: tuple[Ident, ...] = tuple(Ident.of(s) for s in segments)

    @classmethod
    def root(cls) -> "Path":
        return cls()

    @classmethod
    def parse(cls, text: str) -> "Path":
        """Parse ``a/0/b`` into ``Key(a), Index(0), Key(b)``."""
        if not text:
            return cls()
        return cls(Ident.parse(part) for part in text.strip("/").split("/") if part)

    @property
    def segments(self) -> tuple[Ident, ...]:
        return self._segments

    @property
    def last(self) -> Ident | None:
        return self._segments[-1] if self._segments else None

    def child(self, ident: Ident | str | int) -> "Path":
        return Path(self._segments + (Ident.of(ident),))

    def parent(self) -> "Path":
        return Path(self._segments[:-1])

    def is_root(self) -> bool:
        return not self._segments

    def __truediv__(self, ident: Ident | str | int) -> "Path":
        return self.child(ident)

    def __iter__(self) -> Iterator[Ident]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self._segments == other._segments
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)

    def __str__(self) -> str:
        return "/".join(str(s) for s in self._segments)

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"
