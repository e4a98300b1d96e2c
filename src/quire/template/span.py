"""Source ranges."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Span:
    """Half-open ``start..end`` offsets into the template source."""

    start: int
    end: int
    source: str = field(default="", repr=False, compare=False)

    @property
    def text(self) -> str:
        return self.source[self.start : self.end]

    def merge(self, other: "Span") -> "Span":
        return Span(min(self.start, other.start), max(self.end, other.end), self.source or other.source)

    def line_col(self) -> tuple[int, int]:
        """1-based line and column of ``start``."""
        before = self.source[: self.start]
        line = before.count("\n") + 1
        col = self.start - (before.rfind("\n") + 1) + 1
        return line, col

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"
