"""Structured validation errors."""

from __future__ import annotations

from typing import Any, Iterator

from quire.exceptions import QuireError
from quire.value import Path


class ValidError(QuireError):
    """A tree of validation failures.

    Leaf errors carry a message. Aggregates carry child errors and no
    message of their own; their ``message`` summarizes the leaves below.

    Attributes:
        rule: Name of the rule or schema that failed.
        path: Location of the failing value.
        errors: Child errors, empty for leaves.
    """

    def __init__(
        self,
        rule: str,
        path: Path | str | None = None,
        message: str | None = None,
        errors: list["ValidError"] | None = None,
    ):
        self.rule = rule
        self.path = path if isinstance(path, Path) else Path.parse(path or "")
        self._message = message
        self.errors: list[ValidError] = list(errors or [])
        super().__init__(self.message)

    @property
    def message(self) -> str | None:
        if self._message is not None:
            return self._message
        if not self.errors:
            return None
        return "; ".join(leaf._message for leaf in self.leaves() if leaf._message)

    def is_leaf(self) -> bool:
        return not self.errors

    def is_empty(self) -> bool:
        return self._message is None and not self.errors

    def leaves(self) -> Iterator["ValidError"]:
        """Depth-first walk over the errors that carry a message."""
        if self.is_leaf():
            yield self
            return
        for err in self.errors:
            yield from err.leaves()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"rule": self.rule, "path": str(self.path)}
        if self._message is not None:
            data["message"] = self._message
        if self.errors:
            data["errors"] = [err.to_dict() for err in self.errors]
        return data

    def render(self, indent: int = 0) -> str:
        pad = "  " * indent
        lines = [f"{pad}Error[{self.rule}] @ /{self.path}"]
        if self._message is not None:
            lines.append(f"{pad}  {self._message}")
        for err in self.errors:
            lines.append(err.render(indent + 1))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ValidError(rule={self.rule!r}, path={str(self.path)!r}, message={self.message!r})"


class SchemaDecodeError(QuireError):
    """Raised when a serialized schema cannot be decoded."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        self.message = message
        super().__init__(f"invalid schema: {message}")
