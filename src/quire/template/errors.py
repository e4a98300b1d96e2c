"""Template Exceptions

Parse errors carry the span of the offending token. Evaluation errors are
leaf errors with a stable ``kind`` name, wrapped in ``SpanError`` layers
as they propagate out of expressions and nodes.
"""

from __future__ import annotations

from typing import ClassVar

from quire.exceptions import QuireError

from .span import Span


class ParseError(QuireError):
    """Raised when template source does not follow the grammar."""

    def __init__(self, message: str, span: Span):
        self.message = message
        self.span = span
        super().__init__(f"parse error at {span}: {message}")

    def location(self) -> str:
        line, col = self.span.line_col()
        return f"line {line}, column {col}"


class EvalError(QuireError):
    """Base exception for all template evaluation errors."""

    kind: ClassVar[str] = "EvalError"

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def inner(self) -> "EvalError":
        """The leaf error, with every span layer removed."""
        return self


class UndefinedVariableError(EvalError):
    kind = "UndefinedVariable"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined variable '{name}'")


class UndefinedPipeError(EvalError):
    kind = "UndefinedPipe"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined pipe '{name}'")


class UndefinedFieldError(EvalError):
    kind = "UndefinedField"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined field '{name}'")


class UndefinedTemplateError(EvalError):
    kind = "UndefinedTemplate"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined template '{name}'")


class IndexOutOfBoundsError(EvalError):
    kind = "IndexOutOfBounds"

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"index {index} out of bounds (len {length})")


class ValueTypeError(EvalError):
    """An operand had the wrong type."""

    kind = "TypeError"

    def __init__(self, expected: str, got: str):
        self.expected = expected
        self.got = got
        super().__init__(f"expected {expected}, got {got}")


class DivisionByZeroError(EvalError):
    kind = "DivisionByZero"

    def __init__(self):
        super().__init__("division by zero")


class ArithmeticOverflowError(EvalError):
    kind = "Overflow"

    def __init__(self):
        super().__init__("integer overflow")


class NotCallableError(EvalError):
    kind = "NotCallable"

    def __init__(self):
        super().__init__("value is not callable")


class NotIterableError(EvalError):
    kind = "NotIterable"

    def __init__(self):
        super().__init__("value is not iterable")


class InvalidIndexError(EvalError):
    kind = "InvalidIndex"

    def __init__(self):
        super().__init__("index expression must evaluate to an integer")


class IncludeDepthError(EvalError):
    kind = "IncludeDepth"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__("maximum include depth exceeded")


class SpanError(EvalError):
    """An evaluation error tagged with the source range it came from.

    Spans nest: the innermost failing expression wraps the leaf, and each
    enclosing node wraps again. ``span`` is the outermost range and the
    message is the leaf's.
    """

    kind = "Span"

    def __init__(self, error: EvalError, span: Span):
        self.error = error
        self.span = span
        super().__init__(f"eval error at {span}: {error.inner().message}")

    @property
    def message(self) -> str:
        return self.inner().message

    def inner(self) -> EvalError:
        return self.error.inner()

    def spans(self) -> list[Span]:
        """Every span layer, outermost first."""
        result = [self.span]
        err = self.error
        while isinstance(err, SpanError):
            result.append(err.span)
            err = err.error
        return result
