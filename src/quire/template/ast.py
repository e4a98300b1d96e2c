"""Template syntax tree.

Every node and expression records the ``Span`` of source it was parsed
from; evaluation errors are reported against these spans.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from quire.value import Value

from .span import Span


class BinaryOp(Enum):
    OR = ("||", 1)
    AND = ("&&", 3)
    EQ = ("==", 5)
    NE = ("!=", 5)
    LT = ("<", 7)
    LE = ("<=", 7)
    GT = (">", 7)
    GE = (">=", 7)
    ADD = ("+", 9)
    SUB = ("-", 9)
    MUL = ("*", 11)
    DIV = ("/", 11)
    REM = ("%", 11)

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def precedence(self) -> int:
        return self.value[1]


class UnaryOp(Enum):
    NOT = "!"
    NEG = "-"

    @property
    def symbol(self) -> str:
        return self.value


# =============================================================================
# Expressions
# =============================================================================


@dataclass(frozen=True)
class Expr:
    span: Span


@dataclass(frozen=True)
class ValueExpr(Expr):
    value: Value


@dataclass(frozen=True)
class IdentExpr(Expr):
    name: str


@dataclass(frozen=True)
class MemberExpr(Expr):
    object: Expr
    name: str


@dataclass(frozen=True)
class IndexExpr(Expr):
    object: Expr
    index: Expr


@dataclass(frozen=True)
class CallExpr(Expr):
    callee: Expr
    args: tuple[Expr, ...]


@dataclass(frozen=True)
class PipeExpr(Expr):
    value: Expr
    name: str
    args: tuple[Expr, ...]


@dataclass(frozen=True)
class BinaryExpr(Expr):
    op: BinaryOp
    left: Expr
    right: Expr


@dataclass(frozen=True)
class UnaryExpr(Expr):
    op: UnaryOp
    operand: Expr


@dataclass(frozen=True)
class ArrayExpr(Expr):
    items: tuple[Expr, ...]


@dataclass(frozen=True)
class ObjectExpr(Expr):
    entries: tuple[tuple[str, Expr], ...]


@dataclass(frozen=True)
class MatchExprArm:
    pattern: Expr
    body: Expr
    span: Span


@dataclass(frozen=True)
class MatchExpr(Expr):
    expr: Expr
    arms: tuple[MatchExprArm, ...]
    default: Expr | None = None


# =============================================================================
# Nodes
# =============================================================================


@dataclass(frozen=True)
class Node:
    span: Span


@dataclass(frozen=True)
class TextNode(Node):
    text: str


@dataclass(frozen=True)
class InterpNode(Node):
    expr: Expr


@dataclass(frozen=True)
class IfBranch:
    cond: Expr
    body: tuple[Node, ...]
    span: Span


@dataclass(frozen=True)
class IfNode(Node):
    branches: tuple[IfBranch, ...]
    else_body: tuple[Node, ...] | None = None


@dataclass(frozen=True)
class ForNode(Node):
    binding: str
    iterable: Expr
    track: Expr
    body: tuple[Node, ...]


@dataclass(frozen=True)
class MatchArm:
    pattern: Expr
    body: tuple[Node, ...]
    span: Span


@dataclass(frozen=True)
class MatchNode(Node):
    expr: Expr
    arms: tuple[MatchArm, ...]
    default: tuple[Node, ...] | None = None


@dataclass(frozen=True)
class IncludeNode(Node):
    name: Expr
