"""Node rendering."""

from __future__ import annotations

import logging
from functools import singledispatch
from typing import Iterable

from quire.value import truthy

from . import ast
from .errors import (
    EvalError,
    IncludeDepthError,
    NotIterableError,
    SpanError,
    UndefinedTemplateError,
    ValueTypeError,
)
from .eval import eval_expr
from .scope import Scope

log = logging.getLogger(__name__)


def render_nodes(nodes: Iterable[ast.Node], scope: Scope) -> str:
    out: list[str] = []
    write_nodes(nodes, scope, out)
    return "".join(out)


def write_nodes(nodes: Iterable[ast.Node], scope: Scope, out: list[str]) -> None:
    for node in nodes:
        try:
            write(node, scope, out)
        except EvalError as err:
            raise SpanError(err, node.span) from err


@singledispatch
def write(node: ast.Node, scope: Scope, out: list[str]) -> None:
    raise TypeError(f"cannot render {type(node).__name__}")


@write.register
def _(node: ast.TextNode, scope: Scope, out: list[str]) -> None:
    out.append(node.text)


@write.register
def _(node: ast.InterpNode, scope: Scope, out: list[str]) -> None:
    out.append(str(eval_expr(node.expr, scope)))


@write.register
def _(node: ast.IfNode, scope: Scope, out: list[str]) -> None:
    for branch in node.branches:
        if truthy(eval_expr(branch.cond, scope)):
            write_nodes(branch.body, scope, out)
            return
    if node.else_body is not None:
        write_nodes(node.else_body, scope, out)


@write.register
def _(node: ast.ForNode, scope: Scope, out: list[str]) -> None:
    iterable = eval_expr(node.iterable, scope)
    if not iterable.is_array():
        raise NotIterableError()
    # the track expression only identifies items; rendering does not use it
    for item in iterable.as_array().items():
        write_nodes(node.body, scope.child().set_var(node.binding, item), out)


@write.register
def _(node: ast.MatchNode, scope: Scope, out: list[str]) -> None:
    subject = eval_expr(node.expr, scope)
    for arm in node.arms:
        if eval_expr(arm.pattern, scope) == subject:
            write_nodes(arm.body, scope, out)
            return
    if node.default is not None:
        write_nodes(node.default, scope, out)


@write.register
def _(node: ast.IncludeNode, scope: Scope, out: list[str]) -> None:
    name = eval_expr(node.name, scope)
    if not name.is_string():
        raise ValueTypeError("string", name.type_name)

    template = scope.template(name.as_string())
    if template is None:
        raise UndefinedTemplateError(name.as_string())
    if scope.depth >= scope.max_include_depth:
        raise IncludeDepthError(scope.max_include_depth)

    log.debug("including template %r at depth %d", name.as_string(), scope.depth + 1)
    write_nodes(template.nodes, scope.nested(), out)
