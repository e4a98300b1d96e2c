"""Parsed templates."""

from __future__ import annotations

from typing import Any

from . import ast
from .parser import Parser
from .render import render_nodes
from .scope import Scope
from .span import Span


class Template:
    """A parsed template, reusable across renders and scopes.

    Usage:
        template = Template.parse("Hello {{ name | upper }}!")
        template.render(Scope.with_defaults({"name": "ada"}))  # Hello ADA!
    """

    def __init__(self, source: str, nodes: list[ast.Node]):
        self.source = source
        self.nodes = tuple(nodes)

    @classmethod
    def parse(cls, source: str) -> "Template":
        """Parse template source.

        Raises:
            ParseError: The source does not follow the template grammar.
        """
        return cls(source, Parser(source).parse())

    @property
    def span(self) -> Span:
        return Span(0, len(self.source), self.source)

    def render(self, scope: Scope | None = None) -> str:
        """Render against ``scope``; the first evaluation error aborts.

        Raises:
            EvalError: Wrapped in ``SpanError`` layers pointing at the source.
        """
        return render_nodes(self.nodes, scope if scope is not None else Scope())

    def __repr__(self) -> str:
        return f"Template({len(self.nodes)} nodes)"


def parse(source: str) -> Template:
    return Template.parse(source)


def render(source: str, scope: Scope | None = None, **vars: Any) -> str:
    """Parse and render in one step; keyword arguments become variables."""
    if scope is None:
        scope = Scope.with_defaults()
    if vars:
        scope = scope.child().update(vars)
    return Template.parse(source).render(scope)
