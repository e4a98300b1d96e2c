"""Tests for the template parser."""

import pytest

from quire.template import ParseError, ast
from quire.template.parser import Parser, parse


def expr_of(source):
    """Parse ``{{ source }}`` and return its expression."""
    (node,) = Parser("{{ " + source + " }}").parse()
    assert isinstance(node, ast.InterpNode)
    return node.expr


# =============================================================================
# Expressions
# =============================================================================


class TestExpressions:
    def test_precedence(self):
        """* binds tighter than +."""
        expr = expr_of("a + b * c")
        assert expr.op is ast.BinaryOp.ADD
        assert isinstance(expr.left, ast.IdentExpr)
        assert expr.right.op is ast.BinaryOp.MUL

    def test_left_associative(self):
        expr = expr_of("1 - 2 - 3")
        assert expr.op is ast.BinaryOp.SUB
        assert expr.left.op is ast.BinaryOp.SUB
        assert isinstance(expr.right, ast.ValueExpr)

    def test_logical_precedence(self):
        expr = expr_of("a || b && c == d")
        assert expr.op is ast.BinaryOp.OR
        assert expr.right.op is ast.BinaryOp.AND
        assert expr.right.right.op is ast.BinaryOp.EQ

    def test_parentheses(self):
        expr = expr_of("(a + b) * c")
        assert expr.op is ast.BinaryOp.MUL
        assert expr.left.op is ast.BinaryOp.ADD

    def test_unary(self):
        expr = expr_of("!-a.b")
        assert expr.op is ast.UnaryOp.NOT
        assert expr.operand.op is ast.UnaryOp.NEG
        assert isinstance(expr.operand.operand, ast.MemberExpr)

    def test_postfix_chain(self):
        expr = expr_of("users[0].name")
        assert isinstance(expr, ast.MemberExpr)
        assert expr.name == "name"
        assert isinstance(expr.object, ast.IndexExpr)

    def test_call(self):
        expr = expr_of("range(1, 3,)")
        assert isinstance(expr, ast.CallExpr)
        assert expr.callee.name == "range"
        assert len(expr.args) == 2

    def test_pipes(self):
        """Pipes chain left to right and take colon-separated arguments."""
        expr = expr_of("name | upper | default: 'x' : 1 + 1")
        assert isinstance(expr, ast.PipeExpr)
        assert expr.name == "default"
        assert len(expr.args) == 2
        assert expr.args[1].op is ast.BinaryOp.ADD
        assert expr.value.name == "upper"

    def test_literals(self):
        expr = expr_of("[1, 'two', 3.5, true, null]")
        assert isinstance(expr, ast.ArrayExpr)
        assert [str(item.value) for item in expr.items] == ["1", "two", "3.5", "true", "<null>"]

    def test_object_literal(self):
        expr = expr_of("{a: 1, 'b c': 2}.a")
        assert isinstance(expr, ast.MemberExpr)
        assert [key for key, _ in expr.object.entries] == ["a", "b c"]

    def test_nested_object_closed_by_interp_end(self):
        """The }} after a nested literal closes the inner object first."""
        (node,) = parse("{{ {a: {b: 1}} }}")
        outer = node.expr
        assert isinstance(outer, ast.ObjectExpr)
        assert isinstance(outer.entries[0][1], ast.ObjectExpr)

    def test_match_expression(self):
        expr = expr_of("@match (x) { 1 => 'one', _ => 'many' }")
        assert isinstance(expr, ast.MatchExpr)
        assert len(expr.arms) == 1
        assert expr.default is not None

    def test_spans(self):
        source = "{{ a + b }}"
        (node,) = parse(source)
        assert (node.span.start, node.span.end) == (0, len(source))
        assert node.expr.span.text == "a + b"


# =============================================================================
# Directives
# =============================================================================


class TestDirectives:
    def test_text_and_interp(self):
        nodes = parse("Hello {{ name }}!")
        assert [type(n) for n in nodes] == [ast.TextNode, ast.InterpNode, ast.TextNode]
        assert nodes[0].text == "Hello "

    def test_if_else_chain(self):
        (node,) = parse("@if (a) {A} @else if (b) {B} @else {C}")
        assert isinstance(node, ast.IfNode)
        assert len(node.branches) == 2
        assert node.else_body[0].text == "C"

    def test_if_without_else_keeps_trailing_text(self):
        nodes = parse("@if (a) {A} tail")
        assert nodes[0].else_body is None
        assert nodes[1].text == " tail"

    def test_for(self):
        (node,) = parse("@for (item of items; track item.id) {{{ item }}}")
        assert isinstance(node, ast.ForNode)
        assert node.binding == "item"
        assert isinstance(node.track, ast.MemberExpr)
        assert isinstance(node.body[0], ast.InterpNode)

    def test_match_with_trailing_comma(self):
        (node,) = parse("@match (x) { 1 => {one}, 'a' => {a}, _ => {other}, }")
        assert isinstance(node, ast.MatchNode)
        assert len(node.arms) == 2
        assert node.default[0].text == "other"

    def test_include(self):
        (node,) = parse("@include('header')")
        assert isinstance(node, ast.IncludeNode)
        assert str(node.name.value) == "header"

    def test_nested_blocks(self):
        (node,) = parse("@if (a) {@for (x of xs; track x) {{{ x }}}}")
        (inner,) = node.branches[0].body
        assert isinstance(inner, ast.ForNode)


# =============================================================================
# Errors
# =============================================================================


class TestErrors:
    def test_unclosed_block(self):
        with pytest.raises(ParseError, match="unclosed block"):
            parse("@if (a) {open")

    def test_missing_interp_end(self):
        with pytest.raises(ParseError, match="expected '}}', found end of input"):
            parse("{{ a")

    def test_stray_else(self):
        with pytest.raises(ParseError, match="unexpected '@else'"):
            parse("@else {x}")

    def test_for_requires_track(self):
        with pytest.raises(ParseError, match="expected 'track'"):
            parse("@for (x of xs; x) {}")

    def test_error_location(self):
        with pytest.raises(ParseError) as exc:
            parse("line one\n{{ # }}")
        assert exc.value.location() == "line 2, column 4"
        assert str(exc.value) == "parse error at 12..13: unexpected character '#'"
