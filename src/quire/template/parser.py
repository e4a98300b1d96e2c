"""Recursive descent parser with Pratt-style binary expressions.

Grammar::

    template := node*
    node     := TEXT | "{{" expr "}}" | if | for | match | include
    if       := "@if" "(" expr ")" block ("@else" ("if" "(" expr ")" block | block))?
    for      := "@for" "(" IDENT "of" expr ";" "track" expr ")" block
    match    := "@match" "(" expr ")" "{" arm ("," arm)* ","? "}"
    arm      := (expr | "_") "=>" block
    include  := "@include" "(" expr ")"
    block    := "{" node* "}"
    expr     := binary ("|" IDENT (":" binary)*)*
"""

from __future__ import annotations

import logging

from quire.value import Value

from . import ast
from .errors import ParseError
from .lexer import Lexer
from .span import Span
from .tokens import Token, TokenKind

log = logging.getLogger(__name__)

_BINARY_TOKENS: dict[TokenKind, ast.BinaryOp] = {
    TokenKind.OR: ast.BinaryOp.OR,
    TokenKind.AND: ast.BinaryOp.AND,
    TokenKind.EQ: ast.BinaryOp.EQ,
    TokenKind.NE: ast.BinaryOp.NE,
    TokenKind.LT: ast.BinaryOp.LT,
    TokenKind.LE: ast.BinaryOp.LE,
    TokenKind.GT: ast.BinaryOp.GT,
    TokenKind.GE: ast.BinaryOp.GE,
    TokenKind.PLUS: ast.BinaryOp.ADD,
    TokenKind.MINUS: ast.BinaryOp.SUB,
    TokenKind.STAR: ast.BinaryOp.MUL,
    TokenKind.SLASH: ast.BinaryOp.DIV,
    TokenKind.PERCENT: ast.BinaryOp.REM,
}


class Parser:
    def __init__(self, source: str):
        self.source = source
        self.lexer = Lexer(source)

    def parse(self) -> list[ast.Node]:
        nodes = self.parse_nodes()
        token = self.lexer.next_text()
        if token.kind is not TokenKind.EOF:
            raise ParseError(f"unexpected {token}", token.span)
        log.debug("parsed template into %d node(s)", len(nodes))
        return nodes

    # -- helpers -----------------------------------------------------------

    def span_from(self, start: int) -> Span:
        return Span(start, self.lexer.pos, self.source)

    def expect(self, kind: TokenKind) -> Token:
        token = self.lexer.next_expr()
        if token.kind is kind:
            return token
        if kind is TokenKind.RBRACE and token.kind is TokenKind.INTERP_END:
            return self.lexer.split_interp_end(token)
        raise ParseError(f"expected '{kind.value}', found {token}", token.span)

    def expect_ident(self, name: str | None = None) -> Token:
        token = self.lexer.next_expr()
        if not token.is_ident(name):
            expected = f"'{name}'" if name else "identifier"
            raise ParseError(f"expected {expected}, found {token}", token.span)
        return token

    def accept(self, kind: TokenKind) -> Token | None:
        token = self.lexer.peek_expr()
        if token.kind is kind:
            return self.lexer.next_expr()
        if kind is TokenKind.RBRACE and token.kind is TokenKind.INTERP_END:
            self.lexer.skip_whitespace()
            return self.lexer.split_interp_end(self.lexer.next_expr())
        return None

    # -- nodes -------------------------------------------------------------

    def parse_nodes(self) -> list[ast.Node]:
        """Parse nodes until end of input or the ``}`` closing the current block."""
        nodes: list[ast.Node] = []
        while True:
            token = self.lexer.peek_text()
            if token.kind in (TokenKind.EOF, TokenKind.CLOSE_BRACE):
                return nodes
            nodes.append(self.parse_node())

    def parse_node(self) -> ast.Node:
        token = self.lexer.next_text()
        kind = token.kind
        if kind is TokenKind.TEXT:
            return ast.TextNode(token.span, token.value)
        if kind is TokenKind.INTERP_START:
            expr = self.parse_expr()
            self.expect(TokenKind.INTERP_END)
            return ast.InterpNode(self.span_from(token.span.start), expr)
        if kind is TokenKind.AT_IF:
            return self.parse_if(token)
        if kind is TokenKind.AT_FOR:
            return self.parse_for(token)
        if kind is TokenKind.AT_MATCH:
            return self.parse_match(token)
        if kind is TokenKind.AT_INCLUDE:
            return self.parse_include(token)
        raise ParseError(f"unexpected {token}", token.span)

    def parse_block(self) -> tuple[ast.Node, ...]:
        open_brace = self.expect(TokenKind.LBRACE)
        self.lexer.depth += 1
        nodes = self.parse_nodes()
        token = self.lexer.next_text()
        if token.kind is not TokenKind.CLOSE_BRACE:
            raise ParseError("unclosed block", open_brace.span.merge(token.span))
        self.lexer.depth -= 1
        return tuple(nodes)

    def parse_condition(self) -> ast.Expr:
        self.expect(TokenKind.LPAREN)
        expr = self.parse_expr()
        self.expect(TokenKind.RPAREN)
        return expr

    def parse_if(self, at: Token) -> ast.IfNode:
        branches: list[ast.IfBranch] = []
        else_body: tuple[ast.Node, ...] | None = None

        start = at.span.start
        while True:
            cond = self.parse_condition()
            body = self.parse_block()
            branches.append(ast.IfBranch(cond, body, self.span_from(start)))

            if not self.lexer.starts_with_at_keyword(TokenKind.AT_ELSE):
                break
            self.lexer.skip_whitespace()
            self.lexer.next_text()

            after_else = self.lexer.peek_expr()
            if after_else.is_ident("if"):
                self.lexer.next_expr()
                start = after_else.span.start
                continue
            else_body = self.parse_block()
            break

        return ast.IfNode(self.span_from(at.span.start), tuple(branches), else_body)

    def parse_for(self, at: Token) -> ast.ForNode:
        self.expect(TokenKind.LPAREN)
        binding = self.expect_ident()
        self.expect_ident("of")
        iterable = self.parse_expr()
        self.expect(TokenKind.SEMI)
        self.expect_ident("track")
        track = self.parse_expr()
        self.expect(TokenKind.RPAREN)
        body = self.parse_block()
        return ast.ForNode(self.span_from(at.span.start), binding.value, iterable, track, body)

    def parse_match(self, at: Token) -> ast.MatchNode:
        subject = self.parse_condition()
        self.expect(TokenKind.LBRACE)

        arms: list[ast.MatchArm] = []
        default: tuple[ast.Node, ...] | None = None
        while self.accept(TokenKind.RBRACE) is None:
            start = self.lexer.peek_expr().span.start
            wildcard = self.accept_wildcard()
            pattern = None if wildcard else self.parse_expr()
            self.expect(TokenKind.ARROW)
            body = self.parse_block()
            if pattern is None:
                default = body
            else:
                arms.append(ast.MatchArm(pattern, body, self.span_from(start)))
            if self.accept(TokenKind.COMMA) is None:
                self.expect(TokenKind.RBRACE)
                break

        return ast.MatchNode(self.span_from(at.span.start), subject, tuple(arms), default)

    def accept_wildcard(self) -> bool:
        if self.lexer.peek_expr().is_ident("_"):
            self.lexer.next_expr()
            return True
        return False

    def parse_include(self, at: Token) -> ast.IncludeNode:
        name = self.parse_condition()
        return ast.IncludeNode(self.span_from(at.span.start), name)

    # -- expressions -------------------------------------------------------

    def parse_expr(self) -> ast.Expr:
        expr = self.parse_binary(0)
        while self.accept(TokenKind.PIPE) is not None:
            name = self.expect_ident()
            args: list[ast.Expr] = []
            while self.accept(TokenKind.COLON) is not None:
                args.append(self.parse_binary(0))
            expr = ast.PipeExpr(
                Span(expr.span.start, self.lexer.pos, self.source), expr, name.value, tuple(args)
            )
        return expr

    def parse_binary(self, min_prec: int) -> ast.Expr:
        left = self.parse_unary()
        while True:
            op = _BINARY_TOKENS.get(self.lexer.peek_expr().kind)
            if op is None or op.precedence < min_prec:
                return left
            self.lexer.next_expr()
            right = self.parse_binary(op.precedence + 1)
            left = ast.BinaryExpr(left.span.merge(right.span), op, left, right)

    def parse_unary(self) -> ast.Expr:
        token = self.lexer.peek_expr()
        if token.kind in (TokenKind.NOT, TokenKind.MINUS):
            self.lexer.next_expr()
            operand = self.parse_unary()
            op = ast.UnaryOp.NOT if token.kind is TokenKind.NOT else ast.UnaryOp.NEG
            return ast.UnaryExpr(token.span.merge(operand.span), op, operand)
        return self.parse_postfix()

    def parse_postfix(self) -> ast.Expr:
        expr = self.parse_atom()
        while True:
            if self.accept(TokenKind.DOT) is not None:
                name = self.expect_ident()
                expr = ast.MemberExpr(expr.span.merge(name.span), expr, name.value)
            elif self.accept(TokenKind.LBRACKET) is not None:
                index = self.parse_expr()
                close = self.expect(TokenKind.RBRACKET)
                expr = ast.IndexExpr(expr.span.merge(close.span), expr, index)
            elif self.accept(TokenKind.LPAREN) is not None:
                args = self.parse_list(TokenKind.RPAREN)
                expr = ast.CallExpr(Span(expr.span.start, self.lexer.pos, self.source), expr, tuple(args))
            else:
                return expr

    def parse_list(self, close: TokenKind) -> list[ast.Expr]:
        items: list[ast.Expr] = []
        while self.accept(close) is None:
            items.append(self.parse_expr())
            if self.accept(TokenKind.COMMA) is None:
                self.expect(close)
                break
        return items

    def parse_atom(self) -> ast.Expr:
        token = self.lexer.next_expr()
        kind = token.kind

        if kind is TokenKind.INT:
            return ast.ValueExpr(token.span, Value.from_i64(token.value))
        if kind is TokenKind.FLOAT:
            return ast.ValueExpr(token.span, Value.from_f64(token.value))
        if kind is TokenKind.STRING:
            return ast.ValueExpr(token.span, Value.from_str(token.value))
        if kind is TokenKind.TRUE:
            return ast.ValueExpr(token.span, Value.from_bool(True))
        if kind is TokenKind.FALSE:
            return ast.ValueExpr(token.span, Value.from_bool(False))
        if kind is TokenKind.NULL:
            return ast.ValueExpr(token.span, Value.null())
        if kind is TokenKind.IDENT:
            return ast.IdentExpr(token.span, token.value)
        if kind is TokenKind.LPAREN:
            expr = self.parse_expr()
            self.expect(TokenKind.RPAREN)
            return expr
        if kind is TokenKind.LBRACKET:
            items = self.parse_list(TokenKind.RBRACKET)
            return ast.ArrayExpr(self.span_from(token.span.start), tuple(items))
        if kind is TokenKind.LBRACE:
            return self.parse_object(token)
        if kind is TokenKind.AT_MATCH:
            return self.parse_match_expr(token)

        raise ParseError(f"unexpected {token}", token.span)

    def parse_object(self, open_brace: Token) -> ast.ObjectExpr:
        entries: list[tuple[str, ast.Expr]] = []
        while self.accept(TokenKind.RBRACE) is None:
            key = self.lexer.next_expr()
            if key.kind not in (TokenKind.IDENT, TokenKind.STRING):
                raise ParseError(f"expected object key, found {key}", key.span)
            self.expect(TokenKind.COLON)
            entries.append((key.value, self.parse_expr()))
            if self.accept(TokenKind.COMMA) is None:
                self.expect(TokenKind.RBRACE)
                break
        return ast.ObjectExpr(self.span_from(open_brace.span.start), tuple(entries))

    def parse_match_expr(self, at: Token) -> ast.MatchExpr:
        subject = self.parse_condition()
        self.expect(TokenKind.LBRACE)

        arms: list[ast.MatchExprArm] = []
        default: ast.Expr | None = None
        while self.accept(TokenKind.RBRACE) is None:
            start = self.lexer.peek_expr().span.start
            wildcard = self.accept_wildcard()
            pattern = None if wildcard else self.parse_expr()
            self.expect(TokenKind.ARROW)
            body = self.parse_expr()
            if pattern is None:
                default = body
            else:
                arms.append(ast.MatchExprArm(pattern, body, self.span_from(start)))
            if self.accept(TokenKind.COMMA) is None:
                self.expect(TokenKind.RBRACE)
                break

        return ast.MatchExpr(self.span_from(at.span.start), subject, tuple(arms), default)


def parse(source: str) -> list[ast.Node]:
    return Parser(source).parse()
