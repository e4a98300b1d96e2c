"""Lexer tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .span import Span


class TokenKind(Enum):
    # text mode
    TEXT = "text"
    INTERP_START = "{{"
    CLOSE_BRACE = "block }"
    AT_IF = "@if"
    AT_ELSE = "@else"
    AT_FOR = "@for"
    AT_MATCH = "@match"
    AT_INCLUDE = "@include"

    # expression mode
    INTERP_END = "}}"
    INT = "integer"
    FLOAT = "float"
    STRING = "string"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    IDENT = "identifier"

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    AND = "&&"
    OR = "||"
    NOT = "!"
    ARROW = "=>"

    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    DOT = "."
    COMMA = ","
    PIPE = "|"
    COLON = ":"
    SEMI = ";"

    EOF = "end of input"


AT_KEYWORDS: dict[str, TokenKind] = {
    "if": TokenKind.AT_IF,
    "else": TokenKind.AT_ELSE,
    "for": TokenKind.AT_FOR,
    "match": TokenKind.AT_MATCH,
    "include": TokenKind.AT_INCLUDE,
}

LITERAL_KEYWORDS: dict[str, TokenKind] = {
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "null": TokenKind.NULL,
}

_PUNCT = (
    TokenKind.INTERP_END,
    TokenKind.ARROW,
    TokenKind.EQ,
    TokenKind.NE,
    TokenKind.LE,
    TokenKind.GE,
    TokenKind.AND,
    TokenKind.OR,
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.STAR,
    TokenKind.SLASH,
    TokenKind.PERCENT,
    TokenKind.LT,
    TokenKind.GT,
    TokenKind.NOT,
    TokenKind.LPAREN,
    TokenKind.RPAREN,
    TokenKind.LBRACKET,
    TokenKind.RBRACKET,
    TokenKind.LBRACE,
    TokenKind.RBRACE,
    TokenKind.DOT,
    TokenKind.COMMA,
    TokenKind.PIPE,
    TokenKind.COLON,
    TokenKind.SEMI,
)

# two-character operators first so they win over their prefixes
OPERATORS: list[tuple[str, TokenKind]] = [(kind.value, kind) for kind in _PUNCT]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    span: Span
    value: Any = None

    @property
    def text(self) -> str:
        return self.span.text

    def is_ident(self, name: str | None = None) -> bool:
        if self.kind is not TokenKind.IDENT:
            return False
        return name is None or self.value == name

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return self.kind.value
        return f"'{self.text}'"
