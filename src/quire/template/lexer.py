"""Two-mode lexer.

In text mode the lexer emits raw text, ``{{``, block-closing ``}`` and
``@`` directives. In expression mode it emits literals, identifiers,
operators and punctuation. The parser picks the mode for every token, and
tells the lexer how many blocks are open so that a ``}`` in plain text is
only treated as a block end inside a block.
"""

from __future__ import annotations

import re

from .errors import ParseError
from .span import Span
from .tokens import AT_KEYWORDS, LITERAL_KEYWORDS, OPERATORS, Token, TokenKind

I64_MAX = (1 << 63) - 1

_IDENT = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER = re.compile(r"[0-9]+(?P<frac>\.[0-9]+)?(?P<exp>[eE][+-]?[0-9]+)?")
_WHITESPACE = re.compile(r"\s*")
_AT_KEYWORD = re.compile(r"@(if|else|for|match|include)(?![A-Za-z0-9_])")

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "0": "\0",
}


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.depth = 0

    def span(self, start: int, end: int | None = None) -> Span:
        return Span(start, self.pos if end is None else end, self.source)

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    # -- text mode ---------------------------------------------------------

    def next_text(self) -> Token:
        src, start = self.source, self.pos
        if start >= len(src):
            return Token(TokenKind.EOF, self.span(start, start))

        if src.startswith("{{", start):
            self.pos += 2
            return Token(TokenKind.INTERP_START, self.span(start))

        if src[start] == "}" and self.depth > 0:
            self.pos += 1
            return Token(TokenKind.CLOSE_BRACE, self.span(start))

        match = _AT_KEYWORD.match(src, start)
        if match:
            self.pos = match.end()
            return Token(AT_KEYWORDS[match.group(1)], self.span(start))

        end = start + 1
        while end < len(src) and not self._text_stops_at(end):
            end += 1
        self.pos = end
        return Token(TokenKind.TEXT, self.span(start), src[start:end])

    def _text_stops_at(self, i: int) -> bool:
        ch = self.source[i]
        if ch == "{":
            return self.source.startswith("{{", i)
        if ch == "}":
            return self.depth > 0
        if ch == "@":
            return _AT_KEYWORD.match(self.source, i) is not None
        return False

    def peek_text(self) -> Token:
        saved = self.pos
        try:
            return self.next_text()
        finally:
            self.pos = saved

    def starts_with_at_keyword(self, kind: TokenKind) -> bool:
        """True if only whitespace separates the cursor from directive ``kind``."""
        i = _WHITESPACE.match(self.source, self.pos).end()
        match = _AT_KEYWORD.match(self.source, i)
        return match is not None and AT_KEYWORDS[match.group(1)] is kind

    def skip_whitespace(self) -> None:
        self.pos = _WHITESPACE.match(self.source, self.pos).end()

    # -- expression mode ---------------------------------------------------

    def next_expr(self) -> Token:
        self.skip_whitespace()
        src, start = self.source, self.pos
        if start >= len(src):
            return Token(TokenKind.EOF, self.span(start, start))

        ch = src[start]

        if "0" <= ch <= "9":
            return self._number()

        if ch in "'\"":
            return self._string(ch)

        match = _IDENT.match(src, start)
        if match:
            self.pos = match.end()
            word = match.group()
            literal = LITERAL_KEYWORDS.get(word)
            if literal is not None:
                return Token(literal, self.span(start))
            return Token(TokenKind.IDENT, self.span(start), word)

        if src.startswith("@match", start) and _AT_KEYWORD.match(src, start):
            self.pos += len("@match")
            return Token(TokenKind.AT_MATCH, self.span(start))

        for text, kind in OPERATORS:
            if src.startswith(text, start):
                self.pos += len(text)
                return Token(kind, self.span(start))

        raise ParseError(f"unexpected character '{ch}'", Span(start, start + 1, src))

    def peek_expr(self) -> Token:
        saved = self.pos
        try:
            return self.next_expr()
        finally:
            self.pos = saved

    def split_interp_end(self, token: Token) -> Token:
        """Reinterpret ``}}`` as a single ``}``, leaving the second for later."""
        self.pos = token.span.start + 1
        return Token(TokenKind.RBRACE, Span(token.span.start, self.pos, self.source))

    def _number(self) -> Token:
        start = self.pos
        match = _NUMBER.match(self.source, start)
        self.pos = match.end()
        text = match.group()
        if match.group("frac") or match.group("exp"):
            return Token(TokenKind.FLOAT, self.span(start), float(text))
        value = int(text)
        if value > I64_MAX:
            raise ParseError(f"integer literal '{text}' out of range", self.span(start))
        return Token(TokenKind.INT, self.span(start), value)

    def _string(self, quote: str) -> Token:
        src, start = self.source, self.pos
        i = start + 1
        chars: list[str] = []
        while i < len(src):
            ch = src[i]
            if ch == quote:
                self.pos = i + 1
                return Token(TokenKind.STRING, self.span(start), "".join(chars))
            if ch == "\\" and i + 1 < len(src):
                nxt = src[i + 1]
                chars.append(_ESCAPES.get(nxt, "\\" + nxt))
                i += 2
                continue
            chars.append(ch)
            i += 1
        raise ParseError("unterminated string literal", Span(start, len(src), src))
