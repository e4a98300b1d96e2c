"""Embedded template language.

Text with ``{{ expr }}`` interpolations and ``@if``, ``@for``, ``@match``
and ``@include`` directives, rendered against a ``Scope``.
"""

from . import ast
from .errors import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    EvalError,
    IncludeDepthError,
    IndexOutOfBoundsError,
    InvalidIndexError,
    NotCallableError,
    NotIterableError,
    ParseError,
    SpanError,
    UndefinedFieldError,
    UndefinedPipeError,
    UndefinedTemplateError,
    UndefinedVariableError,
    ValueTypeError,
)
from .extensions import install_defaults
from .lexer import Lexer
from .parser import Parser
from .scope import CallableFunc, CallablePipe, Func, Pipe, Scope
from .span import Span
from .template import Template, parse, render
from .tokens import Token, TokenKind

__all__ = [
    "ArithmeticOverflowError",
    "CallableFunc",
    "CallablePipe",
    "DivisionByZeroError",
    "EvalError",
    "Func",
    "IncludeDepthError",
    "IndexOutOfBoundsError",
    "InvalidIndexError",
    "Lexer",
    "NotCallableError",
    "NotIterableError",
    "ParseError",
    "Parser",
    "Pipe",
    "Scope",
    "Span",
    "SpanError",
    "Template",
    "Token",
    "TokenKind",
    "UndefinedFieldError",
    "UndefinedPipeError",
    "UndefinedTemplateError",
    "UndefinedVariableError",
    "ValueTypeError",
    "ast",
    "install_defaults",
    "parse",
    "render",
]
