"""Modulo ruffle: front end lexico del compilador Ruffle."""

__version__ = "0.1.0"

from .position import resolve_position
from .lexer import (
    LexerConfig,
    LexicalError,
    LexingError,
    LexResult,
    RuffleLexer,
    SlicedError,
    SlicedToken,
    Span,
    Token,
    expect_tokens,
    format_stream,
    lex_source,
    render_diagnostic,
)
from .facade import CompilerFacade, TokenizationResult

__all__ = [
    "CompilerFacade",
    "TokenizationResult",
    "LexerConfig",
    "LexicalError",
    "LexingError",
    "LexResult",
    "RuffleLexer",
    "SlicedError",
    "SlicedToken",
    "Span",
    "Token",
    "expect_tokens",
    "format_stream",
    "lex_source",
    "render_diagnostic",
    "resolve_position",
]
