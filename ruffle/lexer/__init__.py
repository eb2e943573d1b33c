"""Puerta de entrada del paquete lexer."""

from .core import (  # re-export principales
    LexerConfig,
    RuffleLexer,
    expect_tokens,
    format_stream,
    lex_source,
)
from .errors import LexicalError, LexingError
from .sliced import LexResult, SlicedError, SlicedToken, Span, render_diagnostic
from .tokens import Token


def demo(code: str) -> None:
    """Imprime tokens y errores para una cadena de codigo Ruffle."""
    for result in lex_source(code):
        row, col = result.position()
        kind = result.token.type if result.ok else result.error.kind
        print(f"{row:03d}:{col:03d}: {kind:<15} {result.slice()!r}")


if __name__ == "__main__":
    import sys

    sample = "let x = 42; // respuesta"
    code = sample if len(sys.argv) == 1 else open(sys.argv[1], encoding="utf-8").read()
    demo(code)
